"""Payload size calculation utilities.

This module provides functions to calculate bit and glyph budgets without
actually encoding anything.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable, Sequence, Union

from ..codec.alphabet import DEFAULT_ALPHABET, Alphabet
from ..codec.base_n import digits_for_bits
from ..codec.schema import Composite, Leaf, RecordSchema
from ..codec.selector import FormatTag, select_format
from ..config import DEFAULT_CONFIG, CodecConfig

WidthSource = Union[RecordSchema, Iterable[int]]


def _widths(source: WidthSource) -> list[int]:
    if isinstance(source, RecordSchema):
        return list(source.bit_widths)
    return list(source)


def encoded_bits(source: WidthSource) -> int:
    """Calculate the number of declared bits of a schema or width list.

    For complex-mode schemas this is the sum of the leaves' declared widths,
    not the size of the interleaved envelope.

    Example:
        >>> encoded_bits([2, 4, 12])
        18
    """
    return sum(_widths(source))


def field_sizes(schema: RecordSchema) -> dict[str, int]:
    """Get the declared size in bits of each top-level field.

    Composites report count x the bits of one sub-record.

    Example:
        >>> field_sizes(create_schema([Leaf("race", 10), Leaf("cpLevel", 3600)]))
        {'race': 4, 'cpLevel': 12}
    """

    def size(field: Leaf | Composite) -> int:
        if isinstance(field, Leaf):
            return field.bit_width
        return field.count * sum(size(sub) for sub in field.fields)

    return {field.name: size(field) for field in schema.fields}


def compact_length(source: WidthSource, alphabet: Alphabet = DEFAULT_ALPHABET) -> int:
    """Longest compact payload for the given widths, in glyphs."""
    total = encoded_bits(source)
    return digits_for_bits(total, alphabet.base) if total else 1


def direct_length(source: WidthSource, alphabet: Alphabet = DEFAULT_ALPHABET) -> int:
    """Exact length of a direct-format payload for the given widths, in glyphs."""
    widths = _widths(source)
    counts = Counter(widths)

    header = 1 + len(str(len(widths)))
    data = 0
    for width in sorted(counts):
        digits = digits_for_bits(width, alphabet.base)
        header += len(f"-{width}:{digits}")
        data += digits * counts[width]
    return header + 1 + data


def estimated_length(
    values: Sequence[int],
    bit_widths: Sequence[int],
    config: CodecConfig | None = None,
) -> int:
    """Upper bound on len(encode_fields(values, bit_widths)).

    Follows the same path selection as the encoder.
    """
    config = config or DEFAULT_CONFIG
    if select_format(values, bit_widths, config) is FormatTag.COMPACT:
        return compact_length(bit_widths, config.alphabet)
    return direct_length(bit_widths, config.alphabet)
