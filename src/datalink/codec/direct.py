"""Direct (large-value) codec.

Each field is encoded on its own at a fixed glyph width derived from its bit
width, so no single giant integer is ever built. The payload is
self-describing:

    E<count>-<width>:<digits>-<width>:<digits>...:<data>

The widths in the header are sorted ascending. The data segment is split from
the header on the LAST colon, since the header itself contains colons and the
alphabet never does.

Example:
    >>> encode_direct([999999, 888888, 777777, 666666], [24, 24, 24, 24])[:8]
    'E4-24:4:'
"""

from __future__ import annotations

import re
from collections import Counter
from typing import Sequence

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import (
    DataTooShort,
    DecodeError,
    MissingMetadataSeparator,
    PayloadOverflow,
    SchemaError,
    TrailingData,
    UnknownFormatDiscriminator,
    UnparsableFieldCount,
    WidthMismatch,
)
from ..tracing import TraceLogger, trace, warn
from .alphabet import METADATA_SEPARATOR
from .base_n import decode_fixed_width, digits_for_bits, encode_fixed_width
from .bitpack import check_fields
from .selector import FormatTag

_COUNT_RE = re.compile(r"(\d+)", re.ASCII)
_TABLE_RE = re.compile(r"(?:-\d+:\d+)*", re.ASCII)
_ENTRY_RE = re.compile(r"-(\d+):(\d+)", re.ASCII)


def encode_direct(
    values: Sequence[int],
    bit_widths: Sequence[int],
    *,
    config: CodecConfig | None = None,
    logger: TraceLogger = None,
) -> str:
    """Encode a field list in the self-describing direct format.

    Raises:
        WidthMismatch: If values and bit_widths differ in length
        ValueOutOfRange: If a value doesn't fit its width
    """
    config = config or DEFAULT_CONFIG
    alphabet = config.alphabet
    check_fields(values, bit_widths)

    counts = Counter(bit_widths)
    digits_by_width = {width: digits_for_bits(width, alphabet.base) for width in sorted(counts)}
    for width, digits in digits_by_width.items():
        trace(
            logger,
            "Direct: %d-bit fields use %d glyphs (%d values)",
            width,
            digits,
            counts[width],
        )

    header = FormatTag.DIRECT.value + str(len(values))
    for width, digits in digits_by_width.items():
        header += f"-{width}{METADATA_SEPARATOR}{digits}"

    data = "".join(
        encode_fixed_width(value, digits_by_width[width], alphabet)
        for value, width in zip(values, bit_widths)
    )

    trace(logger, "Direct: header %s, %d data glyphs", header, len(data))
    return header + METADATA_SEPARATOR + data


def parse_direct_header(metadata: str) -> tuple[int, dict[int, int]]:
    """Parse 'E<count>-<w>:<d>...' into the field count and width table.

    Raises:
        UnknownFormatDiscriminator: If metadata doesn't start with 'E'
        UnparsableFieldCount: If the count is missing or not a number
        DecodeError: If the width table is malformed
    """
    if not metadata.startswith(FormatTag.DIRECT.value):
        raise UnknownFormatDiscriminator(
            f"Direct payload must start with {FormatTag.DIRECT.value!r}, "
            f"got {metadata[:1]!r}"
        )

    count_match = _COUNT_RE.match(metadata, 1)
    if count_match is None:
        raise UnparsableFieldCount(f"No field count in header {metadata!r}")
    count = int(count_match.group(1))

    table_text = metadata[count_match.end():]
    if _TABLE_RE.fullmatch(table_text) is None:
        raise DecodeError(f"Malformed width table {table_text!r} in header {metadata!r}")

    table: dict[int, int] = {}
    for width_text, digits_text in _ENTRY_RE.findall(table_text):
        width, digits = int(width_text), int(digits_text)
        if width < 1 or digits < 1:
            raise DecodeError(f"Invalid width table entry -{width}:{digits}")
        table[width] = digits
    return count, table


def decode_direct(
    payload: str,
    bit_widths: Sequence[int],
    *,
    config: CodecConfig | None = None,
    logger: TraceLogger = None,
) -> list[int]:
    """Decode a direct-format payload.

    Raises:
        UnknownFormatDiscriminator: If payload doesn't start with 'E'
        MissingMetadataSeparator: If payload has no ':'
        UnparsableFieldCount: If the header count is unreadable
        WidthMismatch: If the header count differs from len(bit_widths)
        DataTooShort: If the data ends mid-field
        TrailingData: If glyphs remain after the last field
        PayloadOverflow: If a decoded value is wider than its width
        InvalidGlyph: If the data contains a character outside the alphabet
    """
    config = config or DEFAULT_CONFIG
    alphabet = config.alphabet

    if not payload.startswith(FormatTag.DIRECT.value):
        raise UnknownFormatDiscriminator(
            f"Direct payload must start with {FormatTag.DIRECT.value!r}, got {payload[:1]!r}"
        )

    separator = payload.rfind(METADATA_SEPARATOR)
    if separator < 0:
        raise MissingMetadataSeparator("Direct payload has no metadata separator")

    metadata = payload[:separator]
    data = payload[separator + 1:]
    trace(logger, "Direct: metadata %s, %d data glyphs", metadata, len(data))

    count, digits_by_width = parse_direct_header(metadata)
    if count != len(bit_widths):
        raise WidthMismatch(
            f"Header declares {count} values but {len(bit_widths)} bit widths were given"
        )

    for width in bit_widths:
        if width < 1:
            raise SchemaError(f"Bit width must be >= 1, got {width}")
        if width not in digits_by_width:
            digits_by_width[width] = digits_for_bits(width, alphabet.base)
            warn(
                logger,
                "Direct: header has no mapping for %d-bit fields, using %d glyphs",
                width,
                digits_by_width[width],
            )

    values: list[int] = []
    position = 0
    for index, width in enumerate(bit_widths):
        digits = digits_by_width[width]
        end = position + digits
        if end > len(data):
            raise DataTooShort(
                f"Field {index}: need {end} data glyphs but only {len(data)} present"
            )

        value = decode_fixed_width(data[position:end], alphabet)
        if value >> width:
            raise PayloadOverflow(f"Field {index}: value {value} does not fit {width} bits")
        values.append(value)
        position = end

    if position != len(data):
        raise TrailingData(f"{len(data) - position} glyphs left after {len(values)} fields")

    trace(logger, "Direct: decoded %d values", len(values))
    return values
