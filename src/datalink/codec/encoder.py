"""Field list encoder.

This module provides the encode_fields() function that turns a list of
bounded integers into one text payload, choosing between the compact
bit-packed path and the self-describing direct path.
"""

from __future__ import annotations

from typing import Iterable

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import EncodeError
from ..tracing import TraceLogger, trace
from .base_n import digits_for_bits, encode_bits
from .bitpack import check_fields, pack
from .direct import encode_direct
from .selector import FormatTag, select_format


def encode_fields(
    values: Iterable[int],
    bit_widths: Iterable[int],
    *,
    config: CodecConfig | None = None,
    logger: TraceLogger = None,
) -> str:
    """Encode a list of bounded integers to a compact text payload.

    Small field lists are packed into one bit sequence and written as a single
    number in the custom base. Long lists, wide fields and large values use the
    direct format, which carries its own width table.

    Args:
        values: Non-negative integers, in field order
        bit_widths: Declared bit width for each value (the implicit schema)
        config: Alphabet and selection thresholds (default: DEFAULT_CONFIG)
        logger: Optional logger receiving DEBUG traces of path selection

    Returns:
        Encoded payload

    Raises:
        EncodeError: If a value is not an integer
        WidthMismatch: If values and bit_widths differ in length
        ValueOutOfRange: If a value is negative or doesn't fit its width
        SchemaError: If a bit width is below 1

    Examples:
        ```python
        from datalink import encode_fields, decode_fields

        payload = encode_fields([2, 7, 455], [2, 4, 12])
        assert decode_fields(payload, [2, 4, 12]) == [2, 7, 455]
        ```
    """
    config = config or DEFAULT_CONFIG
    values = list(values)
    widths = list(bit_widths)

    for index, value in enumerate(values):
        if not isinstance(value, int):
            raise EncodeError(f"Field {index}: expected int, got {type(value).__name__}")
    values = [int(value) for value in values]

    check_fields(values, widths)

    tag = select_format(values, widths, config)
    trace(logger, "Encoding %d fields (%d bits) via %s path", len(values), sum(widths), tag.name)

    if tag is FormatTag.COMPACT:
        bits = pack(values, widths, config.limb_bits)
        payload = encode_bits(bits, config.alphabet, config.limb_bits)

        # Length sanity check: a value below 2**len(bits) always fits this budget
        budget = digits_for_bits(len(bits), config.alphabet.base) if bits else 1
        if len(payload) <= budget:
            return payload

        trace(
            logger,
            "Compact payload has %d glyphs, budget is %d; using direct path",
            len(payload),
            budget,
        )

    return encode_direct(values, widths, config=config, logger=logger)
