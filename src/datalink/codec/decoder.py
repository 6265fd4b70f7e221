"""Field list decoder.

This module provides the decode_fields() function that converts a text payload
back to the list of integers it was encoded from.
"""

from __future__ import annotations

from typing import Iterable

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import SchemaError, UnknownFormatDiscriminator
from ..tracing import TraceLogger, trace
from .base_n import decode_to_bits
from .bitpack import unpack
from .direct import decode_direct
from .selector import FormatTag, resolve_format


def decode_fields(
    payload: str,
    bit_widths: Iterable[int],
    *,
    config: CodecConfig | None = None,
    logger: TraceLogger = None,
) -> list[int]:
    """Decode a payload produced by encode_fields().

    The wire format is resolved once from the payload itself; the caller's
    bit widths must match the ones used to encode. In the compact format a
    different width list cannot be detected and yields different values.

    Args:
        payload: Encoded payload
        bit_widths: Bit width for each field, in the encode-time order
        config: Alphabet used at encode time (default: DEFAULT_CONFIG)
        logger: Optional logger receiving DEBUG traces

    Returns:
        Decoded values

    Raises:
        InvalidGlyph: If payload contains a character outside the alphabet
        TruncatedInput: If payload is empty or holds too few bits
        PayloadOverflow: If payload holds more bits than the widths allow
        UnknownFormatDiscriminator: If payload has an unknown format tag, or
            is a complex schema envelope (decode those with their RecordSchema)
        MissingMetadataSeparator, UnparsableFieldCount, WidthMismatch,
        DataTooShort, TrailingData: For malformed direct-format payloads

    Examples:
        ```python
        values = decode_fields(payload, [24, 24, 24, 24])
        ```
    """
    config = config or DEFAULT_CONFIG
    widths = list(bit_widths)
    for index, width in enumerate(widths):
        if width < 1:
            raise SchemaError(f"Field {index}: bit width must be >= 1, got {width}")

    tag = resolve_format(payload)
    trace(logger, "Decoding %d fields via %s path", len(widths), tag.name)

    if tag is FormatTag.COMPACT:
        bits = decode_to_bits(payload, sum(widths), config.alphabet, config.limb_bits)
        return unpack(bits, widths, config.limb_bits)

    if tag is FormatTag.DIRECT:
        return decode_direct(payload, widths, config=config, logger=logger)

    raise UnknownFormatDiscriminator(
        "Complex schema envelopes carry their own structure; decode them with "
        "the RecordSchema that produced them"
    )
