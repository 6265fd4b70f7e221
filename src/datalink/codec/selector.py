"""Wire format tags, encode-time path selection and decode-time format resolution."""

from __future__ import annotations

import enum
from typing import Sequence

from ..config import CodecConfig
from ..exceptions import TruncatedInput, UnknownFormatDiscriminator
from .alphabet import METADATA_SEPARATOR


class FormatTag(enum.Enum):
    """Wire formats, valued by their discriminator glyph.

    The compact format has no discriminator. Both tagged formats carry the
    ':' separator, which no alphabet may contain, so a payload without ':'
    is always compact even if its first digit glyph equals 'C' or 'E'.
    """

    COMPACT = ""
    DIRECT = "E"
    COMPLEX = "C"


def select_format(
    values: Sequence[int], bit_widths: Sequence[int], config: CodecConfig
) -> FormatTag:
    """Choose the encoding path for a field list.

    The compact path packs every field into one integer, so it is only used
    while that integer stays small: few fields, narrow widths, small values.
    """
    if len(values) > config.compact_max_fields:
        return FormatTag.DIRECT
    if any(width > config.compact_max_width for width in bit_widths):
        return FormatTag.DIRECT
    if any(value > config.compact_max_value for value in values):
        return FormatTag.DIRECT
    return FormatTag.COMPACT


def resolve_format(payload: str) -> FormatTag:
    """Resolve the wire format of a payload once, at decode entry.

    Raises:
        TruncatedInput: If payload is empty
        UnknownFormatDiscriminator: If payload has metadata but no known tag
    """
    if not payload:
        raise TruncatedInput("Cannot decode an empty payload")

    if METADATA_SEPARATOR not in payload:
        return FormatTag.COMPACT

    first = payload[0]
    if first == FormatTag.DIRECT.value:
        return FormatTag.DIRECT
    if first == FormatTag.COMPLEX.value:
        return FormatTag.COMPLEX

    raise UnknownFormatDiscriminator(
        f"Payload starts with {first!r}, expected "
        f"{FormatTag.DIRECT.value!r} or {FormatTag.COMPLEX.value!r}"
    )
