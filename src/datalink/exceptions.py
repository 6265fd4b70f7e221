"""Exception hierarchy for datalink.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from DataLinkError for easy catching of any datalink-specific error.
"""

from __future__ import annotations


class DataLinkError(Exception):
    """Base exception for all datalink errors."""

    pass


class SchemaError(DataLinkError):
    """Raised when a record schema or codec configuration is invalid.

    Examples:
        - Leaf max_value is negative
        - Composite count is below 1
        - Duplicate field names at one schema level
        - Unsupported pydantic field type
        - Bit width below 1
    """

    pass


class AlphabetError(SchemaError):
    """Raised when a glyph alphabet cannot be built.

    Examples:
        - Duplicate glyphs
        - Fewer than two glyphs
        - A glyph that is also the metadata separator
    """

    pass


class EncodeError(DataLinkError):
    """Raised when encoding a field list or record fails.

    Examples:
        - Required record field is missing
        - Composite value has the wrong number of items
        - Value does not fit its declared bit width
    """

    pass


class DecodeError(DataLinkError):
    """Raised when decoding a payload fails.

    Examples:
        - Character outside the alphabet
        - Payload too short for the declared widths
        - Malformed self-describing header
        - Unrecognised format discriminator
    """

    pass


class WidthMismatch(EncodeError, DecodeError):
    """Raised when value, width or element counts disagree.

    Raised on the encode side when the value and bit-width lists differ in
    length, and on the decode side when an embedded count does not match the
    caller's width list or schema.
    """

    pass


class ValueOutOfRange(EncodeError):
    """Raised when a value is negative or does not fit its bit width."""

    pass


class ValueTooWide(EncodeError):
    """Raised when a value needs more glyphs than a fixed-width slot allows."""

    pass


class InvalidGlyph(DecodeError):
    """Raised when a payload contains a character outside the alphabet."""

    pass


class TruncatedInput(DecodeError):
    """Raised when a payload holds fewer bits than the declared widths need."""

    pass


class DataTooShort(TruncatedInput):
    """Raised when a direct-format data segment ends mid-field."""

    pass


class TrailingData(DecodeError):
    """Raised when glyphs remain after every declared field was read."""

    pass


class PayloadOverflow(DecodeError):
    """Raised when a decoded value is wider than its declared bit width."""

    pass


class MissingMetadataSeparator(DecodeError):
    """Raised when a self-describing payload has no ':' separator."""

    pass


class UnparsableFieldCount(DecodeError):
    """Raised when the element count in a self-describing header is unreadable."""

    pass


class UnknownFormatDiscriminator(DecodeError):
    """Raised when a payload does not start with a recognised format glyph."""

    pass
