"""datalink: Text-Safe Bit-Packing Codec

A Python library that turns lists of bounded integers into short strings drawn
from a restricted glyph alphabet, and back, losslessly. Designed for payloads
that travel through text channels (chat links, URLs, copy/paste) where length
matters and some characters are unsafe.

Key Features:
- Bit-level packing of bounded fields into one custom-base number
- Self-describing direct format for long lists and wide values
- Named record schemas, including fixed-count nested sub-records
- Pydantic-based record modeling

Quick Start:
    >>> from datalink import encode_fields, decode_fields, create_schema, Leaf
    >>>
    >>> payload = encode_fields([2, 7, 455], [2, 4, 12])
    >>> decode_fields(payload, [2, 4, 12])
    [2, 7, 455]
    >>>
    >>> schema = create_schema([Leaf("alliance", 3), Leaf("race", 10), Leaf("cpLevel", 3600)])
    >>> schema.decode(schema.encode({"alliance": 2, "race": 7, "cpLevel": 455}))
    {'alliance': 2, 'race': 7, 'cpLevel': 455}
"""

from __future__ import annotations

__version__ = "0.1.0"

from .codec import (
    DEFAULT_ALPHABET,
    SAFE_GLYPHS,
    Alphabet,
    Composite,
    FieldDescriptor,
    FormatTag,
    Leaf,
    RecordSchema,
    bits_required,
    create_schema,
    decode_fields,
    decode_fixed_width,
    decode_integer,
    digits_for_bits,
    encode_fields,
    encode_fixed_width,
    encode_integer,
)
from .config import DEFAULT_CONFIG, CodecConfig
from .exceptions import (
    AlphabetError,
    DataLinkError,
    DataTooShort,
    DecodeError,
    EncodeError,
    InvalidGlyph,
    MissingMetadataSeparator,
    PayloadOverflow,
    SchemaError,
    TrailingData,
    TruncatedInput,
    UnknownFormatDiscriminator,
    UnparsableFieldCount,
    ValueOutOfRange,
    ValueTooWide,
    WidthMismatch,
)
from .models import BaseRecord, BoundedInt, FixedList
from .presets import build_schema, gear_schema, map_pin_schema
from .utils import compact_length, direct_length, encoded_bits, estimated_length, field_sizes

__all__ = [
    # Core API
    "encode_fields",
    "decode_fields",
    "encode_integer",
    "decode_integer",
    "encode_fixed_width",
    "decode_fixed_width",
    "digits_for_bits",
    "FormatTag",
    # Alphabet
    "Alphabet",
    "DEFAULT_ALPHABET",
    "SAFE_GLYPHS",
    # Schemas
    "Leaf",
    "Composite",
    "FieldDescriptor",
    "RecordSchema",
    "bits_required",
    "create_schema",
    # Records
    "BaseRecord",
    "BoundedInt",
    "FixedList",
    # Presets
    "build_schema",
    "map_pin_schema",
    "gear_schema",
    # Configuration
    "CodecConfig",
    "DEFAULT_CONFIG",
    # Exceptions
    "DataLinkError",
    "SchemaError",
    "AlphabetError",
    "EncodeError",
    "DecodeError",
    "WidthMismatch",
    "ValueOutOfRange",
    "ValueTooWide",
    "InvalidGlyph",
    "TruncatedInput",
    "DataTooShort",
    "TrailingData",
    "PayloadOverflow",
    "MissingMetadataSeparator",
    "UnparsableFieldCount",
    "UnknownFormatDiscriminator",
    # Sizing
    "encoded_bits",
    "field_sizes",
    "compact_length",
    "direct_length",
    "estimated_length",
    # Version
    "__version__",
]
