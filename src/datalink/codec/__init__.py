"""Text-safe binary codec for datalink.

This module provides the field list codec (compact and direct paths), the
custom-base integer codec and record schemas built on top of them.
"""

from __future__ import annotations

from .alphabet import DEFAULT_ALPHABET, SAFE_GLYPHS, Alphabet
from .base_n import (
    decode_fixed_width,
    decode_integer,
    decode_to_bits,
    digits_for_bits,
    encode_bits,
    encode_fixed_width,
    encode_integer,
)
from .bitpack import BitPacker, BitUnpacker, pack, unpack
from .decoder import decode_fields
from .direct import decode_direct, encode_direct
from .encoder import encode_fields
from .schema import (
    Composite,
    FieldDescriptor,
    Leaf,
    RecordSchema,
    bits_required,
    create_schema,
)
from .selector import FormatTag, resolve_format, select_format

__all__ = [
    "encode_fields",
    "decode_fields",
    "encode_integer",
    "decode_integer",
    "encode_fixed_width",
    "decode_fixed_width",
    "encode_bits",
    "decode_to_bits",
    "digits_for_bits",
    "encode_direct",
    "decode_direct",
    "pack",
    "unpack",
    "BitPacker",
    "BitUnpacker",
    "Alphabet",
    "DEFAULT_ALPHABET",
    "SAFE_GLYPHS",
    "FormatTag",
    "select_format",
    "resolve_format",
    "Leaf",
    "Composite",
    "FieldDescriptor",
    "RecordSchema",
    "bits_required",
    "create_schema",
]
