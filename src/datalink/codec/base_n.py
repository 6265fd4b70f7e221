"""Integer <-> text conversion in the custom base.

Digits are big-endian: the most significant glyph comes first.
"""

from __future__ import annotations

from ..exceptions import (
    EncodeError,
    PayloadOverflow,
    SchemaError,
    TruncatedInput,
    ValueOutOfRange,
    ValueTooWide,
)
from .alphabet import DEFAULT_ALPHABET, Alphabet
from .bitpack import DEFAULT_LIMB_BITS, bits_to_int, int_to_bits


def encode_integer(value: int, alphabet: Alphabet = DEFAULT_ALPHABET) -> str:
    """Encode a non-negative integer with no leading zero glyphs.

    Zero encodes as the single zero glyph.

    Raises:
        ValueOutOfRange: If value is negative
    """
    if value < 0:
        raise ValueOutOfRange(f"Cannot encode negative value {value}")
    if value == 0:
        return alphabet.zero_glyph

    base = alphabet.base
    digits: list[str] = []
    while value > 0:
        value, remainder = divmod(value, base)
        digits.append(alphabet.glyph_at(remainder))
    return "".join(reversed(digits))


def decode_integer(text: str, alphabet: Alphabet = DEFAULT_ALPHABET) -> int:
    """Decode a string of glyphs back to an integer.

    Raises:
        TruncatedInput: If text is empty
        InvalidGlyph: If text contains a character outside the alphabet
    """
    if not text:
        raise TruncatedInput("Cannot decode an empty string")

    base = alphabet.base
    value = 0
    for glyph in text:
        value = value * base + alphabet.index_of(glyph)
    return value


def digits_for_bits(bit_width: int, base: int = DEFAULT_ALPHABET.base) -> int:
    """Return how many glyphs hold any value of bit_width bits.

    This is ceil(bit_width / log2(base)), computed exactly as the smallest
    digit count d with base**d >= 2**bit_width.

    Raises:
        SchemaError: If bit_width is below 1
    """
    if bit_width < 1:
        raise SchemaError(f"Bit width must be >= 1, got {bit_width}")

    limit = 1 << bit_width
    digits = 1
    capacity = base
    while capacity < limit:
        capacity *= base
        digits += 1
    return digits


def encode_fixed_width(
    value: int, digit_count: int, alphabet: Alphabet = DEFAULT_ALPHABET
) -> str:
    """Encode value left-padded with the zero glyph to exactly digit_count glyphs.

    Raises:
        ValueTooWide: If the value needs more than digit_count glyphs
    """
    encoded = encode_integer(value, alphabet)
    if len(encoded) > digit_count:
        raise ValueTooWide(
            f"Value {value} needs {len(encoded)} glyphs, only {digit_count} allowed"
        )
    return alphabet.zero_glyph * (digit_count - len(encoded)) + encoded


def decode_fixed_width(text: str, alphabet: Alphabet = DEFAULT_ALPHABET) -> int:
    """Decode a fixed-width slot; leading zero glyphs are harmless."""
    return decode_integer(text, alphabet)


def encode_bits(
    bits: str, alphabet: Alphabet = DEFAULT_ALPHABET, limb_bits: int = DEFAULT_LIMB_BITS
) -> str:
    """Encode a '0'/'1' bit sequence as one integer in the custom base.

    Raises:
        EncodeError: If bits contains anything other than '0' and '1'
    """
    try:
        value = bits_to_int(bits, limb_bits)
    except ValueError as e:
        raise EncodeError(str(e)) from e
    return encode_integer(value, alphabet)


def decode_to_bits(
    text: str,
    bit_length: int,
    alphabet: Alphabet = DEFAULT_ALPHABET,
    limb_bits: int = DEFAULT_LIMB_BITS,
) -> str:
    """Decode text to a bit sequence left-padded to bit_length.

    Raises:
        InvalidGlyph: If text contains a character outside the alphabet
        PayloadOverflow: If the decoded value needs more than bit_length bits
    """
    value = decode_integer(text, alphabet)
    if value.bit_length() > bit_length:
        raise PayloadOverflow(
            f"Payload carries {value.bit_length()} bits, declared widths allow {bit_length}"
        )
    return int_to_bits(value, bit_length, limb_bits)
