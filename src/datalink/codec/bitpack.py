"""Bit-level packing and unpacking utilities.

This module provides low-level bit manipulation for the compact path. Bit
sequences are plain strings of '0'/'1' characters, most significant bit first.

Values are split into and assembled from fixed-size limbs (16 bits by default)
with shift/mask operations only, so no value ever passes through a
float-backed accumulator regardless of its width.
"""

from __future__ import annotations

from typing import Sequence

from ..exceptions import SchemaError, TruncatedInput, ValueOutOfRange, WidthMismatch

DEFAULT_LIMB_BITS = 16


class BitPacker:
    """Packs values bit-by-bit into a bit sequence.

    Example:
        >>> packer = BitPacker()
        >>> packer.write_bool(True)
        >>> packer.write_uint(42, num_bits=7)
        >>> packer.to_bitstring()
        '10101010'
    """

    def __init__(self, limb_bits: int = DEFAULT_LIMB_BITS) -> None:
        """Initialize an empty bit packer.

        Args:
            limb_bits: Chunk size used when splitting wide values
        """
        self._bits: list[int] = []  # List of 0s and 1s
        self._limb_bits = limb_bits

    def write_bool(self, value: bool) -> None:
        """Write a boolean as a single bit."""
        self._bits.append(1 if value else 0)

    def write_uint(self, value: int, num_bits: int) -> None:
        """Write an unsigned integer using the specified number of bits.

        Args:
            value: Unsigned integer value to write (must be >= 0)
            num_bits: Number of bits to use for encoding (>= 1, no upper limit)

        Raises:
            SchemaError: If num_bits is below 1
            ValueOutOfRange: If value is negative or doesn't fit in num_bits
        """
        if num_bits < 1:
            raise SchemaError(f"num_bits must be >= 1, got {num_bits}")
        if value < 0:
            raise ValueOutOfRange(f"write_uint requires non-negative value, got {value}")
        if value >> num_bits:
            raise ValueOutOfRange(
                f"Value {value} requires more than {num_bits} bits "
                f"(max: {(1 << num_bits) - 1})"
            )

        # Split into limbs from the least significant end
        limbs: list[tuple[int, int]] = []
        remaining = num_bits
        while remaining > 0:
            size = min(self._limb_bits, remaining)
            limbs.append((value & ((1 << size) - 1), size))
            value >>= size
            remaining -= size

        # Emit most significant limb first (big-endian)
        for limb, size in reversed(limbs):
            for i in range(size - 1, -1, -1):
                self._bits.append((limb >> i) & 1)

    def bit_length(self) -> int:
        """Return the current number of bits written."""
        return len(self._bits)

    def to_bitstring(self) -> str:
        """Return the packed bits as a '0'/'1' string."""
        return "".join("1" if bit else "0" for bit in self._bits)


class BitUnpacker:
    """Unpacks values bit-by-bit from a bit sequence.

    Example:
        >>> unpacker = BitUnpacker("10101010")
        >>> unpacker.read_bool()
        True
        >>> unpacker.read_uint(7)
        42
    """

    def __init__(self, bits: str, limb_bits: int = DEFAULT_LIMB_BITS) -> None:
        """Initialize a bit unpacker.

        Args:
            bits: String of '0'/'1' characters
            limb_bits: Chunk size used when assembling wide values

        Raises:
            ValueError: If bits contains anything other than '0' and '1'
        """
        self._bits: list[int] = []
        for char in bits:
            if char == "1":
                self._bits.append(1)
            elif char == "0":
                self._bits.append(0)
            else:
                raise ValueError(f"Bit sequence may only contain '0' and '1', got {char!r}")
        self._position = 0
        self._limb_bits = limb_bits

    def read_bool(self) -> bool:
        """Read a single bit as a boolean.

        Raises:
            TruncatedInput: If no more bits are available
        """
        if self._position >= len(self._bits):
            raise TruncatedInput("Attempted to read past end of bit sequence")

        value = self._bits[self._position] == 1
        self._position += 1
        return value

    def read_uint(self, num_bits: int) -> int:
        """Read an unsigned integer of the specified bit width.

        Args:
            num_bits: Number of bits to read (>= 1)

        Returns:
            Unsigned integer value

        Raises:
            SchemaError: If num_bits is below 1
            TruncatedInput: If not enough bits are available
        """
        if num_bits < 1:
            raise SchemaError(f"num_bits must be >= 1, got {num_bits}")

        if self._position + num_bits > len(self._bits):
            raise TruncatedInput(
                f"Not enough bits: need {num_bits}, have {len(self._bits) - self._position}"
            )

        value = 0
        remaining = num_bits
        while remaining > 0:
            size = min(self._limb_bits, remaining)
            limb = 0
            for _ in range(size):
                limb = (limb << 1) | self._bits[self._position]
                self._position += 1
            value = (value << size) | limb
            remaining -= size

        return value

    def bits_remaining(self) -> int:
        """Return the number of unread bits."""
        return len(self._bits) - self._position

    def position(self) -> int:
        """Return the current read position in bits."""
        return self._position


def check_fields(values: Sequence[int], bit_widths: Sequence[int]) -> None:
    """Validate a field list against its widths without packing it.

    Raises:
        WidthMismatch: If values and bit_widths differ in length
        SchemaError: If a width is below 1
        ValueOutOfRange: If a value is negative or doesn't fit its width
    """
    if len(values) != len(bit_widths):
        raise WidthMismatch(
            f"Got {len(values)} values but {len(bit_widths)} bit widths"
        )

    for index, (value, width) in enumerate(zip(values, bit_widths)):
        if width < 1:
            raise SchemaError(f"Field {index}: bit width must be >= 1, got {width}")
        if value < 0 or value >> width:
            raise ValueOutOfRange(
                f"Field {index}: value {value} out of bounds [0, {(1 << width) - 1}] "
                f"for {width} bits"
            )


def pack(
    values: Sequence[int], bit_widths: Sequence[int], limb_bits: int = DEFAULT_LIMB_BITS
) -> str:
    """Concatenate values into one bit sequence.

    Args:
        values: Non-negative integers, in field order
        bit_widths: Declared bit width for each value
        limb_bits: Chunk size for wide values

    Returns:
        Bit sequence of length sum(bit_widths)

    Raises:
        WidthMismatch: If values and bit_widths differ in length
        ValueOutOfRange: If a value doesn't fit its width
    """
    if len(values) != len(bit_widths):
        raise WidthMismatch(
            f"Got {len(values)} values but {len(bit_widths)} bit widths"
        )

    packer = BitPacker(limb_bits)
    for index, (value, width) in enumerate(zip(values, bit_widths)):
        try:
            packer.write_uint(value, width)
        except ValueOutOfRange as e:
            raise ValueOutOfRange(f"Field {index}: {e}") from e
    return packer.to_bitstring()


def unpack(
    bits: str, bit_widths: Sequence[int], limb_bits: int = DEFAULT_LIMB_BITS
) -> list[int]:
    """Slice a bit sequence back into values using the same widths.

    Raises:
        TruncatedInput: If bits is shorter than sum(bit_widths)
    """
    total = sum(bit_widths)
    if len(bits) < total:
        raise TruncatedInput(f"Bit sequence too short: need {total} bits, have {len(bits)}")

    unpacker = BitUnpacker(bits, limb_bits)
    return [unpacker.read_uint(width) for width in bit_widths]


def int_to_bits(value: int, num_bits: int, limb_bits: int = DEFAULT_LIMB_BITS) -> str:
    """Render value as exactly num_bits bits (num_bits may be 0 for value 0)."""
    if num_bits == 0 and value == 0:
        return ""
    packer = BitPacker(limb_bits)
    packer.write_uint(value, num_bits)
    return packer.to_bitstring()


def bits_to_int(bits: str, limb_bits: int = DEFAULT_LIMB_BITS) -> int:
    """Interpret a bit sequence as one big-endian unsigned integer."""
    if not bits:
        return 0
    return BitUnpacker(bits, limb_bits).read_uint(len(bits))
