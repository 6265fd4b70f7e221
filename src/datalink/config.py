"""Codec configuration.

This module provides the configuration dataclass that carries the alphabet and
the format-selection thresholds. A config is immutable and may be shared freely
between concurrent calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .codec.alphabet import DEFAULT_ALPHABET, Alphabet
from .exceptions import SchemaError


@dataclass(frozen=True)
class CodecConfig:
    """Configuration for encoding and decoding.

    Attributes:
        alphabet: Glyph alphabet used for all text output (default: the
            70-glyph safe set).

        compact_max_fields: Largest field count still eligible for the compact
            bit-packed path (default 50). Longer lists use the direct path.

        compact_max_width: Largest single bit width eligible for the compact
            path (default 20).

        compact_max_value: Largest single value eligible for the compact path
            (default 100_000).

        limb_bits: Size of the chunks used when splitting or assembling values
            (default 16).

        complex_width_bits: Bits used for each recorded width in the complex
            schema envelope (default 5, so widths up to 31).

        complex_value_bits: Bits used for each value in the complex schema
            envelope (default 16, so values up to 65535).

        complex_min_width: Smallest dynamic width recorded for a value in the
            complex schema envelope (default 4).

    Examples:
        ```python
        from datalink import CodecConfig, encode_fields

        # Always take the direct path for more than 10 fields
        config = CodecConfig(compact_max_fields=10)
        payload = encode_fields(values, widths, config=config)
        ```
    """

    alphabet: Alphabet = field(default=DEFAULT_ALPHABET)

    # Format selection thresholds
    compact_max_fields: int = 50
    compact_max_width: int = 20
    compact_max_value: int = 100_000

    limb_bits: int = 16

    # Complex schema envelope
    complex_width_bits: int = 5
    complex_value_bits: int = 16
    complex_min_width: int = 4

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.compact_max_fields < 0:
            raise SchemaError(f"compact_max_fields must be >= 0, got {self.compact_max_fields}")
        if self.compact_max_width < 1:
            raise SchemaError(f"compact_max_width must be >= 1, got {self.compact_max_width}")
        if self.compact_max_value < 0:
            raise SchemaError(f"compact_max_value must be >= 0, got {self.compact_max_value}")
        if not 1 <= self.limb_bits <= 32:
            raise SchemaError(f"limb_bits must be 1-32, got {self.limb_bits}")
        if self.complex_width_bits < 1:
            raise SchemaError(f"complex_width_bits must be >= 1, got {self.complex_width_bits}")
        if self.complex_value_bits < 1:
            raise SchemaError(f"complex_value_bits must be >= 1, got {self.complex_value_bits}")

        # Every recorded width must itself fit in the width field
        max_recordable = (1 << self.complex_width_bits) - 1
        if self.complex_value_bits > max_recordable:
            raise SchemaError(
                f"complex_value_bits={self.complex_value_bits} cannot be recorded in "
                f"{self.complex_width_bits}-bit width fields (max {max_recordable})"
            )
        if not 1 <= self.complex_min_width <= self.complex_value_bits:
            raise SchemaError(
                f"complex_min_width must be 1-{self.complex_value_bits}, "
                f"got {self.complex_min_width}"
            )

    @property
    def complex_max_value(self) -> int:
        """Largest value the complex schema envelope can carry."""
        return (1 << self.complex_value_bits) - 1


DEFAULT_CONFIG = CodecConfig()
