#!/usr/bin/env python3
"""Basic usage example for datalink.

This example demonstrates:
1. Encoding a list of bounded integers to a short text payload
2. Decoding it back with the same bit widths
3. Switching to the direct format for large values
4. Calculating payload sizes
"""

from __future__ import annotations

import logging

from datalink import (
    compact_length,
    decode_fields,
    direct_length,
    encode_fields,
    encoded_bits,
)


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("datalink Basic Usage Example")
    print("=" * 60)
    print()

    # Alliance (2 bits), race (4 bits), CP level (12 bits)
    values = [2, 7, 455]
    widths = [2, 4, 12]

    print("1. Encoding three small fields...")
    payload = encode_fields(values, widths)
    print(f"   Values: {values}")
    print(f"   Widths: {widths} ({encoded_bits(widths)} bits)")
    print(f"   Payload: {payload!r} ({len(payload)} glyphs, max {compact_length(widths)})")
    print()

    print("2. Decoding the payload...")
    decoded = decode_fields(payload, widths)
    print(f"   Decoded: {decoded}")
    print()

    print("3. Encoding large values (direct format)...")
    large_values = [999999, 888888, 777777, 666666]
    large_widths = [24] * 4
    large_payload = encode_fields(large_values, large_widths)
    print(f"   Payload: {large_payload!r}")
    print(f"   Length: {len(large_payload)} glyphs (expected {direct_length(large_widths)})")
    print(f"   Decoded: {decode_fields(large_payload, large_widths)}")
    print()

    print("4. Tracing path selection...")
    logging.basicConfig(level=logging.DEBUG, format="   %(levelname)s %(message)s")
    encode_fields(values, widths, logger=logging.getLogger("datalink.example"))
    print()

    print("5. Verifying round-trip...")
    if decoded == values:
        print("   ✓ Round-trip successful! Values match exactly.")
    else:
        print("   ✗ Round-trip failed! Values don't match.")
    print()


if __name__ == "__main__":
    main()
