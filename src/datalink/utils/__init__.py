"""Utility functions for datalink.

This module provides size calculation helpers.
"""

from __future__ import annotations

from .sizing import compact_length, direct_length, encoded_bits, estimated_length, field_sizes

__all__ = [
    "encoded_bits",
    "field_sizes",
    "compact_length",
    "direct_length",
    "estimated_length",
]
