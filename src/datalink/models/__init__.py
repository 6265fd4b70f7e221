"""Pydantic record modeling for datalink.

This module provides the BaseRecord class and field utilities for defining
records that can be turned into a RecordSchema.
"""

from __future__ import annotations

from .base import BaseRecord
from .fields import BoundedInt, FixedList

__all__ = [
    "BaseRecord",
    "BoundedInt",
    "FixedList",
]
