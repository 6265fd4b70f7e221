"""Field type helpers and utilities.

This module provides convenience functions for defining record fields with
the constraints RecordSchema.from_model() needs.
"""

from __future__ import annotations

from typing import Any, cast

from pydantic import Field
from pydantic.fields import FieldInfo


def BoundedInt(*, le: int, ge: int = 0, **kwargs: Any) -> FieldInfo:
    """Create a bounded non-negative integer field.

    This is a convenience wrapper around Pydantic's Field() that always sets
    both ge= and le= so the field maps to a Leaf descriptor.

    Args:
        le: Maximum value (inclusive)
        ge: Minimum value, must stay 0 for compact encoding
        **kwargs: Additional Field() arguments (description, default, etc.)

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Example:
        >>> class MapPin(BaseRecord):
        ...     x: int = BoundedInt(le=1000)
        ...     zone_id: int = BoundedInt(le=2047)
    """
    return cast(FieldInfo, Field(ge=ge, le=le, **kwargs))


def FixedList(*, length: int, **kwargs: Any) -> FieldInfo:
    """Create a fixed-length list field of sub-records.

    Args:
        length: Exact number of sub-records
        **kwargs: Additional Field() arguments

    Returns:
        Pydantic FieldInfo suitable for use as a field default/metadata.

    Example:
        >>> class GearSet(BaseRecord):
        ...     gear: list[GearPiece] = FixedList(length=14)
    """
    return cast(FieldInfo, Field(min_length=length, max_length=length, **kwargs))
