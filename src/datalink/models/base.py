"""Base record class and datalink-specific Pydantic configuration.

This module provides the BaseRecord class that all datalink records should inherit from.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from ..codec.schema import RecordSchema


class BaseRecord(BaseModel):
    """Base class for all datalink records.

    Records should inherit from this class and define fields using
    BoundedInt() (or Field(ge=0, le=...)), bool, and FixedList() for nested
    fixed-count sub-records.

    datalink-specific options can be configured as ClassVar attributes:

    Example:
        >>> from typing import ClassVar, Optional
        >>> class CharacterBuild(BaseRecord):
        ...     alliance: int = BoundedInt(le=3)
        ...     race: int = BoundedInt(le=10)
        ...     cp_level: int = BoundedInt(le=3600)
        ...
        ...     datalink_max_length: ClassVar[Optional[int]] = 8
        >>> schema = CharacterBuild.schema_codec()

    Attributes:
        datalink_max_length: Longest payload in glyphs (optional, for validation)
    """

    model_config = ConfigDict(
        # Allow 0/1 to populate bool fields on decode
        strict=False,
        validate_assignment=True,
        extra="forbid",
    )

    datalink_max_length: ClassVar[int | None] = None

    @classmethod
    def schema_codec(cls) -> RecordSchema:
        """Return a RecordSchema that encodes this record type."""
        return RecordSchema.from_model(cls)

    def encode(self) -> str:
        """Encode this record with its RecordSchema."""
        return self.schema_codec().encode(self)

    @classmethod
    def decode(cls, payload: str) -> BaseRecord:
        """Decode a payload into an instance of this record type."""
        return cls.schema_codec().decode(payload)
