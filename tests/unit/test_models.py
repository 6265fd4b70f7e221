"""Unit tests for pydantic record models."""

from __future__ import annotations

from typing import ClassVar, Optional

import pytest
from pydantic import Field, ValidationError

from datalink import (
    BaseRecord,
    BoundedInt,
    Composite,
    EncodeError,
    FixedList,
    Leaf,
    RecordSchema,
    SchemaError,
    ValueOutOfRange,
)


class CharacterBuild(BaseRecord):
    """Build record with a boolean flag."""

    alliance: int = BoundedInt(le=3)
    race: int = BoundedInt(le=10)
    cp_level: int = BoundedInt(le=3600)
    veteran: bool


class GearPiece(BaseRecord):
    """One gear slot."""

    id: int = BoundedInt(le=65535)
    glyph: int = BoundedInt(le=255)


class GearSet(BaseRecord):
    """Two gear slots and a level."""

    level: int = Field(ge=0, le=50)
    gear: list[GearPiece] = FixedList(length=2)


class ShortBuild(BaseRecord):
    """Build record with a payload length limit."""

    cp_level: int = BoundedInt(le=3600)
    race: int = BoundedInt(le=10)

    datalink_max_length: ClassVar[Optional[int]] = 1


class Unbounded(BaseRecord):
    value: int


class VariableList(BaseRecord):
    gear: list[GearPiece] = Field(max_length=3)


class TextRecord(BaseRecord):
    name: str


class TestSchemaFromModel:
    """Test model introspection."""

    def test_leaves(self) -> None:
        schema = CharacterBuild.schema_codec()

        assert schema.fields == (
            Leaf("alliance", 3),
            Leaf("race", 10),
            Leaf("cp_level", 3600),
            Leaf("veteran", 1),
        )
        assert schema.bit_widths == [2, 4, 12, 1]
        assert schema.model_class is CharacterBuild

    def test_nested(self) -> None:
        schema = RecordSchema.from_model(GearSet)

        assert schema.mode == "complex"
        assert schema.fields[1] == Composite("gear", 2, (Leaf("id", 65535), Leaf("glyph", 255)))
        assert schema.flat_size == 5

    def test_max_length_classvar(self) -> None:
        assert ShortBuild.schema_codec().max_length == 1
        assert CharacterBuild.schema_codec().max_length is None

    @pytest.mark.parametrize("model", [Unbounded, VariableList, TextRecord])
    def test_unsupported_fields(self, model: type[BaseRecord]) -> None:
        with pytest.raises(SchemaError):
            model.schema_codec()


class TestRecordRoundtrip:
    """Test encode/decode through BaseRecord."""

    def test_simple(self) -> None:
        record = CharacterBuild(alliance=2, race=7, cp_level=455, veteran=True)
        decoded = CharacterBuild.decode(record.encode())

        assert isinstance(decoded, CharacterBuild)
        assert decoded == record
        assert decoded.veteran is True

    def test_nested(self) -> None:
        record = GearSet(
            level=50,
            gear=[GearPiece(id=12345, glyph=67), GearPiece(id=65535, glyph=0)],
        )
        payload = record.encode()

        assert payload.startswith("C")
        assert GearSet.decode(payload) == record

    def test_schema_accepts_model_instances(self) -> None:
        record = CharacterBuild(alliance=1, race=2, cp_level=3, veteran=False)
        assert CharacterBuild.schema_codec().flatten(record) == [1, 2, 3, 0]

    def test_max_length_enforced(self) -> None:
        with pytest.raises(EncodeError, match="max_length=1"):
            ShortBuild(cp_level=3600, race=10).encode()


class TestModelValidation:
    """Test pydantic validation at construction time."""

    def test_bounds(self) -> None:
        with pytest.raises(ValidationError):
            CharacterBuild(alliance=4, race=7, cp_level=455, veteran=False)

    def test_fixed_list_length(self) -> None:
        with pytest.raises(ValidationError):
            GearSet(level=1, gear=[GearPiece(id=1, glyph=1)])

    def test_extra_fields_forbidden(self) -> None:
        with pytest.raises(ValidationError):
            GearPiece(id=1, glyph=1, param1=3)  # type: ignore[call-arg]

    def test_validate_assignment(self) -> None:
        record = GearPiece(id=1, glyph=1)
        with pytest.raises(ValidationError):
            record.glyph = 256


class UpperBoundOnly(BaseRecord):
    value: int = Field(le=100)


def test_upper_bound_only_int() -> None:
    """An int with only le= still maps to a leaf; negatives fail at encode."""
    schema = UpperBoundOnly.schema_codec()
    assert schema.fields == (Leaf("value", 100),)
    assert UpperBoundOnly.decode(UpperBoundOnly(value=42).encode()) == UpperBoundOnly(value=42)
    with pytest.raises(ValueOutOfRange):
        UpperBoundOnly(value=-1).encode()
