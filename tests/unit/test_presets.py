"""Unit tests for ready-made schemas."""

from __future__ import annotations

from datalink import compact_length, encode_fields, gear_schema, map_pin_schema
from datalink.presets import GEAR_PIECES, build_schema


def test_build_schema() -> None:
    schema = build_schema()
    record = {
        "allianceId": 2,
        "raceId": 7,
        "classId": 5,
        "weaponType": 12,
        "armorType": 1,
        "cpLevel": 3600,
    }

    assert schema.bit_widths == [2, 4, 3, 4, 2, 12]
    payload = schema.encode(record)
    assert payload == encode_fields(list(record.values()), schema.bit_widths)
    assert schema.decode(payload) == record


def test_map_pin_schema() -> None:
    schema = map_pin_schema()
    pin = {"x": 500, "y": 250, "pinType": 3, "subType": 1, "zoneId": 1024}

    assert schema.bit_widths == [10, 10, 7, 5, 11]
    payload = schema.encode(pin)
    assert len(payload) <= compact_length(schema)
    assert schema.decode(payload) == pin


def test_gear_schema() -> None:
    schema = gear_schema()

    assert GEAR_PIECES == 14
    assert schema.mode == "complex"
    assert schema.flat_size == 4 * GEAR_PIECES
    assert schema.bit_widths[:4] == [16, 8, 12, 12]


def test_presets_are_fresh() -> None:
    assert build_schema() is not build_schema()
