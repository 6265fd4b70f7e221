"""End-to-end integration tests."""

from __future__ import annotations

import logging
from typing import ClassVar, Optional

import pytest

from datalink import (
    Alphabet,
    BaseRecord,
    BoundedInt,
    CodecConfig,
    DecodeError,
    FixedList,
    WidthMismatch,
    build_schema,
    decode_fields,
    encode_fields,
    estimated_length,
    field_sizes,
    gear_schema,
    map_pin_schema,
)


class GearPiece(BaseRecord):
    """One equipped item."""

    id: int = BoundedInt(le=65535, description="Item id")
    glyph: int = BoundedInt(le=255, description="Glyph id")
    param1: int = BoundedInt(le=4095, description="Trait")
    param2: int = BoundedInt(le=4095, description="Enchantment")


class GearSet(BaseRecord):
    """Full 14-piece gear set."""

    gear: list[GearPiece] = FixedList(length=14)


class CharacterBuild(BaseRecord):
    """Character build shared in chat."""

    alliance: int = BoundedInt(le=3)
    race: int = BoundedInt(le=10)
    cp_level: int = BoundedInt(le=3600)
    champion: bool

    datalink_max_length: ClassVar[Optional[int]] = 8


def test_build_share_workflow(trace_logger: logging.Logger) -> None:
    """Encode a build, send it as text, decode it on the other side."""
    schema = build_schema(logger=trace_logger)
    build = {
        "allianceId": 1,
        "raceId": 9,
        "classId": 6,
        "weaponType": 3,
        "armorType": 2,
        "cpLevel": 1810,
    }

    payload = schema.encode(build)
    link = f"|H1:datalink:{payload}|h[Build]|h"

    received = link.split(":", 2)[2].split("|", 1)[0]
    assert received == payload
    assert build_schema().decode(received) == build


def test_gear_set_workflow(gear_items: list[dict[str, int]]) -> None:
    """A gear set survives the complex envelope through models and dicts."""
    items = [{**item, "id": item["id"] % 65536} for item in gear_items]
    gear_set = GearSet(gear=[GearPiece(**item) for item in items])

    payload = gear_set.encode()
    assert GearSet.decode(payload) == gear_set

    # The preset schema reads the same wire format
    assert gear_schema().decode(payload) == {"gear": items}


def test_map_pins_batch() -> None:
    """Many small records each stay in the compact format."""
    schema = map_pin_schema()
    pins = [
        {"x": x, "y": 1000 - x, "pinType": x % 128, "subType": x % 32, "zoneId": x * 2}
        for x in range(0, 1001, 125)
    ]

    payloads = [schema.encode(pin) for pin in pins]
    assert all(":" not in payload for payload in payloads)
    assert [schema.decode(payload) for payload in payloads] == pins


def test_model_record_with_length_limit() -> None:
    build = CharacterBuild(alliance=3, race=10, cp_level=3600, champion=True)

    payload = build.encode()
    assert len(payload) <= CharacterBuild.datalink_max_length  # type: ignore[operator]
    assert CharacterBuild.decode(payload) == build


def test_large_value_lists() -> None:
    """Wide fields take the direct format and keep every value exact."""
    widths = [24] * 10 + [8] * 5
    values = [16_777_215 - i for i in range(10)] + [255, 0, 1, 128, 64]

    payload = encode_fields(values, widths)
    assert payload.startswith("E15-8:2-24:4:")
    assert len(payload) == estimated_length(values, widths)
    assert decode_fields(payload, widths) == values


def test_wrong_widths_on_direct_payload() -> None:
    """Direct payloads detect a field count that doesn't match the caller."""
    payload = encode_fields([999999, 888888], [24, 24])
    with pytest.raises(WidthMismatch):
        decode_fields(payload, [24, 24, 24])


def test_alphabet_must_match() -> None:
    """A payload from one alphabet does not decode under another."""
    config = CodecConfig(alphabet=Alphabet("0123456789"))
    payload = encode_fields([2, 7, 455], [2, 4, 12], config=config)

    with pytest.raises(DecodeError):
        decode_fields(payload, [2, 4, 12])


def test_field_sizes_report() -> None:
    assert sum(field_sizes(build_schema()).values()) == 27
