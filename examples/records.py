#!/usr/bin/env python3
"""Record definitions for datalink.

Run `datalink analyze examples/records.py` to see the field breakdown of
each record, or run this file to encode and decode one of each.
"""

from __future__ import annotations

from typing import ClassVar, Optional

from datalink import BaseRecord, BoundedInt, FixedList


class CharacterBuild(BaseRecord):
    """Character build shared through chat links."""

    alliance: int = BoundedInt(le=3, description="Alliance id")
    race: int = BoundedInt(le=10, description="Race id")
    class_id: int = BoundedInt(le=7, description="Class id")
    cp_level: int = BoundedInt(le=3600, description="Champion points")
    veteran: bool = False

    datalink_max_length: ClassVar[Optional[int]] = 6


class MapPin(BaseRecord):
    """Map pin with coordinates scaled to 0-1000."""

    x: int = BoundedInt(le=1000)
    y: int = BoundedInt(le=1000)
    pin_type: int = BoundedInt(le=127)
    zone_id: int = BoundedInt(le=2047)


class GearPiece(BaseRecord):
    """One equipped item."""

    id: int = BoundedInt(le=65535)
    glyph: int = BoundedInt(le=255)
    param1: int = BoundedInt(le=4095)
    param2: int = BoundedInt(le=4095)


class GearSet(BaseRecord):
    """Four equipped items."""

    gear: list[GearPiece] = FixedList(length=4)


def main() -> None:
    build = CharacterBuild(alliance=2, race=7, class_id=3, cp_level=455, veteran=True)
    pin = MapPin(x=512, y=128, pin_type=14, zone_id=1011)
    gear = GearSet(
        gear=[
            GearPiece(id=12345, glyph=67, param1=890, param2=123),
            GearPiece(id=23456, glyph=78, param1=901, param2=234),
            GearPiece(id=34567, glyph=89, param1=12, param2=345),
            GearPiece(id=45678, glyph=90, param1=123, param2=456),
        ]
    )

    for record in (build, pin, gear):
        payload = record.encode()
        decoded = type(record).decode(payload)
        status = "✓" if decoded == record else "✗"
        print(f"{status} {type(record).__name__}: {payload}")


if __name__ == "__main__":
    main()
