"""Ready-made schemas for common payloads.

Each factory returns a fresh RecordSchema; nothing is cached at module level.
"""

from __future__ import annotations

from .codec.schema import Composite, Leaf, RecordSchema, create_schema
from .config import CodecConfig
from .tracing import TraceLogger

GEAR_PIECES = 14


def build_schema(
    *, config: CodecConfig | None = None, logger: TraceLogger = None
) -> RecordSchema:
    """Character build: alliance, race, class, weapon, armor and CP level (27 bits)."""
    return create_schema(
        [
            Leaf("allianceId", 3),  # 2 bits
            Leaf("raceId", 10),  # 4 bits
            Leaf("classId", 7),  # 3 bits
            Leaf("weaponType", 15),  # 4 bits
            Leaf("armorType", 3),  # 2 bits
            Leaf("cpLevel", 3600),  # 12 bits
        ],
        config=config,
        logger=logger,
    )


def map_pin_schema(
    *, config: CodecConfig | None = None, logger: TraceLogger = None
) -> RecordSchema:
    """Map pin: coordinates scaled by 1000, pin type/subtype and zone (43 bits)."""
    return create_schema(
        [
            Leaf("x", 1000),  # 10 bits
            Leaf("y", 1000),  # 10 bits
            Leaf("pinType", 127),  # 7 bits
            Leaf("subType", 31),  # 5 bits
            Leaf("zoneId", 2047),  # 11 bits
        ],
        config=config,
        logger=logger,
    )


def gear_schema(
    *, config: CodecConfig | None = None, logger: TraceLogger = None
) -> RecordSchema:
    """Full gear set: 14 pieces of item id, glyph and two parameters (complex mode)."""
    return create_schema(
        [
            Composite(
                "gear",
                GEAR_PIECES,
                [
                    Leaf("id", 65535),
                    Leaf("glyph", 255),
                    Leaf("param1", 4095),
                    Leaf("param2", 4095),
                ],
            )
        ],
        config=config,
        logger=logger,
    )
