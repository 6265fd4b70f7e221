"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging

import pytest


@pytest.fixture
def build_values() -> dict[str, int]:
    """Alliance/race/CP record used throughout the examples."""
    return {"alliance": 2, "race": 7, "cpLevel": 455}


@pytest.fixture
def build_descriptors() -> list[dict[str, object]]:
    """Descriptor mappings for the alliance/race/CP record."""
    return [
        {"name": "alliance", "maxValue": 3},
        {"name": "race", "maxValue": 10},
        {"name": "cpLevel", "maxValue": 3600},
    ]


@pytest.fixture
def gear_items() -> list[dict[str, int]]:
    """A 14-piece gear set; four item ids exceed 16 bits."""
    return [
        {"id": 12345, "glyph": 67, "param1": 890, "param2": 123},
        {"id": 23456, "glyph": 78, "param1": 901, "param2": 234},
        {"id": 34567, "glyph": 89, "param1": 12, "param2": 345},
        {"id": 45678, "glyph": 90, "param1": 123, "param2": 456},
        {"id": 56789, "glyph": 12, "param1": 234, "param2": 567},
        {"id": 67890, "glyph": 23, "param1": 345, "param2": 678},
        {"id": 78901, "glyph": 34, "param1": 456, "param2": 789},
        {"id": 89012, "glyph": 45, "param1": 567, "param2": 890},
        {"id": 90123, "glyph": 56, "param1": 678, "param2": 901},
        {"id": 10234, "glyph": 67, "param1": 789, "param2": 12},
        {"id": 11345, "glyph": 78, "param1": 890, "param2": 123},
        {"id": 12456, "glyph": 89, "param1": 901, "param2": 234},
        {"id": 13567, "glyph": 90, "param1": 12, "param2": 345},
        {"id": 14678, "glyph": 12, "param1": 123, "param2": 456},
    ]


@pytest.fixture
def trace_logger() -> logging.Logger:
    """Logger to inject into codec calls."""
    logger = logging.getLogger("tests.datalink")
    logger.setLevel(logging.DEBUG)
    return logger
