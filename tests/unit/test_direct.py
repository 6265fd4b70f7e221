"""Unit tests for the self-describing direct format."""

from __future__ import annotations

import logging

import pytest

from datalink import (
    DataTooShort,
    DecodeError,
    InvalidGlyph,
    MissingMetadataSeparator,
    PayloadOverflow,
    TrailingData,
    UnknownFormatDiscriminator,
    UnparsableFieldCount,
    ValueOutOfRange,
    WidthMismatch,
    encode_fixed_width,
)
from datalink.codec.direct import decode_direct, encode_direct, parse_direct_header

LARGE_VALUES = [999999, 888888, 777777, 666666]


class TestEncodeDirect:
    """Test encode_direct."""

    def test_uniform_widths(self) -> None:
        """Four 24-bit values take four glyphs each after a short header."""
        payload = encode_direct(LARGE_VALUES, [24] * 4)

        assert payload.startswith("E4-24:4:")
        assert len(payload) == 24
        assert decode_direct(payload, [24] * 4) == LARGE_VALUES

    def test_mixed_widths(self) -> None:
        """Width table entries are sorted ascending; data keeps field order."""
        payload = encode_direct([1, 300, 5], [8, 16, 8])

        assert payload == "E3-8:2-16:3:bcbgBbh"
        assert decode_direct(payload, [8, 16, 8]) == [1, 300, 5]

    def test_values_checked(self) -> None:
        with pytest.raises(ValueOutOfRange):
            encode_direct([256], [8])
        with pytest.raises(WidthMismatch):
            encode_direct([1, 2], [8])

    def test_trace(self, caplog: pytest.LogCaptureFixture, trace_logger: logging.Logger) -> None:
        caplog.set_level(logging.DEBUG, logger=trace_logger.name)
        encode_direct(LARGE_VALUES, [24] * 4, logger=trace_logger)

        assert any("24-bit fields use 4 glyphs" in r.getMessage() for r in caplog.records)


class TestParseDirectHeader:
    """Test header parsing."""

    def test_header(self) -> None:
        assert parse_direct_header("E3-8:2-16:3") == (3, {8: 2, 16: 3})

    def test_count_only(self) -> None:
        assert parse_direct_header("E2") == (2, {})

    def test_bad_count(self) -> None:
        with pytest.raises(UnparsableFieldCount):
            parse_direct_header("Ex")

    def test_bad_table(self) -> None:
        with pytest.raises(DecodeError):
            parse_direct_header("E1-4:x")

    def test_zero_entry(self) -> None:
        with pytest.raises(DecodeError):
            parse_direct_header("E1-0:1")

    def test_non_ascii_digits(self) -> None:
        """Only ASCII numerals are header digits."""
        with pytest.raises(UnparsableFieldCount):
            parse_direct_header("E\u0664-24:4")
        with pytest.raises(DecodeError):
            parse_direct_header("E4-\u0662\u0664:4")
        with pytest.raises(UnparsableFieldCount):
            decode_direct("E\u0664-24:4:bbbb", [24] * 4)


class TestDecodeDirect:
    """Test decode_direct error handling."""

    def test_wrong_tag(self) -> None:
        with pytest.raises(UnknownFormatDiscriminator):
            decode_direct("X4-24:4:bbbb", [24])

    def test_missing_separator(self) -> None:
        with pytest.raises(MissingMetadataSeparator):
            decode_direct("E4", [24] * 4)

    def test_count_mismatch(self) -> None:
        payload = encode_direct(LARGE_VALUES, [24] * 4)
        with pytest.raises(WidthMismatch):
            decode_direct(payload, [24] * 3)

    def test_data_too_short(self) -> None:
        payload = encode_direct(LARGE_VALUES, [24] * 4)
        with pytest.raises(DataTooShort):
            decode_direct(payload[:-1], [24] * 4)

    def test_trailing_data(self) -> None:
        payload = encode_direct(LARGE_VALUES, [24] * 4)
        with pytest.raises(TrailingData):
            decode_direct(payload + "b", [24] * 4)

    def test_overflow(self) -> None:
        """A 4-bit field holding 16 is rejected."""
        with pytest.raises(PayloadOverflow):
            decode_direct("E1-4:1:w", [4])

    def test_invalid_glyph(self) -> None:
        with pytest.raises(InvalidGlyph):
            decode_direct("E1-4:1:a", [4])

    def test_missing_mapping_falls_back(
        self, caplog: pytest.LogCaptureFixture, trace_logger: logging.Logger
    ) -> None:
        """Widths absent from the header use their computed glyph count."""
        caplog.set_level(logging.DEBUG, logger=trace_logger.name)
        payload = "E2:" + encode_fixed_width(200, 2) + encode_fixed_width(5, 2)

        assert decode_direct(payload, [8, 8], logger=trace_logger) == [200, 5]
        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "no mapping for 8-bit fields" in warnings[0].getMessage()
