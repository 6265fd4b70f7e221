"""Unit tests for the glyph alphabet."""

from __future__ import annotations

import pytest

from datalink import DEFAULT_ALPHABET, SAFE_GLYPHS, Alphabet, AlphabetError, InvalidGlyph


class TestDefaultAlphabet:
    """Test the default safe glyph set."""

    def test_base(self) -> None:
        """The safe set has 70 glyphs."""
        assert DEFAULT_ALPHABET.base == 70
        assert len(DEFAULT_ALPHABET) == len(SAFE_GLYPHS)

    def test_zero_glyph(self) -> None:
        """Index 0 is the zero/pad glyph."""
        assert DEFAULT_ALPHABET.zero_glyph == "b"
        assert DEFAULT_ALPHABET.glyph_at(0) == "b"

    def test_excludes_unsafe_characters(self) -> None:
        """Vowels, confusable characters and the separator are excluded."""
        for char in "aeiouAEIOU01lO:":
            assert char not in DEFAULT_ALPHABET

    def test_bijective(self) -> None:
        """glyph_at and index_of are exact inverses."""
        for glyph in DEFAULT_ALPHABET:
            assert DEFAULT_ALPHABET.glyph_at(DEFAULT_ALPHABET.index_of(glyph)) == glyph
        for index in range(DEFAULT_ALPHABET.base):
            assert DEFAULT_ALPHABET.index_of(DEFAULT_ALPHABET.glyph_at(index)) == index

    def test_index_of_foreign_character(self) -> None:
        """Characters outside the alphabet are a hard failure."""
        for char in ["a", "E", ":", " ", "0", "é"]:
            with pytest.raises(InvalidGlyph):
                DEFAULT_ALPHABET.index_of(char)

    def test_glyph_at_out_of_range(self) -> None:
        """Digit values outside the base are rejected."""
        with pytest.raises(InvalidGlyph):
            DEFAULT_ALPHABET.glyph_at(70)
        with pytest.raises(InvalidGlyph):
            DEFAULT_ALPHABET.glyph_at(-1)


class TestCustomAlphabet:
    """Test building alphabets."""

    def test_decimal(self) -> None:
        """A decimal alphabet works like ordinary digits."""
        alphabet = Alphabet("0123456789")
        assert alphabet.base == 10
        assert alphabet.index_of("7") == 7

    def test_duplicate_glyph(self) -> None:
        """Duplicate glyphs are rejected."""
        with pytest.raises(AlphabetError, match="Duplicate"):
            Alphabet("abca")

    def test_too_small(self) -> None:
        """A single glyph cannot form a base."""
        with pytest.raises(AlphabetError, match="at least 2"):
            Alphabet("x")

    def test_separator_reserved(self) -> None:
        """The metadata separator can't be a digit."""
        with pytest.raises(AlphabetError, match="separator"):
            Alphabet("ab:")

    def test_multi_character_glyphs(self) -> None:
        """Glyphs are single characters given as one string."""
        with pytest.raises(AlphabetError):
            Alphabet(["ab", "cd"])  # type: ignore[arg-type]

    def test_equality(self) -> None:
        """Alphabets compare by their glyphs."""
        assert Alphabet(SAFE_GLYPHS) == DEFAULT_ALPHABET
        assert Alphabet("01") != Alphabet("10")
