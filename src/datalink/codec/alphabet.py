"""Glyph alphabet for the custom-base text encoding.

The default alphabet avoids vowels, visually confusing characters
(0, O, 1, l, I) and the ':' metadata separator, so encoded payloads never
spell words and can always be split on ':'.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping

from ..exceptions import AlphabetError, InvalidGlyph

SAFE_GLYPHS = "bcdfghjkmnpqrstvwxyzBCDFGHJKLMNPQRSTVWXYZ23456789-_~!@#$%^&*()+={}[]<>"

# Glyphs that carry structure in self-describing payloads
METADATA_SEPARATOR = ":"


class Alphabet:
    """Ordered set of glyphs used as digits.

    The glyph at index 0 is the zero/pad glyph. The lookup table is built once
    and exposed read-only, so an Alphabet can be shared between threads.

    Example:
        >>> alphabet = Alphabet("0123456789")
        >>> alphabet.glyph_at(7)
        '7'
        >>> alphabet.index_of("7")
        7
    """

    def __init__(self, glyphs: str) -> None:
        """Build an alphabet from a string of unique single-character glyphs.

        Args:
            glyphs: The glyphs in digit order

        Raises:
            AlphabetError: If glyphs is not a string, is too small, repeats a
                glyph, or contains the metadata separator
        """
        if not isinstance(glyphs, str):
            raise AlphabetError(
                "Alphabet glyphs must be a string of single characters, "
                f"got {type(glyphs).__name__}"
            )
        if len(glyphs) < 2:
            raise AlphabetError(f"Alphabet needs at least 2 glyphs, got {len(glyphs)}")
        if METADATA_SEPARATOR in glyphs:
            raise AlphabetError(f"Alphabet must not contain the separator {METADATA_SEPARATOR!r}")

        index: dict[str, int] = {}
        for position, glyph in enumerate(glyphs):
            if glyph in index:
                raise AlphabetError(f"Duplicate glyph {glyph!r} at position {position}")
            index[glyph] = position

        self._glyphs = glyphs
        self._index: Mapping[str, int] = MappingProxyType(index)

    @property
    def base(self) -> int:
        """Number of glyphs (the numeric base)."""
        return len(self._glyphs)

    @property
    def glyphs(self) -> str:
        return self._glyphs

    @property
    def zero_glyph(self) -> str:
        """Glyph for digit value 0, also used for left padding."""
        return self._glyphs[0]

    def glyph_at(self, index: int) -> str:
        """Return the glyph for a digit value.

        Raises:
            InvalidGlyph: If index is not a digit value of this alphabet
        """
        if index < 0 or index >= len(self._glyphs):
            raise InvalidGlyph(f"Digit value {index} outside alphabet of base {self.base}")
        return self._glyphs[index]

    def index_of(self, glyph: str) -> int:
        """Return the digit value of a glyph.

        Raises:
            InvalidGlyph: If glyph is not part of the alphabet
        """
        try:
            return self._index[glyph]
        except KeyError:
            raise InvalidGlyph(f"Character {glyph!r} is not in the alphabet") from None

    def __contains__(self, glyph: object) -> bool:
        return glyph in self._index

    def __len__(self) -> int:
        return len(self._glyphs)

    def __iter__(self) -> Iterator[str]:
        return iter(self._glyphs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._glyphs == other._glyphs

    def __hash__(self) -> int:
        return hash(self._glyphs)

    def __repr__(self) -> str:
        return f"Alphabet(base={self.base})"


DEFAULT_ALPHABET = Alphabet(SAFE_GLYPHS)
