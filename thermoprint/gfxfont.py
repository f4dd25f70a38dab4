"""Proportional bitmap fonts in the Adafruit GFX layout.

A font is one packed bitmap plus a glyph table for a contiguous range of
character codes. Each glyph's pixels are stored row after row, most
significant bit first, with no padding between rows.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

__all__ = ["Glyph", "GFXFont"]

# Starting value for the top of a string box, so any glyph lowers it.
_BOX_TOP_START = 100


@dataclass(frozen=True)
class Glyph:
    """Placement and bitmap location of one character."""

    bitmap_offset: int
    width: int
    height: int
    x_advance: int
    x_offset: int
    y_offset: int


@dataclass(frozen=True)
class GFXFont:
    """A font covering the character codes first..last inclusive."""

    bitmap: bytes
    glyphs: Sequence[Glyph] = field(repr=False)
    first: int
    last: int
    y_advance: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "bitmap", bytes(self.bitmap))
        object.__setattr__(self, "glyphs", tuple(self.glyphs))
        if self.last < self.first:
            raise ValueError(f"last ({self.last}) is before first ({self.first})")
        expected = self.last - self.first + 1
        if len(self.glyphs) != expected:
            raise ValueError(
                f"font covers {expected} characters but has {len(self.glyphs)} glyphs"
            )

    def glyph_for(self, char: str | int) -> Glyph | None:
        """Return the glyph for a character or code, or None if the font lacks it."""
        if isinstance(char, str):
            if len(char) != 1:
                raise ValueError(f"expected a single character, got {char!r}")
            code = ord(char)
        else:
            code = int(char)
        if code < self.first or code > self.last:
            return None
        return self.glyphs[code - self.first]

    def string_box(self, text: str) -> tuple[int, int, int]:
        """Return (width, top, bottom) of the box enclosing text; unknown characters are skipped."""
        width = 0
        top = _BOX_TOP_START
        bottom = 0
        for char in text:
            glyph = self.glyph_for(char)
            if glyph is None:
                continue
            width += glyph.x_advance
            top = min(top, glyph.y_offset)
            bottom = max(bottom, glyph.height + glyph.y_offset)
        return width, top, bottom

    def glyph_pixels(self, glyph: Glyph) -> Iterator[tuple[int, int]]:
        """Yield (x, y) of every set pixel, relative to the glyph's upper-left corner."""
        if glyph.width <= 0 or glyph.height <= 0:
            return
        start = glyph.bitmap_offset * 8
        count = glyph.width * glyph.height
        if start + count > len(self.bitmap) * 8:
            raise ValueError("glyph bitmap runs past the end of the font bitmap")
        for index in range(count):
            bit = start + index
            if self.bitmap[bit >> 3] & (0x80 >> (bit & 7)):
                y, x = divmod(index, glyph.width)
                yield x, y