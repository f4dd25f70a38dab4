"""A 1-bit back buffer for printer graphics.

Pixels are packed eight to a byte, most significant bit first, and each row
starts on a byte boundary. A set bit is a black dot.
"""

from __future__ import annotations

from collections.abc import Iterator

from .gfxfont import GFXFont

__all__ = ["Canvas"]

_BMP_MIN_HEADER = 30


class Canvas:
    """A monochrome image of width x height pixels."""

    def __init__(self, width: int, height: int, buffer: bytearray | None = None) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"canvas size must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pitch = (width + 7) >> 3
        size = self.pitch * height
        if buffer is None:
            buffer = bytearray(size)
        elif len(buffer) < size:
            raise ValueError(f"buffer holds {len(buffer)} bytes, need {size}")
        self.buffer = buffer

    def __repr__(self) -> str:
        return f"Canvas(width={self.width}, height={self.height})"

    def _inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def _put(self, x: int, y: int, color: object) -> None:
        index = y * self.pitch + (x >> 3)
        mask = 0x80 >> (x & 7)
        if color:
            self.buffer[index] |= mask
        else:
            self.buffer[index] &= ~mask & 0xFF

    def fill(self, pattern: int) -> None:
        """Set every byte of the image to pattern, e.g. 0x00 for white or 0xFF for black."""
        if not 0 <= pattern <= 0xFF:
            raise ValueError(f"pattern must be in 0..255, got {pattern}")
        size = self.pitch * self.height
        self.buffer[:size] = bytes([pattern]) * size

    def set_pixel(self, x: int, y: int, color: object = True) -> None:
        """Set (color true) or clear one pixel."""
        if not self._inside(x, y):
            raise IndexError(f"pixel ({x}, {y}) is outside {self.width}x{self.height}")
        self._put(x, y, color)

    def get_pixel(self, x: int, y: int) -> bool:
        """Return True if the pixel is set."""
        if not self._inside(x, y):
            raise IndexError(f"pixel ({x}, {y}) is outside {self.width}x{self.height}")
        return bool(self.buffer[y * self.pitch + (x >> 3)] & (0x80 >> (x & 7)))

    def draw_line(self, x1: int, y1: int, x2: int, y2: int, color: object = True) -> None:
        """Draw a line between two points; nothing is drawn if either lies outside."""
        if not (self._inside(x1, y1) and self._inside(x2, y2)):
            return
        if abs(x2 - x1) > abs(y2 - y1):
            if x2 < x1:
                x1, y1, x2, y2 = x2, y2, x1, y1
            dx = x2 - x1
            dy = y2 - y1
            step = 1 if dy >= 0 else -1
            dy = abs(dy)
            error = dx >> 1
            y = y1
            for x in range(x1, x2 + 1):
                self._put(x, y, color)
                error -= dy
                if error < 0:
                    error += dx
                    y += step
        else:
            if y1 > y2:
                x1, y1, x2, y2 = x2, y2, x1, y1
            dy = y2 - y1
            dx = x2 - x1
            step = 1 if dx >= 0 else -1
            dx = abs(dx)
            error = dy >> 1
            x = x1
            for y in range(y1, y2 + 1):
                self._put(x, y, color)
                error -= dx
                if error < 0:
                    error += dy
                    x += step

    def load_bmp(self, data: bytes, invert: bool = False, x_offset: int = 0, y_offset: int = 0) -> None:
        """Copy a 1-bpp Windows bitmap into the image with its upper-left corner at the offset."""
        data = bytes(data)
        if len(data) < _BMP_MIN_HEADER or data[:2] != b"BM":
            raise ValueError("not a BMP file")
        if x_offset < 0 or y_offset < 0:
            raise ValueError(f"offsets must not be negative, got ({x_offset}, {y_offset})")
        width = int.from_bytes(data[18:20], "little", signed=True)
        height = int.from_bytes(data[22:24], "little", signed=True)
        bottom_up = height > 0
        rows = abs(height)
        if width <= 0:
            raise ValueError(f"invalid bitmap width: {width}")
        if width + x_offset > self.width or rows + y_offset > self.height:
            raise ValueError(
                f"{width}x{rows} bitmap at ({x_offset}, {y_offset}) "
                f"does not fit a {self.width}x{self.height} canvas"
            )
        bits = int.from_bytes(data[28:30], "little")
        if bits != 1:
            raise ValueError(f"bitmap must have 1 bit per pixel, has {bits}")
        off_bits = int.from_bytes(data[10:12], "little")
        byte_width = (width + 7) >> 3
        row_pitch = (byte_width + 3) & ~3
        for y in range(rows):
            source_row = rows - 1 - y if bottom_up else y
            start = off_bits + source_row * row_pitch
            row = data[start:start + byte_width]
            if len(row) < byte_width:
                raise ValueError("bitmap data is truncated")
            if invert:
                row = bytes(b ^ 0xFF for b in row)
            for x in range(width):
                self._put(x_offset + x, y_offset + y, row[x >> 3] & (0x80 >> (x & 7)))

    def draw_custom_text(self, font: GFXFont, x: int, y: int, text: str) -> int:
        """Draw text in a GFX font with its baseline at y; return the x after the last character."""
        if x < 0 or y > self.height:
            raise ValueError(f"text origin ({x}, {y}) is off the canvas")
        for char in text:
            if x >= self.width:
                break
            glyph = font.glyph_for(char)
            if glyph is None:
                continue
            left = x + glyph.x_offset
            top = y + glyph.y_offset
            for gx, gy in font.glyph_pixels(glyph):
                px, py = left + gx, top + gy
                if self._inside(px, py):
                    self._put(px, py, True)
            x += glyph.x_advance
        return x

    def rows(self) -> Iterator[bytes]:
        """Yield each row of packed pixels, top to bottom."""
        for y in range(self.height):
            start = y * self.pitch
            yield bytes(self.buffer[start:start + self.pitch])

    def side_rows(self) -> Iterator[bytes]:
        """Yield the rows of the image turned a quarter turn, for printing sideways.

        Output row n holds column width-1-n of the image, top to bottom,
        packed MSB first into (height + 7) // 8 bytes.
        """
        length = (self.height + 7) >> 3
        for n in range(self.width):
            column = self.width - 1 - n
            line = bytearray(length)
            byte = column >> 3
            mask = 0x80 >> (column & 7)
            for row in range(self.height):
                if self.buffer[row * self.pitch + byte] & mask:
                    line[row >> 3] |= 0x80 >> (row & 7)
            yield bytes(line)