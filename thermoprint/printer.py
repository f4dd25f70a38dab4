"""A connected thermal printer: turns text, codes and images into packets.

The printer does not know how bytes reach the device. It is handed a
transport (usually a BLE characteristic writer) and only decides what to
send and in which order.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from .canvas import Canvas
from .gfxfont import GFXFont
from .models import PrinterType, WriteMode, printer_type_for_name
from .protocol import (
    DRAWING_MODE_IMAGE,
    DRAWING_MODE_TEXT,
    PAPER_FEED,
    PAPER_RETRACT,
    PERIPAGE_PREFIX,
    SET_DRAWING_MODE,
    SET_ENERGY,
    align_command,
    barcode_command,
    blank_feed_line,
    cat_command,
    cat_command16,
    cat_scanline,
    font_command,
    peripage_raster_header,
    qr_code_commands,
    raster_header,
)

__all__ = ["Transport", "NotConnectedError", "Printer"]

# A cat printer text line is 48 characters of 8 pixels.
_CAT_LINE_CHARS = 48
_CAT_GLYPH_ROWS = 8
_FIRST_FONT_CODE = 0x20
_NEWLINE = 0x0A
_MAX_FEED = 255
_FEED_DELAY = 0.005
# Models that take a 16-bit argument for feed and retract.
_WIDE_FEED_MODELS = frozenset({"MX10"})
_QR_MODELS = frozenset({PrinterType.FOMEMO, PrinterType.MTP2, PrinterType.MTP3})


@runtime_checkable
class Transport(Protocol):
    """Anything that can deliver a packet of bytes to the printer."""

    def write(self, data: bytes) -> None:
        """Send one packet to the printer."""


class NotConnectedError(RuntimeError):
    """Raised when a printer is used after it has been disconnected."""


class Printer:
    """A thermal printer of a known family reached through a transport.

    cat_font is an 8x8 bitmap font (8 bytes per character, starting at the
    space character) used to render plain text on cat printers, which have
    no built-in font. max_packet splits every write into packets of at most
    that many bytes. sleep is called with the pauses the printer needs
    between packets when writing without response.
    """

    def __init__(
        self,
        transport: Transport,
        printer_type: PrinterType | int,
        name: str = "",
        *,
        write_mode: WriteMode | int = WriteMode.WITHOUT_RESPONSE,
        cat_font: bytes | None = None,
        max_packet: int | None = None,
        encoding: str = "latin-1",
        sleep: Callable[[float], object] = time.sleep,
    ) -> None:
        if cat_font is not None and len(cat_font) % _CAT_GLYPH_ROWS:
            raise ValueError("cat_font length must be a multiple of 8 bytes")
        if max_packet is not None and max_packet <= 0:
            raise ValueError(f"max_packet must be positive, got {max_packet}")
        self.transport = transport
        self.printer_type = PrinterType(printer_type)
        self.name = name
        self.write_mode = WriteMode(write_mode)
        self.cat_font = bytes(cat_font) if cat_font is not None else None
        self.max_packet = max_packet
        self.encoding = encoding
        self._sleep = sleep
        self._line = bytearray()
        self._connected = True

    @classmethod
    def from_name(cls, transport: Transport, name: str, **options: object) -> Printer:
        """Create a printer for an advertised BLE name; raise ValueError if unsupported."""
        printer_type = printer_type_for_name(name)
        if printer_type is None:
            raise ValueError(f"unsupported printer: {name!r}")
        return cls(transport, printer_type, name, **options)

    def __repr__(self) -> str:
        return (
            f"Printer(type={self.printer_type.name}, name={self.name!r}, "
            f"connected={self._connected})"
        )

    def __enter__(self) -> Printer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.disconnect()

    @property
    def connected(self) -> bool:
        """True until disconnect() is called."""
        return self._connected

    @property
    def width(self) -> int:
        """Print width in pixels."""
        return self.printer_type.width

    # Low level output

    def _require_connected(self) -> None:
        if not self._connected:
            raise NotConnectedError("printer is not connected")

    def _write(self, data: bytes) -> None:
        if not data:
            return
        if self.max_packet is None:
            self.transport.write(bytes(data))
            return
        for start in range(0, len(data), self.max_packet):
            self.transport.write(bytes(data[start:start + self.max_packet]))

    def _encode(self, text: str | bytes) -> bytes:
        if isinstance(text, str):
            return text.encode(self.encoding)
        return bytes(text)

    def write_raw(self, data: bytes) -> None:
        """Send bytes to the printer unchanged."""
        self._require_connected()
        self._write(bytes(data))

    # Plain text

    def _cat_font_data(self) -> bytes:
        if self.cat_font is None:
            raise ValueError("printing text on a cat printer needs a cat_font")
        return self.cat_font

    def _check_cat_char(self, code: int) -> None:
        font = self._cat_font_data()
        index = (code - _FIRST_FONT_CODE) * _CAT_GLYPH_ROWS
        if code < _FIRST_FONT_CODE or index + _CAT_GLYPH_ROWS > len(font):
            raise ValueError(f"character code {code:#x} is not in the cat font")

    def _flush_cat_line(self) -> None:
        font = self._cat_font_data()
        self._write(cat_command(SET_DRAWING_MODE, DRAWING_MODE_TEXT))
        for row in range(_CAT_GLYPH_ROWS):
            self._write(
                cat_scanline(
                    font[(code - _FIRST_FONT_CODE) * _CAT_GLYPH_ROWS + row]
                    for code in self._line
                )
            )
        self._line.clear()

    def print_text(self, text: str | bytes) -> None:
        """Print text; a line is only printed once it ends or wraps."""
        self._require_connected()
        data = self._encode(text)
        if self.printer_type is PrinterType.CAT:
            self._cat_font_data()
            for code in data:
                if code == _NEWLINE:
                    if not self._line:
                        self._check_cat_char(ord(" "))
                        self._line.append(ord(" "))
                    self._flush_cat_line()
                if code >= _FIRST_FONT_CODE:
                    self._check_cat_char(code)
                    self._line.append(code)
                    if len(self._line) == _CAT_LINE_CHARS:
                        self._flush_cat_line()
            return
        if self.printer_type.is_peripage:
            self._write(PERIPAGE_PREFIX)
        self._write(data)

    def print_line(self, text: str | bytes) -> None:
        """Print text followed by a line feed, so it is printed at once."""
        self.print_text(text)
        self.print_text(b"\n")

    # Printer settings and paper

    def _wide_feed(self) -> bool:
        return self.name in _WIDE_FEED_MODELS

    def feed(self, lines: int) -> None:
        """Feed the paper by scanlines; negative values retract (cat printers only)."""
        self._require_connected()
        if not -_MAX_FEED <= lines <= _MAX_FEED:
            raise ValueError(f"lines must be in -255..255, got {lines}")
        if lines < 0:
            if self.printer_type is not PrinterType.CAT:
                raise ValueError(f"{self.printer_type.name} printers cannot retract paper")
            build = cat_command16 if self._wide_feed() else cat_command
            self._write(build(PAPER_RETRACT, -lines))
            return
        if self.printer_type is PrinterType.CAT:
            build = cat_command16 if self._wide_feed() else cat_command
            self._write(build(PAPER_FEED, lines))
        elif self.printer_type.speaks_escpos and not self.printer_type.is_peripage:
            # These have no feed command, so print blank one-line images instead.
            for _ in range(lines):
                self._write(blank_feed_line())
                self._sleep(_FEED_DELAY)

    def set_energy(self, energy: int) -> None:
        """Set the print head energy on cat printers; other printers ignore it."""
        self._require_connected()
        if self.printer_type is PrinterType.CAT:
            self._write(cat_command16(SET_ENERGY, energy))

    def set_font(
        self,
        font: int,
        underline: bool = False,
        double_wide: bool = False,
        double_tall: bool = False,
        emphasized: bool = False,
    ) -> None:
        """Select a built-in font and its attributes; cat printers have none."""
        self._require_connected()
        command = font_command(
            font, underline, double_wide, double_tall, emphasized,
            self.printer_type.is_peripage,
        )
        if self.printer_type.speaks_escpos:
            self._write(command)

    def align(self, align: int) -> None:
        """Set text and barcode alignment."""
        self._require_connected()
        self._write(align_command(align))

    def qr_code(self, text: str | bytes, size: int = 3) -> None:
        """Print a QR code with the given module size."""
        self._require_connected()
        if self.printer_type not in _QR_MODELS:
            raise ValueError(f"{self.printer_type.name} printers do not print QR codes")
        for packet in qr_code_commands(self._encode(text), size):
            self._write(packet)

    def barcode(
        self, kind: int, height: int, data: str | bytes, text_position: int
    ) -> None:
        """Print a 1D barcode."""
        self._require_connected()
        self._write(barcode_command(kind, height, self._encode(data), text_position))

    # Graphics

    def _begin_graphics(self, width: int, height: int) -> None:
        if self.printer_type is PrinterType.CAT:
            self._write(cat_command(SET_DRAWING_MODE, DRAWING_MODE_IMAGE))
        elif self.printer_type.is_peripage:
            for packet in peripage_raster_header(width, height):
                self._write(packet)
        else:
            self._write(raster_header(width, height))

    def _send_scanline(self, row: bytes) -> None:
        if self.printer_type is PrinterType.CAT:
            self._write(cat_scanline(row))
        else:
            self._write(row)
        if self.write_mode is WriteMode.WITHOUT_RESPONSE:
            # Give the printer time to print the line before more data arrives.
            self._sleep((1 + len(row) // 8) / 1000)

    def print_canvas(self, canvas: Canvas) -> None:
        """Print a canvas, top row first."""
        self._require_connected()
        self._begin_graphics(canvas.width, canvas.height)
        for row in canvas.rows():
            self._send_scanline(row)

    def print_canvas_side(self, canvas: Canvas) -> None:
        """Print a canvas turned a quarter turn."""
        self._require_connected()
        self._begin_graphics(canvas.height, canvas.width)
        for row in canvas.side_rows():
            self._send_scanline(row)

    def print_custom_text(self, font: GFXFont, x: int, text: str) -> None:
        """Print one line of text in a GFX font, starting x pixels from the left."""
        self._require_connected()
        if x < 0:
            raise ValueError(f"x must not be negative, got {x}")
        width = self.width
        pitch = (width + 7) >> 3
        self._begin_graphics(width, font.y_advance)
        # Two thirds of a character sit above the baseline.
        top = -((font.y_advance * 2) // 3)
        bottom = font.y_advance + top
        lines = [bytearray(pitch) for _ in range(bottom - top + 1)]
        for char in text:
            if x >= width:
                break
            glyph = font.glyph_for(char)
            if glyph is None:
                continue
            left = x + glyph.x_offset
            for gx, gy in font.glyph_pixels(glyph):
                px = left + gx
                line = glyph.y_offset + gy - top
                if 0 <= px < width and 0 <= line < len(lines):
                    lines[line][px >> 3] |= 0x80 >> (px & 7)
            x += glyph.x_advance
        for line in lines:
            self._send_scanline(bytes(line))

    def disconnect(self) -> None:
        """Mark the printer as disconnected; any buffered cat text is dropped."""
        self._line.clear()
        self._connected = False