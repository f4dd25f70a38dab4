"""Wire formats for the supported thermal printers.

Two command families are covered. The "cat" printers use framed packets with
a CRC-8 checksum. The others use ESC/POS style sequences, and the PeriPage
models need a short prefix in front of those. Every function here only builds
bytes; sending them is left to the caller.
"""

from __future__ import annotations

from collections.abc import Iterable

from .models import Align

__all__ = [
    "PAPER_RETRACT",
    "PAPER_FEED",
    "DRAW_LINE",
    "GET_DEVICE_STATE",
    "SET_QUALITY",
    "GET_DEVICE_INFO",
    "SET_ENERGY",
    "SET_DRAWING_MODE",
    "DRAWING_MODE_IMAGE",
    "DRAWING_MODE_TEXT",
    "PERIPAGE_PREFIX",
    "LATTICE_START",
    "LATTICE_END",
    "crc8",
    "mirror_byte",
    "mirror_bytes",
    "cat_command",
    "cat_command16",
    "cat_scanline",
    "raster_header",
    "peripage_raster_header",
    "font_command",
    "align_command",
    "qr_code_commands",
    "barcode_command",
    "blank_feed_line",
]

# Cat printer command codes.
PAPER_RETRACT = 0xA0
PAPER_FEED = 0xA1
DRAW_LINE = 0xA2
GET_DEVICE_STATE = 0xA3
SET_QUALITY = 0xA4
GET_DEVICE_INFO = 0xA8
SET_ENERGY = 0xAF
SET_DRAWING_MODE = 0xBE

DRAWING_MODE_IMAGE = 0
DRAWING_MODE_TEXT = 1

_CAT_PREFIX = b"\x51\x78"
_CAT_SUFFIX = 0xFF

PERIPAGE_PREFIX = bytes([0x10, 0xFF, 0xFE, 0x01])

# Constant "control lattice" packets sent around a cat printer job.
LATTICE_START = bytes(
    [0x51, 0x78, 0xA6, 0x00, 0x0B, 0x00, 0xAA, 0x55, 0x17, 0x38,
     0x44, 0x5F, 0x5F, 0x5F, 0x44, 0x38, 0x2C, 0xA1, 0xFF]
)
LATTICE_END = bytes(
    [0x51, 0x78, 0xA6, 0x00, 0x0B, 0x00, 0xAA, 0x55, 0x17, 0x00,
     0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x17, 0x11, 0xFF]
)

_GS = 0x1D
_ESC = 0x1B


def _crc8_entry(value: int) -> int:
    for _ in range(8):
        value = ((value << 1) ^ 0x07) if value & 0x80 else (value << 1)
        value &= 0xFF
    return value


_CRC8_TABLE = bytes(_crc8_entry(i) for i in range(256))
_MIRROR_TABLE = bytes(int(f"{i:08b}"[::-1], 2) for i in range(256))


def _byte(value: int, what: str) -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{what} must be in 0..255, got {value}")
    return value


def _as_bytes(data: str | bytes | bytearray) -> bytes:
    if isinstance(data, str):
        return data.encode("latin-1")
    return bytes(data)


def crc8(data: Iterable[int]) -> int:
    """CRC-8 (polynomial 0x07, initial value 0) as used by cat printers."""
    crc = 0
    for value in data:
        crc = _CRC8_TABLE[crc ^ value]
    return crc


def mirror_byte(value: int) -> int:
    """Reverse the bit order of one byte."""
    return _MIRROR_TABLE[_byte(value, "value")]


def mirror_bytes(data: Iterable[int]) -> bytes:
    """Reverse the bit order of every byte in data."""
    return bytes(data).translate(_MIRROR_TABLE)


def _cat_packet(command: int, payload: bytes) -> bytes:
    if len(payload) > 0xFF:
        raise ValueError(f"payload too long: {len(payload)} bytes")
    return (
        _CAT_PREFIX
        + bytes([_byte(command, "command"), 0x00, len(payload), 0x00])
        + payload
        + bytes([crc8(payload), _CAT_SUFFIX])
    )


def cat_command(command: int, value: int) -> bytes:
    """Cat printer command carrying one byte of data."""
    return _cat_packet(command, bytes([_byte(value, "value")]))


def cat_command16(command: int, value: int) -> bytes:
    """Cat printer command carrying a 16-bit little-endian value."""
    if not 0 <= value <= 0xFFFF:
        raise ValueError(f"value must be in 0..65535, got {value}")
    return _cat_packet(command, value.to_bytes(2, "little"))


def cat_scanline(row: Iterable[int]) -> bytes:
    """One uncompressed cat printer raster line from MSB-first pixel bytes."""
    return _cat_packet(DRAW_LINE, mirror_bytes(row))


def raster_header(width: int, height: int) -> bytes:
    """ESC/POS raster image header (GS v 0 0) for width x height pixels."""
    return bytes(
        [_GS, ord("v"), ord("0"), ord("0"), ((width + 7) >> 3) & 0xFF, 0x00]
    ) + (height & 0xFFFF).to_bytes(2, "little")


def peripage_raster_header(width: int, height: int) -> list[bytes]:
    """Packets that start a PeriPage raster image: prefix, padding, header."""
    header = bytes(
        [_GS, 0x76, 0x30, 0x00, ((width + 7) >> 3) & 0xFF, 0x00]
    ) + (height & 0xFFFF).to_bytes(2, "little")
    return [PERIPAGE_PREFIX, bytes(12), header]


def font_command(
    font: int,
    underline: bool,
    double_wide: bool,
    double_tall: bool,
    emphasized: bool,
    peripage: bool,
) -> bytes:
    """ESC ! n selecting a built-in font with its attributes."""
    if font not in (0, 1):
        raise ValueError(f"unknown printer font: {font}")
    mode = font
    if underline:
        mode |= 0x80
    if double_wide:
        mode |= 0x20
    if double_tall:
        mode |= 0x10
    if emphasized:
        mode |= 0x08
    command = bytes([_ESC, 0x21, mode])
    return PERIPAGE_PREFIX + command if peripage else command


def align_command(align: int) -> bytes:
    """ESC a n setting left, centre or right alignment."""
    try:
        value = Align(align)
    except ValueError:
        raise ValueError(f"invalid alignment: {align!r}") from None
    return bytes([_ESC, ord("a"), value])


def qr_code_commands(text: str | bytes, size: int = 3) -> list[bytes]:
    """Packets that store and print a QR code with the given module size."""
    data = _as_bytes(text)
    store_len = len(data) + 3
    if store_len > 0xFFFF:
        raise ValueError(f"QR data too long: {len(data)} bytes")
    size_qr = bytes([_GS, 0x28, 0x6B, 0x03, 0x00, 0x31, 0x43, _byte(size, "size")])
    error_qr = bytes([_GS, 0x28, 0x6B, 0x03, 0x00, 0x31, 0x45, 0x31])
    store_qr = bytes([_GS, 0x28, 0x6B]) + store_len.to_bytes(2, "little") + bytes(
        [0x31, 0x50, 0x30]
    )
    print_qr = bytes([_GS, 0x28, 0x6B, 0x03, 0x00, 0x31, 0x51, 0x30])
    return [size_qr, error_qr, store_qr, data, print_qr]


def barcode_command(
    kind: int, height: int, data: str | bytes, text_position: int
) -> bytes:
    """GS H / GS h / GS w / GS k sequence printing a 1D barcode."""
    payload = _as_bytes(data)
    if len(payload) > 0xFF:
        raise ValueError(f"barcode data too long: {len(payload)} bytes")
    return bytes(
        [
            _GS, 0x48, _byte(text_position, "text_position"),
            _GS, 0x68, _byte(height, "height"),
            _GS, 0x77, 2,
            _GS, 0x6B, _byte(kind, "kind"),
            len(payload),
        ]
    ) + payload


def blank_feed_line() -> bytes:
    """A one byte wide, one line high blank raster image, used to feed paper."""
    return raster_header(8, 1) + b"\x00"