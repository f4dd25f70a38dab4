# thermoprint

`thermoprint` builds the bytes that small Bluetooth thermal printers expect.
It covers printers advertised as MP210, MP583, PT-210, MTP-2, MPT-II, MPT-3,
MPT-3F, GT01, GT02, GB01, GB02, GB03, YHK-A133, MX06, MX10 ("cat" printers
among them), PeriPage+ / PeriPage_ and T02. It uses only the standard library.

## Modules

- `thermoprint.models`: the enumerations `Align`, `BarcodeTextPosition`,
  `BarcodeType`, `PrinterType`, `PrinterFont` and `WriteMode`.
  `printer_type_for_name(name)` returns the `PrinterType` for an advertised
  name (only the first nine characters are compared, so `"PeriPage+A1"`
  matches), or `None` if the name is not supported. `printer_width(kind)`
  returns the print width in pixels (384 or 576) and raises `ValueError` for
  an unknown type. A `PrinterType` also has `width`, `service_uuid`,
  `characteristic_uuid`, `speaks_escpos` and `is_peripage`.
- `thermoprint.protocol`: pure functions that return packets.
  `crc8`, `mirror_byte`, `mirror_bytes`; the framed cat commands
  `cat_command` (one data byte), `cat_command16` (16-bit little-endian value)
  and `cat_scanline`; the raster headers `raster_header` and
  `peripage_raster_header`; `font_command`, `align_command`,
  `qr_code_commands`, `barcode_command` and `blank_feed_line`. Command codes
  such as `PAPER_FEED`, `PAPER_RETRACT`, `SET_ENERGY` and `SET_DRAWING_MODE`
  are exported as constants. Out-of-range values raise `ValueError`.
- `thermoprint.gfxfont`: `Glyph` and `GFXFont`, proportional bitmap fonts
  in the Adafruit GFX layout, with `glyph_for`, `string_box` (returns
  `(width, top, bottom)`) and `glyph_pixels`.
- `thermoprint.canvas`: `Canvas(width, height)`, a 1-bit image packed MSB
  first in horizontal rows. It has `fill`, `set_pixel`, `get_pixel`,
  `draw_line`, `load_bmp` (1-bpp Windows bitmaps, top-down or bottom-up),
  `draw_custom_text` (returns the x after the last character), `rows()` and
  `side_rows()` (the image turned a quarter turn).
- `thermoprint.printer`: `Transport`, `NotConnectedError` and `Printer`.

## Identifying a printer

```python
from thermoprint.models import PrinterType, printer_type_for_name, printer_width

kind = printer_type_for_name("GB01")
assert kind is PrinterType.CAT
print(printer_width(kind))   # 384
```

## Building packets by hand

```python
from thermoprint.protocol import PAPER_FEED, cat_command, mirror_byte

packet = cat_command(PAPER_FEED, 30)   # feed 30 scanlines on a cat printer
assert packet[:2] == b"\x51\x78"       # every cat packet starts with 0x51 0x78
assert packet[-1] == 0xFF              # ... and ends with 0xFF
assert mirror_byte(0x01) == 0x80
```

## Sending to a printer

A transport is any object with a `write(data)` method that delivers one
packet to the printer:

```python
from thermoprint.canvas import Canvas
from thermoprint.models import Align
from thermoprint.printer import Printer


class ListTransport:
    def __init__(self):
        self.packets = []

    def write(self, data):
        self.packets.append(bytes(data))


transport = ListTransport()
with Printer.from_name(transport, "MPT-II") as printer:
    printer.align(Align.CENTER)
    printer.print_line("Hello")
    printer.feed(10)

    canvas = Canvas(printer.width, 64)
    canvas.draw_line(0, 0, printer.width - 1, 63)
    printer.print_canvas(canvas)
```

`Printer(transport, printer_type, name="", *, write_mode=..., cat_font=None,
max_packet=None, encoding="latin-1", sleep=time.sleep)` takes these options:

- `max_packet` splits every write into packets of at most that many bytes.
- `write_mode`: with `WriteMode.WITHOUT_RESPONSE` (the default) the printer
  calls `sleep` after each scanline so the device can keep up.
- `encoding` turns `str` text into bytes.
- `cat_font` is an 8x8 bitmap font (8 bytes per character, starting at the
  space character). Cat printers have no built-in font, so `print_text` on a
  cat printer raises `ValueError` unless one is given. Cat text is sent one
  text line (eight scanlines) at a time, when a newline arrives or when 48
  characters have been collected.

Other families receive text as it is and print it with their own fonts;
PeriPage models get their command prefix first.

Per family:

- `feed(lines)` accepts -255..255. Negative values retract paper and are
  only accepted on cat printers. PeriPage printers ignore positive feeds.
- `set_energy` affects cat printers only.
- `set_font` is ignored by cat printers.
- `qr_code` works on MTP-2, MTP-3 and T02 printers and raises `ValueError`
  on the others.

`write_raw` sends bytes unchanged. `print_canvas_side` prints a canvas
turned a quarter turn. `print_custom_text(font, x, text)` prints one line in
a `GFXFont`. `disconnect()` (also called on leaving a `with` block) only
marks the printer as disconnected and drops buffered cat text. After that
every sending method raises `NotConnectedError`.

## What the package does not do

- It does not scan for, connect to or talk over Bluetooth. The caller opens
  the connection and supplies the transport.
- It ships no font data: no 8x8 font for cat printers and no fixed-size
  fonts for drawing text into a `Canvas`. Text on a canvas is drawn with a
  `GFXFont` you provide.
- It reads nothing back from the printer.
- It has no command-line program.