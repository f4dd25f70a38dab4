import pytest

from thermoprint.canvas import Canvas
from thermoprint.gfxfont import GFXFont, Glyph


def _set_pixels(canvas):
    return {
        (x, y)
        for y in range(canvas.height)
        for x in range(canvas.width)
        if canvas.get_pixel(x, y)
    }


def _make_bmp(pixels, width, height, top_down=False):
    byte_width = (width + 7) // 8
    row_pitch = (byte_width + 3) & ~3
    rows = []
    for y in range(height):
        row = bytearray(row_pitch)
        for x in range(width):
            if (x, y) in pixels:
                row[x // 8] |= 0x80 >> (x % 8)
        rows.append(bytes(row))
    if not top_down:
        rows.reverse()
    image = b"".join(rows)
    off_bits = 62
    stored_height = -height if top_down else height
    header = bytearray(off_bits)
    header[0:2] = b"BM"
    header[2:6] = (off_bits + len(image)).to_bytes(4, "little")
    header[10:14] = off_bits.to_bytes(4, "little")
    header[14:18] = (40).to_bytes(4, "little")
    header[18:22] = width.to_bytes(4, "little", signed=True)
    header[22:26] = stored_height.to_bytes(4, "little", signed=True)
    header[26:28] = (1).to_bytes(2, "little")
    header[28:30] = (1).to_bytes(2, "little")
    header[58:62] = b"\xff\xff\xff\x00"
    return bytes(header) + image


def _block_font():
    glyph = Glyph(bitmap_offset=0, width=2, height=2, x_advance=3, x_offset=0, y_offset=-2)
    return GFXFont(bitmap=b"\xf0", glyphs=[glyph], first=ord("A"), last=ord("A"), y_advance=4)


def test_new_canvas_is_blank_and_pitch_rounds_up():
    canvas = Canvas(10, 3)
    assert canvas.pitch == 2
    assert _set_pixels(canvas) == set()
    assert list(canvas.rows()) == [bytes(2)] * 3


def test_invalid_size_rejected():
    with pytest.raises(ValueError):
        Canvas(0, 5)


def test_set_and_get_pixel_round_trip():
    canvas = Canvas(16, 4)
    canvas.set_pixel(9, 2)
    assert canvas.get_pixel(9, 2)
    assert _set_pixels(canvas) == {(9, 2)}
    canvas.set_pixel(9, 2, 0)
    assert _set_pixels(canvas) == set()


def test_pixel_bit_layout_is_msb_first():
    canvas = Canvas(8, 1)
    canvas.set_pixel(0, 0)
    assert next(canvas.rows()) == b"\x80"


def test_pixel_outside_raises():
    canvas = Canvas(8, 8)
    with pytest.raises(IndexError):
        canvas.set_pixel(8, 0)
    with pytest.raises(IndexError):
        canvas.get_pixel(0, -1)


def test_fill_sets_every_row_to_pattern():
    canvas = Canvas(24, 5)
    canvas.fill(0xAA)
    assert list(canvas.rows()) == [bytes([0xAA]) * 3] * 5
    canvas.fill(0xFF)
    assert len(_set_pixels(canvas)) == 24 * 5


def test_fill_rejects_large_pattern():
    with pytest.raises(ValueError):
        Canvas(8, 8).fill(256)


def test_horizontal_line():
    canvas = Canvas(32, 8)
    canvas.draw_line(3, 4, 20, 4, 1)
    assert _set_pixels(canvas) == {(x, 4) for x in range(3, 21)}


def test_vertical_line_reversed_endpoints():
    canvas = Canvas(16, 16)
    canvas.draw_line(5, 12, 5, 2, 1)
    assert _set_pixels(canvas) == {(5, y) for y in range(2, 13)}


@pytest.mark.parametrize(
    "x1,y1,x2,y2",
    [(0, 0, 15, 6), (15, 6, 0, 0), (2, 14, 9, 1), (9, 1, 2, 14), (3, 3, 3, 3)],
)
def test_line_endpoints_and_pixel_count(x1, y1, x2, y2):
    canvas = Canvas(16, 16)
    canvas.draw_line(x1, y1, x2, y2, 1)
    pixels = _set_pixels(canvas)
    assert (x1, y1) in pixels
    assert (x2, y2) in pixels
    assert len(pixels) == max(abs(x2 - x1), abs(y2 - y1)) + 1


def test_line_clear_color_erases():
    canvas = Canvas(16, 4)
    canvas.fill(0xFF)
    canvas.draw_line(0, 1, 15, 1, 0)
    assert all(not canvas.get_pixel(x, 1) for x in range(16))
    assert all(canvas.get_pixel(x, 0) for x in range(16))


def test_line_out_of_bounds_draws_nothing():
    canvas = Canvas(8, 8)
    canvas.draw_line(0, 0, 8, 3, 1)
    assert _set_pixels(canvas) == set()


@pytest.mark.parametrize("top_down", [False, True])
def test_load_bmp_copies_pixels(top_down):
    pixels = {(0, 0), (4, 1), (9, 2), (1, 3)}
    bmp = _make_bmp(pixels, 10, 4, top_down=top_down)
    canvas = Canvas(32, 16)
    canvas.load_bmp(bmp, False, 5, 6)
    assert _set_pixels(canvas) == {(x + 5, y + 6) for x, y in pixels}


def test_load_bmp_invert():
    pixels = {(1, 0), (2, 1)}
    bmp = _make_bmp(pixels, 3, 2)
    canvas = Canvas(8, 8)
    canvas.load_bmp(bmp, True, 0, 0)
    everything = {(x, y) for x in range(3) for y in range(2)}
    assert _set_pixels(canvas) == everything - pixels


def test_load_bmp_overwrites_existing_pixels():
    bmp = _make_bmp(set(), 8, 2)
    canvas = Canvas(8, 4)
    canvas.fill(0xFF)
    canvas.load_bmp(bmp, False, 0, 1)
    assert _set_pixels(canvas) == {(x, y) for x in range(8) for y in (0, 3)}


def test_load_bmp_rejects_bad_input():
    good = _make_bmp({(0, 0)}, 8, 8)
    canvas = Canvas(8, 8)
    with pytest.raises(ValueError):
        canvas.load_bmp(b"XX" + good[2:], False, 0, 0)
    with pytest.raises(ValueError):
        canvas.load_bmp(good, False, 1, 0)
    with pytest.raises(ValueError):
        canvas.load_bmp(good, False, -1, 0)
    deep = bytearray(good)
    deep[28:30] = (8).to_bytes(2, "little")
    with pytest.raises(ValueError):
        canvas.load_bmp(bytes(deep), False, 0, 0)
    with pytest.raises(ValueError):
        canvas.load_bmp(good[:70], False, 0, 0)


def test_draw_custom_text_places_glyphs():
    canvas = Canvas(16, 8)
    end = canvas.draw_custom_text(_block_font(), 1, 3, "AA")
    glyph_cells = {(0, 0), (1, 0), (0, 1), (1, 1)}
    expected = {(1 + gx, 1 + gy) for gx, gy in glyph_cells}
    expected |= {(4 + gx, 1 + gy) for gx, gy in glyph_cells}
    assert _set_pixels(canvas) == expected
    assert end == 1 + 3 + 3


def test_draw_custom_text_skips_unknown_characters():
    with_unknown = Canvas(16, 8)
    plain = Canvas(16, 8)
    with_unknown.draw_custom_text(_block_font(), 2, 4, "?A")
    plain.draw_custom_text(_block_font(), 2, 4, "A")
    assert list(with_unknown.rows()) == list(plain.rows())


def test_draw_custom_text_clips_above_top():
    canvas = Canvas(8, 8)
    canvas.draw_custom_text(_block_font(), 1, 1, "A")
    assert _set_pixels(canvas) == {(1, 0), (2, 0)}


def test_draw_custom_text_rejects_bad_origin():
    canvas = Canvas(8, 8)
    with pytest.raises(ValueError):
        canvas.draw_custom_text(_block_font(), -1, 4, "A")
    with pytest.raises(ValueError):
        canvas.draw_custom_text(_block_font(), 0, 9, "A")


def test_side_rows_shape_and_pixel_count():
    canvas = Canvas(16, 12)
    canvas.draw_line(0, 0, 15, 11, 1)
    canvas.set_pixel(3, 9)
    side = list(canvas.side_rows())
    assert len(side) == 16
    assert all(len(row) == 2 for row in side)
    total = sum(bin(b).count("1") for row in side for b in row)
    assert total == len(_set_pixels(canvas))


def test_side_rows_rotation_of_corner_pixel():
    canvas = Canvas(16, 8)
    canvas.set_pixel(15, 0)
    side = list(canvas.side_rows())
    assert side[0][0] & 0x80
    assert all(row == b"\x00" for row in side[1:])


def test_side_rows_twice_matches_columns():
    canvas = Canvas(8, 8)
    canvas.set_pixel(2, 5)
    side = list(canvas.side_rows())
    rotated = Canvas(8, 8, bytearray(b"".join(side)))
    assert _set_pixels(rotated) == {(5, 8 - 1 - 2)}