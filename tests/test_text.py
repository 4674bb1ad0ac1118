import itertools
import struct

import pytest

from lcdcanvas.canvas import Bitmap
from lcdcanvas.pixels import PixelFormat, color_flags
from lcdcanvas.text import (
    Font,
    TextFlags,
    draw_char,
    draw_number,
    draw_sized_text,
    draw_text,
    draw_text_at_index,
    format_number,
    text_width,
)

GLYPH = 2
NARROW = 1
HEIGHT = 3
COLOR = 0xF800
FLAGS = color_flags(COLOR)
REGULAR = 32


def make_font(widths, char_count=None):
    offsets = list(itertools.accumulate(widths, initial=0))
    total = offsets[-1]
    pattern = struct.pack("<HH", total, HEIGHT) + bytes([0xF0]) * (total * HEIGHT)
    return Font(pattern, [HEIGHT] + offsets, HEIGHT,
                len(widths) if char_count is None else char_count)


@pytest.fixture
def font():
    return make_font([GLYPH] * REGULAR)


@pytest.fixture
def canvas():
    return Bitmap(PixelFormat.RGB565, 40, 20)


def test_char_width(font):
    assert font.char_width(font.mapped_index(ord("0"))) == GLYPH


def test_draw_text_advances_and_paints(canvas, font):
    assert draw_text(canvas, 1, 2, "00", font, FLAGS) == 1 + 2 * GLYPH
    assert canvas.pixel_abs(1, 2) == COLOR
    assert canvas.pixel_abs(2 * GLYPH, 2 + HEIGHT - 1) == COLOR
    assert canvas.pixel_abs(0, 2) == 0
    assert canvas.pixel_abs(1 + 2 * GLYPH, 2) == 0


def test_text_width_matches_drawing(canvas, font):
    width = text_width("000", 0, font, 0)
    assert width == 3 * GLYPH
    assert draw_text(canvas, 0, 0, "000", font, FLAGS) == width


def test_right_aligned(canvas, font):
    assert draw_text(canvas, 10, 0, "00", font, FLAGS | TextFlags.RIGHT) == 10 - 2 * GLYPH
    assert canvas.pixel_abs(9, 0) == COLOR
    assert canvas.pixel_abs(10, 0) == 0
    assert canvas.pixel_abs(10 - 2 * GLYPH - 1, 0) == 0


def test_centered(canvas, font):
    assert draw_text(canvas, 10, 0, "00", font, FLAGS | TextFlags.CENTERED) == 10 + GLYPH
    assert canvas.pixel_abs(10 - GLYPH, 0) == COLOR
    assert canvas.pixel_abs(10 - GLYPH - 1, 0) == 0


def test_newline_starts_next_line(canvas, font):
    assert draw_text(canvas, 0, 0, "00\n0", font, FLAGS) == GLYPH
    assert canvas.pixel_abs(0, HEIGHT) == COLOR
    assert canvas.pixel_abs(GLYPH, HEIGHT) == 0


def test_text_width_takes_widest_line(font):
    assert text_width("00\n0", 0, font) == 2 * GLYPH


def test_nul_ends_text(canvas, font):
    assert draw_text(canvas, 0, 0, "0\x000", font, FLAGS) == GLYPH


def test_sized_text_limits_length(canvas, font):
    assert draw_sized_text(canvas, 0, 0, "000", 1, font, FLAGS) == GLYPH


def test_characters_outside_font_are_skipped(canvas, font):
    assert draw_text(canvas, 0, 0, b"\x7f0", font, FLAGS) == GLYPH


def test_text_outside_clipping_not_drawn(canvas, font):
    canvas.set_clipping_rect(0, 40, 10, 20)
    assert draw_text(canvas, 4, 0, "00", font, FLAGS) == 4
    assert set(canvas.data) == {0}


def test_offset_is_applied_and_restored(canvas, font):
    canvas.set_offset(5, 1)
    assert draw_text(canvas, 0, 0, "0", font, FLAGS) == GLYPH
    assert canvas.pixel_abs(5, 1) == COLOR
    assert (canvas.offset_x, canvas.offset_y) == (5, 1)


def test_vertical_text_moves_up(canvas, font):
    assert draw_text(canvas, 0, 10, "0", font, FLAGS | TextFlags.VERTICAL) == 10 - GLYPH


def test_none_text_returns_position(canvas, font):
    assert draw_text(canvas, 3, 7, None, font) == 3
    assert draw_text(canvas, 3, 7, None, font, TextFlags.VERTICAL) == 7


def test_constant_digit_spacing(canvas):
    widths = [GLYPH] * REGULAR
    widths[ord("1") - 0x20] = NARROW
    narrow_font = make_font(widths)
    assert draw_text(canvas, 0, 0, "1", narrow_font, FLAGS) == NARROW
    spaced = FLAGS | TextFlags.SPACING_NUMBERS_CONST
    assert draw_text(canvas, 0, 5, "1", narrow_font, spaced) == GLYPH
    assert text_width("1", 0, narrow_font, TextFlags.SPACING_NUMBERS_CONST) == GLYPH


def test_double_byte_glyphs(canvas):
    cjk_font = make_font([GLYPH] * REGULAR + [3, 4], char_count=REGULAR)
    assert draw_text(canvas, 0, 0, b"\xfe\x01", cjk_font, FLAGS) == 3
    assert draw_text(canvas, 0, 5, b"\xfe\x02", cjk_font, FLAGS) == 4


def test_zero_width_glyph_draws_nothing(canvas):
    empty_font = make_font([0, GLYPH])
    assert draw_char(canvas, 0, 0, empty_font, 0, FLAGS) == 0
    assert set(canvas.data) == {0}


def test_draw_char_returns_width(canvas, font):
    assert draw_char(canvas, 0, 0, font, 0, FLAGS) == GLYPH
    assert canvas.pixel_abs(GLYPH - 1, 0) == COLOR


def test_format_number_plain():
    assert format_number(123) == str(123)
    assert format_number(-45) == str(-45)
    assert format_number(0) == str(0)


def test_format_number_precision():
    assert format_number(123, precision=1) == "12.3"
    assert format_number(5, precision=2) == "0.05"


def test_format_number_leading_zero():
    assert format_number(7, length=3, leading_zero=True) == "007"
    assert format_number(7, length=3) == str(7)


def test_format_number_prefix_suffix():
    assert format_number(42, prefix="V=", suffix="mV") == "V=" + "42" + "mV"
    assert format_number(42, prefix="x" * 17) == "42"
    assert format_number(42, suffix="y" * 20) == "42" + "y" * 16


def test_draw_number_matches_formatted_text(font):
    first = Bitmap(PixelFormat.RGB565, 40, 20)
    second = Bitmap(PixelFormat.RGB565, 40, 20)
    end = draw_number(first, 0, 0, 7, font, FLAGS | TextFlags.LEADING0, 3)
    text = format_number(7, 0, 3, True)
    assert end == draw_text(second, 0, 0, text, font, FLAGS | TextFlags.LEADING0)
    assert end == 3 * GLYPH
    assert first.data == second.data


def test_draw_text_at_index(font):
    first = Bitmap(PixelFormat.RGB565, 40, 20)
    second = Bitmap(PixelFormat.RGB565, 40, 20)
    end = draw_text_at_index(first, 0, 0, b"\x02" + b"01" + b"0 ", 1, font, FLAGS)
    assert end == draw_text(second, 0, 0, "0 ", font, FLAGS)
    assert first.data == second.data