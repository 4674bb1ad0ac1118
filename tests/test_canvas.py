import pytest

from lcdcanvas.canvas import Bitmap
from lcdcanvas.pixels import (
    DOTTED,
    SOLID,
    PixelFormat,
    argb,
    color_flags,
    rgb,
)

RED = rgb(255, 0, 0)
BLUE = rgb(0, 0, 255)


def make(width=10, height=10):
    return Bitmap(PixelFormat.RGB565, width, height)


def drawn(bmp):
    return {
        (x, y)
        for y in range(bmp.height)
        for x in range(bmp.width)
        if bmp.pixel_abs(x, y)
    }


def test_data_size_mismatch_raises():
    with pytest.raises(ValueError):
        Bitmap(PixelFormat.RGB565, 2, 2, [0, 0, 0])


def test_data_size_in_bytes():
    assert make(4, 3).data_size == 4 * 3 * 2


def test_pixel_abs_out_of_range():
    with pytest.raises(IndexError):
        make(4, 4).pixel_abs(4, 0)


def test_draw_pixel_uses_offset():
    bmp = make()
    bmp.set_offset(2, 3)
    bmp.draw_pixel(0, 0, RED)
    assert bmp.pixel_abs(2, 3) == RED
    assert bmp.pixel(0, 0) == RED
    bmp.clear_offset()
    assert bmp.pixel(2, 3) == RED


def test_draw_pixel_clipped():
    bmp = make()
    bmp.set_clipping_rect(2, 5, 2, 5)
    bmp.draw_pixel(1, 1, RED)
    bmp.draw_pixel(5, 5, RED)
    assert drawn(bmp) == set()
    assert bmp.pixel(1, 1) is None


def test_reset_restores_state():
    bmp = make(8, 6)
    bmp.set_offset(1, 1)
    bmp.set_clipping_rect(1, 2, 1, 2)
    bmp.reset()
    assert bmp.clipping_rect == (0, 8, 0, 6)
    assert (bmp.offset_x, bmp.offset_y) == (0, 0)


def test_clear_fills_everything():
    bmp = make(5, 4)
    bmp.clear(color_flags(BLUE))
    assert all(value == BLUE for value in bmp.data)


def test_solid_filled_rect_respects_clipping():
    bmp = make()
    bmp.set_clipping_rect(2, 5, 2, 5)
    bmp.draw_solid_filled_rect(0, 0, 10, 10, color_flags(RED))
    assert drawn(bmp) == {(x, y) for x in range(2, 5) for y in range(2, 5)}


def test_negative_size_rect_is_normalised():
    bmp = make()
    bmp.draw_solid_filled_rect(5, 5, -2, -2, color_flags(RED))
    assert drawn(bmp) == {(3, 3), (4, 3), (3, 4), (4, 4)}


def test_alpha_pixel_extremes():
    bmp = make()
    bmp.draw_pixel(1, 1, BLUE)
    bmp.draw_alpha_pixel(1, 1, 0, RED)
    assert bmp.pixel_abs(1, 1) == BLUE
    bmp.draw_alpha_pixel(1, 1, 15, RED)
    assert bmp.pixel_abs(1, 1) == RED


def test_horizontal_line_opacity():
    bmp = make()
    bmp.draw_horizontal_line(0, 0, 4, SOLID, color_flags(RED), 15)
    assert drawn(bmp) == set()
    bmp.draw_horizontal_line(0, 0, 4, SOLID, color_flags(RED), 0)
    assert [bmp.pixel_abs(x, 0) for x in range(4)] == [RED] * 4


def test_horizontal_dotted_line():
    bmp = make()
    bmp.draw_horizontal_line(0, 2, 8, DOTTED, color_flags(RED))
    assert drawn(bmp) == {(x, 2) for x in range(0, 8, 2)}


@pytest.mark.parametrize("start", [0, 1])
def test_vertical_dotted_line_aligned(start):
    bmp = make()
    bmp.draw_vertical_line(3, start, 6, DOTTED, color_flags(RED))
    rows = {y for _, y in drawn(bmp)}
    assert rows
    assert all(y % 2 == 1 for y in rows)


def test_clip_line_inside_unchanged():
    bmp = make()
    assert bmp.clip_line(1, 2, 7, 8) == (1, 2, 7, 8)


def test_clip_line_outside_rejected():
    bmp = make()
    assert bmp.clip_line(-5, -1, -1, -5) is None
    assert bmp.clip_line(2, 20, 8, 20) is None


def test_clip_line_crossing():
    bmp = make()
    assert bmp.clip_line(-5, 5, 15, 5) == (0, 5, 10, 5)
    x1, y1, x2, y2 = bmp.clip_line(-5, -5, 20, 20)
    assert 0 <= x1 <= 10 and 0 <= y1 <= 10
    assert 0 <= x2 <= 10 and 0 <= y2 <= 10


def test_draw_line_diagonal():
    bmp = make()
    bmp.draw_line(0, 0, 3, 3, SOLID, color_flags(RED))
    assert drawn(bmp) == {(i, i) for i in range(4)}


def test_draw_line_symmetric_directions():
    forward = make()
    forward.draw_line(1, 1, 6, 3, SOLID, color_flags(RED))
    backward = make()
    backward.draw_line(6, 3, 1, 1, SOLID, color_flags(RED))
    assert len(drawn(forward)) == len(drawn(backward)) == 6


def test_draw_rect_outline():
    bmp = make()
    bmp.draw_rect(1, 1, 5, 4, 1, SOLID, color_flags(RED))
    points = drawn(bmp)
    border = {
        (x, y)
        for x in range(1, 6)
        for y in range(1, 5)
        if x in (1, 5) or y in (1, 4)
    }
    assert points == border


def test_draw_solid_rect_matches_draw_rect():
    a = make()
    a.draw_solid_rect(0, 0, 8, 6, 2, color_flags(RED))
    b = make()
    b.draw_rect(0, 0, 8, 6, 2, SOLID, color_flags(RED))
    assert a.data == b.data


def test_solid_lines():
    bmp = make()
    bmp.draw_solid_horizontal_line(1, 1, 3, color_flags(RED))
    bmp.draw_solid_vertical_line(8, 2, 2, color_flags(RED))
    assert drawn(bmp) == {(1, 1), (2, 1), (3, 1), (8, 2), (8, 3)}


def test_filled_rect_pattern_matches_lines():
    a = make()
    a.draw_filled_rect(1, 1, 6, 3, DOTTED, color_flags(RED))
    b = make()
    for y in range(1, 4):
        b.draw_horizontal_line(1, y, 6, DOTTED, color_flags(RED))
    assert a.data == b.data


def test_filled_rect_transparent_leaves_pixels():
    bmp = make()
    bmp.clear(color_flags(BLUE))
    bmp.draw_filled_rect(0, 0, 5, 5, SOLID, color_flags(RED), 15)
    assert all(value == BLUE for value in bmp.data)


def test_filled_rect_opaque_is_uniform():
    bmp = make()
    bmp.draw_filled_rect(2, 2, 3, 3, SOLID, color_flags(rgb(255, 255, 255)), 0)
    inside = {bmp.pixel_abs(x, y) for x in range(2, 5) for y in range(2, 5)}
    assert len(inside) == 1
    assert inside.pop() != 0
    assert drawn(bmp) == {(x, y) for x in range(2, 5) for y in range(2, 5)}


def test_invert_rect_round_trip():
    bmp = make(4, 4)
    bmp.data[:] = [RED, BLUE, 0, 0x1234] * 4
    original = list(bmp.data)
    bmp.invert_rect(0, 0, 4, 4)
    assert bmp.data != original
    bmp.invert_rect(0, 0, 4, 4)
    assert bmp.data == original


def test_invert_black_gives_white():
    bmp = make(2, 2)
    bmp.invert_rect(0, 0, 2, 2)
    assert all(value == rgb(255, 255, 255) for value in bmp.data)


def test_draw_bitmap_copies_rgb565():
    src = Bitmap(PixelFormat.RGB565, 2, 2, [RED, BLUE, BLUE, RED])
    dst = make(5, 5)
    dst.draw_bitmap(1, 2, src)
    assert dst.pixel_abs(1, 2) == RED
    assert dst.pixel_abs(2, 2) == BLUE
    assert dst.pixel_abs(1, 3) == BLUE
    assert dst.pixel_abs(2, 3) == RED
    assert len(drawn(dst)) == 4


def test_draw_bitmap_clipped_left():
    src = Bitmap(PixelFormat.RGB565, 3, 1, [RED, BLUE, RED])
    dst = make(5, 5)
    dst.draw_bitmap(-1, 0, src)
    assert dst.pixel_abs(0, 0) == BLUE
    assert dst.pixel_abs(1, 0) == RED
    assert len(drawn(dst)) == 2


def test_draw_bitmap_transparent_argb():
    src = Bitmap(PixelFormat.ARGB4444, 2, 2, [argb(0, 255, 255, 255)] * 4)
    dst = make(4, 4)
    dst.clear(color_flags(BLUE))
    dst.draw_bitmap(0, 0, src)
    assert all(value == BLUE for value in dst.data)


def test_draw_scaled_bitmap_doubles():
    src = Bitmap(PixelFormat.RGB565, 2, 2, [RED, BLUE, BLUE, RED])
    dst = make(4, 4)
    dst.draw_scaled_bitmap(src, 0, 0, 4, 4)
    for y in range(4):
        for x in range(4):
            assert dst.pixel_abs(x, y) == src.pixel_abs(x // 2, y // 2)


def test_draw_bitmap_none_is_ignored():
    dst = make(3, 3)
    dst.draw_bitmap(0, 0, None)
    dst.draw_scaled_bitmap(None, 0, 0, 3, 3)
    assert drawn(dst) == set()


def test_flips_round_trip():
    bmp = Bitmap(PixelFormat.RGB565, 3, 2, [1, 2, 3, 4, 5, 6])
    assert bmp.horizontal_flip().data == [3, 2, 1, 6, 5, 4]
    assert bmp.vertical_flip().data == [4, 5, 6, 1, 2, 3]
    assert bmp.horizontal_flip().horizontal_flip().data == bmp.data
    assert bmp.vertical_flip().vertical_flip().data == bmp.data


def test_flip_keeps_format():
    bmp = Bitmap(PixelFormat.ARGB4444, 1, 1, [7])
    assert bmp.horizontal_flip().format == PixelFormat.ARGB4444


def test_invert_mask_round_trip():
    mask = Bitmap(PixelFormat.RGB565, 4, 1, [0, 5, 10, 15])
    inverted = mask.invert_mask()
    assert inverted.data == [15, 10, 5, 0]
    assert inverted.invert_mask().data == mask.data