"""Alpha masks: building them and blending colours or bitmaps through them."""

from __future__ import annotations

from .canvas import Bitmap
from .pixels import OPACITY_MAX, PixelFormat, argb_split, color_val, rgb_split


def draw_mask(canvas: Bitmap, x: int, y: int, mask: Bitmap | None, flags: int = 0,
              offset_x: int = 0, width: int = 0) -> None:
    """Blend the colour of ``flags`` through ``mask``.

    Each mask pixel's low byte is the opacity (0 to 15). ``offset_x`` and
    ``width`` select the columns of the mask to use (all when ``width`` is 0).
    """
    if mask is None:
        return
    x += canvas.offset_x
    y += canvas.offset_y
    height = mask.height
    if not width or width > mask.width:
        width = mask.width
    if x + width > canvas.xmax:
        width = canvas.xmax - x
    if x < canvas.xmin:
        width += x - canvas.xmin
        offset_x -= x - canvas.xmin
        x = canvas.xmin
    if (y >= canvas.ymax or x >= canvas.xmax or width <= 0
            or x + width < canvas.xmin or y + height < canvas.ymin):
        return

    color = color_val(flags)
    for row in range(height):
        if not canvas.ymin <= y + row < canvas.ymax:
            continue
        dst = canvas._index(x, y + row)
        src = mask._index(offset_x, row)
        for value in mask.data[src:src + width]:
            canvas._blend(dst, value & 0xFF, color)
            dst += 1


def draw_mask_bitmap(canvas: Bitmap, x: int, y: int, mask: Bitmap | None,
                     src_bitmap: Bitmap | None, offset_x: int = 0, offset_y: int = 0,
                     width: int = 0, height: int = 0) -> None:
    """Blend pixels of ``src_bitmap`` through ``mask``.

    The source pixel for mask row ``r`` and column ``c`` is read at
    ``(r, c)`` of ``src_bitmap``.
    """
    if mask is None or src_bitmap is None:
        return
    x += canvas.offset_x
    y += canvas.offset_y
    if not width or width > mask.width:
        width = mask.width
    if not height or height > mask.height:
        height = mask.height
    if x + width > canvas.xmax:
        width = canvas.xmax - x
    if x < canvas.xmin:
        width += x - canvas.xmin
        offset_x -= x - canvas.xmin
        x = canvas.xmin
    if (y >= canvas.ymax or x >= canvas.xmax or width <= 0
            or x + width < canvas.xmin or y + height < canvas.ymin):
        return

    for row in range(height):
        if not canvas.ymin <= y + row < canvas.ymax:
            continue
        dst = canvas._index(x, y + row)
        src = mask._index(offset_x, offset_y + row)
        for col, value in enumerate(mask.data[src:src + width]):
            if row < src_bitmap.width and col < src_bitmap.height:
                canvas._blend(dst + col, value & 0xFF,
                              src_bitmap.data[src_bitmap._index(row, col)])


def _pattern_size(pattern: bytes) -> tuple[int, int]:
    if len(pattern) < 4:
        raise ValueError("pattern header is truncated")
    width = int.from_bytes(pattern[0:2], "little")
    height = int.from_bytes(pattern[2:4], "little")
    if len(pattern) < 4 + width * height:
        raise ValueError("pattern data is truncated")
    return width, height


def draw_bitmap_pattern(canvas: Bitmap, x: int, y: int, pattern: bytes,
                        flags: int = 0, offset: int = 0, width: int = 0) -> None:
    """Blend the colour of ``flags`` through an 8-bit alpha pattern.

    ``pattern`` holds little-endian 16-bit width and height followed by one
    byte per pixel whose upper four bits are the opacity. ``offset`` and
    ``width`` select the columns to draw (all when ``width`` is 0).
    """
    bmpw, bmph = _pattern_size(pattern)
    pixels = pattern[4:]
    x += canvas.offset_x
    y += canvas.offset_y

    srcx = offset
    srcy = 0
    srcw = width if width != 0 else bmpw
    srch = bmph
    if srcx + srcw > bmpw:
        srcw = bmpw - srcx
    if srcy + srch > bmph:
        srch = bmph - srcy
    if x < canvas.xmin:
        srcw += x - canvas.xmin
        srcx -= x - canvas.xmin
        x = canvas.xmin
    if y < canvas.ymin:
        srch += y - canvas.ymin
        srcy -= y - canvas.ymin
        y = canvas.ymin
    if x + srcw > canvas.xmax:
        srcw = canvas.xmax - x
    if y + srch > canvas.ymax:
        srch = canvas.ymax - y
    if srcw <= 0 or srch <= 0:
        return

    color = color_val(flags)
    for line in range(srch):
        dst = canvas._index(x, y + line)
        start = (srcy + line) * bmpw + srcx
        for alpha in pixels[start:start + srcw]:
            canvas._blend(dst, alpha >> 4, color)
            dst += 1


def load_8bit_mask(lbm: bytes) -> Bitmap:
    """Build a mask from a width byte, a height byte and 8-bit alpha values."""
    if len(lbm) < 2:
        raise ValueError("mask header is truncated")
    width, height = lbm[0], lbm[1]
    values = lbm[2:2 + width * height]
    if len(values) < width * height:
        raise ValueError("mask data is truncated")
    return Bitmap(PixelFormat.RGB565, width, height, [value >> 4 for value in values])


def mask_from_bitmap(bitmap: Bitmap) -> Bitmap:
    """Turn an image into a mask: darker pixels give higher opacity.

    The opacity replaces the low byte of each pixel; the high byte is kept.
    """
    data = []
    for value in bitmap.data:
        if bitmap.format == PixelFormat.ARGB4444:
            _, r, g, b = argb_split(value)
        else:
            red, green, blue = rgb_split(value)
            r, g, b = red >> 1, green >> 2, blue >> 1
        opacity = (OPACITY_MAX - (r + g + b) // 3) & 0xFF
        data.append((value & 0xFF00) | opacity)
    return Bitmap(bitmap.format, bitmap.width, bitmap.height, data)


def mask_on_background(mask: Bitmap, foreground: int, background: int) -> Bitmap:
    """Render ``mask`` in the foreground colour over a filled background."""
    result = Bitmap(PixelFormat.RGB565, mask.width, mask.height)
    result.clear(background)
    draw_mask(result, 0, 0, mask, foreground)
    return result