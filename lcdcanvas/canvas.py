"""A 16-bit pixel buffer with clipping, offsets and basic drawing."""

from __future__ import annotations

from typing import Iterable

from .helpers import sgn
from .pixels import (
    DOTTED,
    OPACITY_MAX,
    SOLID,
    PixelFormat,
    argb,
    argb_split,
    color_flags,
    color_val,
    rgb_join,
    rgb_split,
)


class Bitmap:
    """A width x height buffer of 16-bit pixels stored row by row.

    Drawing calls take coordinates relative to the current offset and are
    limited to the clipping rectangle; the ``_*_abs`` helpers work on
    absolute buffer coordinates.
    """

    def __init__(self, fmt=PixelFormat.RGB565, width: int = 0, height: int = 0,
                 data: Iterable[int] | None = None) -> None:
        self.format = PixelFormat(fmt)
        self.width = width
        self.height = height
        size = width * height
        if data is None:
            self.data: list[int] = [0] * size
        else:
            self.data = data if isinstance(data, list) else list(data)
            if len(self.data) != size:
                raise ValueError(
                    f"pixel data holds {len(self.data)} values, expected {size}"
                )
        self.offset_x = 0
        self.offset_y = 0
        self.xmin = 0
        self.xmax = width
        self.ymin = 0
        self.ymax = height

    # -- state -----------------------------------------------------------

    @property
    def data_size(self) -> int:
        """Size of the pixel data in bytes."""
        return self.width * self.height * 2

    @property
    def clipping_rect(self) -> tuple[int, int, int, int]:
        """The clipping rectangle as ``(xmin, xmax, ymin, ymax)``."""
        return self.xmin, self.xmax, self.ymin, self.ymax

    def clear_clipping_rect(self) -> None:
        """Make the whole buffer drawable again."""
        self.xmin, self.xmax = 0, self.width
        self.ymin, self.ymax = 0, self.height

    def set_clipping_rect(self, xmin: int, xmax: int, ymin: int, ymax: int) -> None:
        """Limit drawing to ``xmin <= x < xmax`` and ``ymin <= y < ymax``."""
        self.xmin, self.xmax = xmin, xmax
        self.ymin, self.ymax = ymin, ymax

    def set_offset(self, x: int, y: int) -> None:
        """Set the origin that drawing coordinates are relative to."""
        self.offset_x = x
        self.offset_y = y

    def clear_offset(self) -> None:
        """Reset the drawing origin to the top-left corner."""
        self.set_offset(0, 0)

    def reset(self) -> None:
        """Clear both the offset and the clipping rectangle."""
        self.clear_offset()
        self.clear_clipping_rect()

    # -- low level access ------------------------------------------------

    def _index(self, x: int, y: int) -> int:
        return y * self.width + x

    def _put(self, index: int, value: int) -> None:
        if 0 <= index < len(self.data):
            self.data[index] = value & 0xFFFF

    def _blend(self, index: int, opacity: int, color: int) -> None:
        opacity &= 0xFF
        if opacity == OPACITY_MAX:
            self._put(index, color)
        elif opacity != 0 and 0 <= index < len(self.data):
            bg_weight = (OPACITY_MAX - opacity) & 0xFF
            red, green, blue = rgb_split(color)
            bg_red, bg_green, bg_blue = rgb_split(self.data[index])
            r = ((bg_red * bg_weight + red * opacity) // OPACITY_MAX) & 0xFFFF
            g = ((bg_green * bg_weight + green * opacity) // OPACITY_MAX) & 0xFFFF
            b = ((bg_blue * bg_weight + blue * opacity) // OPACITY_MAX) & 0xFFFF
            self._put(index, rgb_join(r, g, b))

    def _blend_argb(self, index: int, value: int) -> None:
        a, r, g, b = argb_split(value)
        self._blend(index, a, rgb_join(r << 1, g << 2, b << 1))

    def _draw_pixel_abs(self, x: int, y: int, value: int) -> None:
        self._put(self._index(x, y), value)

    def _draw_alpha_pixel_abs(self, x: int, y: int, opacity: int, color: int) -> None:
        self._blend(self._index(x, y), opacity, color)

    def _apply_clipping_rect(self, x: int, y: int, w: int, h: int):
        """Clip a rectangle; return ``(x, y, w, h)`` or ``None`` if empty."""
        if h < 0:
            y += h
            h = -h
        if w < 0:
            x += w
            w = -w
        if x >= self.xmax or y >= self.ymax:
            return None
        if y < self.ymin:
            h += y - self.ymin
            y = self.ymin
        if x < self.xmin:
            w += x - self.xmin
            x = self.xmin
        if y + h > self.ymax:
            h = self.ymax - y
        if x + w > self.xmax:
            w = self.xmax - x
        if h > 0 and w > 0:
            return x, y, w, h
        return None

    def pixel_abs(self, x: int, y: int) -> int:
        """Return the pixel at absolute buffer coordinates."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return self.data[self._index(x, y)]

    def pixel(self, x: int, y: int) -> int | None:
        """Return the pixel at offset coordinates, or ``None`` if clipped."""
        x += self.offset_x
        y += self.offset_y
        if self._apply_clipping_rect(x, y, 1, 1) is None:
            return None
        return self.data[self._index(x, y)]

    # -- pixels and lines --------------------------------------------------

    def draw_pixel(self, x: int, y: int, value: int) -> None:
        """Set one pixel, honouring offset and clipping."""
        x += self.offset_x
        y += self.offset_y
        if self._apply_clipping_rect(x, y, 1, 1) is None:
            return
        self._draw_pixel_abs(x, y, value)

    def draw_alpha_pixel(self, x: int, y: int, opacity: int, color: int) -> None:
        """Blend ``color`` over one pixel with ``opacity`` from 0 to 15."""
        x += self.offset_x
        y += self.offset_y
        if self._apply_clipping_rect(x, y, 1, 1) is None:
            return
        self._draw_alpha_pixel_abs(x, y, opacity, color)

    def draw_horizontal_line(self, x: int, y: int, w: int, pat: int = SOLID,
                             flags: int = 0, opacity: int = 0) -> None:
        """Draw a horizontal line; ``opacity`` 0 is opaque, 15 transparent."""
        x += self.offset_x
        y += self.offset_y
        clipped = self._apply_clipping_rect(x, y, w, 1)
        if clipped is None:
            return
        x, y, w, _ = clipped
        self._draw_horizontal_line_abs(x, y, w, pat, flags, opacity)

    def _draw_horizontal_line_abs(self, x: int, y: int, w: int, pat: int,
                                  flags: int, opacity: int) -> None:
        index = self._index(x, y)
        color = color_val(flags)
        opacity = (0x0F - opacity) & 0xFF
        pat &= 0xFF
        for _ in range(w):
            if pat == SOLID:
                self._blend(index, opacity, color)
            elif pat & 1:
                self._blend(index, opacity, color)
                pat = (pat >> 1) | 0x80
            else:
                pat >>= 1
            index += 1

    def draw_vertical_line(self, x: int, y: int, h: int, pat: int = SOLID,
                           flags: int = 0, opacity: int = 0) -> None:
        """Draw a vertical line; ``opacity`` 0 is opaque, 15 transparent."""
        x += self.offset_x
        y += self.offset_y
        clipped = self._apply_clipping_rect(x, y, 1, h)
        if clipped is None:
            return
        x, y, _, h = clipped
        opacity = (0x0F - opacity) & 0xFF
        color = color_val(flags)
        pat &= 0xFF
        if pat == SOLID:
            for _ in range(h):
                self._draw_alpha_pixel_abs(x, y, opacity, color)
                y += 1
            return
        if pat == DOTTED and y % 2 == 0:
            pat = ~pat & 0xFF
        for _ in range(h):
            if pat & 1:
                self._draw_alpha_pixel_abs(x, y, opacity, color)
                pat = (pat >> 1) | 0x80
            else:
                pat >>= 1
            y += 1

    def clip_line(self, x1: int, y1: int, x2: int, y2: int):
        """Clip a segment to the clipping rectangle (Liang-Barsky).

        Returns the new ``(x1, y1, x2, y2)`` or ``None`` if nothing is left.
        """
        p1 = float(-(x2 - x1))
        p2 = -p1
        p3 = float(-(y2 - y1))
        p4 = -p3
        q1 = float(x1 - self.xmin)
        q2 = float(self.xmax - x1)
        q3 = float(y1 - self.ymin)
        q4 = float(self.ymax - y1)

        if ((p1 == 0 and q1 < 0) or (p2 == 0 and q2 < 0)
                or (p3 == 0 and q3 < 0) or (p4 == 0 and q4 < 0)):
            return None

        entering = [0.0]
        leaving = [1.0]
        for p_near, p_far, q_near, q_far in ((p1, p2, q1, q2), (p3, p4, q3, q4)):
            if p_near != 0:
                r_near = q_near / p_near
                r_far = q_far / p_far
                if p_near < 0:
                    entering.append(r_near)
                    leaving.append(r_far)
                else:
                    entering.append(r_far)
                    leaving.append(r_near)

        rn1 = max(entering)
        rn2 = min(leaving)
        if rn1 > rn2:
            return None

        return (
            int(x1 + p2 * rn1),
            int(y1 + p4 * rn1),
            int(x1 + p2 * rn2),
            int(y1 + p4 * rn2),
        )

    def draw_line(self, x1: int, y1: int, x2: int, y2: int, pat: int = SOLID,
                  flags: int = 0) -> None:
        """Draw a patterned line between two points (Bresenham)."""
        clipped = self.clip_line(x1 + self.offset_x, y1 + self.offset_y,
                                 x2 + self.offset_x, y2 + self.offset_y)
        if clipped is None:
            return
        x1, y1, x2, y2 = clipped
        color = color_val(flags)

        dx = x2 - x1
        dy = y2 - y1
        dxabs = abs(dx)
        dyabs = abs(dy)
        sdx = sgn(dx)
        sdy = sgn(dy)
        ex = dyabs >> 1
        ey = dxabs >> 1
        px, py = x1, y1

        if dxabs >= dyabs:
            for _ in range(dxabs + 1):
                if (1 << (px % 8)) & pat:
                    self._draw_pixel_abs(px, py, color)
                ey += dyabs
                if ey >= dxabs:
                    ey -= dxabs
                    py += sdy
                px += sdx
        else:
            for _ in range(dyabs + 1):
                if (1 << (py % 8)) & pat:
                    self._draw_pixel_abs(px, py, color)
                ex += dxabs
                if ex >= dyabs:
                    ex -= dyabs
                    px += sdx
                py += sdy

    # -- rectangles --------------------------------------------------------

    def draw_rect(self, x: int, y: int, w: int, h: int, thickness: int = 1,
                  pat: int = SOLID, flags: int = 0, opacity: int = 0) -> None:
        """Draw a rectangle outline ``thickness`` pixels wide."""
        for i in range(thickness):
            self.draw_vertical_line(x + i, y, h, pat, flags, opacity)
            self.draw_vertical_line(x + w - 1 - i, y, h, pat, flags, opacity)
            self.draw_horizontal_line(x, y + h - 1 - i, w, pat, flags, opacity)
            self.draw_horizontal_line(x, y + i, w, pat, flags, opacity)

    def draw_solid_rect(self, x: int, y: int, w: int, h: int, thickness: int = 1,
                        flags: int = 0) -> None:
        """Draw an opaque rectangle outline ``thickness`` pixels wide."""
        self.draw_solid_filled_rect(x, y, thickness, h, flags)
        self.draw_solid_filled_rect(x + w - thickness, y, thickness, h, flags)
        self.draw_solid_filled_rect(x, y, w, thickness, flags)
        self.draw_solid_filled_rect(x, y + h - thickness, w, thickness, flags)

    def draw_solid_filled_rect(self, x: int, y: int, w: int, h: int,
                               flags: int = 0) -> None:
        """Fill a rectangle with the opaque colour carried in ``flags``."""
        x += self.offset_x
        y += self.offset_y
        clipped = self._apply_clipping_rect(x, y, w, h)
        if clipped is None:
            return
        x, y, w, h = clipped
        color = color_val(flags)
        for row in range(y, y + h):
            start = self._index(x, row)
            end = min(start + w, len(self.data))
            if start < end:
                self.data[start:end] = [color] * (end - start)

    def draw_solid_horizontal_line(self, x: int, y: int, w: int, flags: int = 0) -> None:
        """Draw an opaque one-pixel-high line."""
        self.draw_solid_filled_rect(x, y, w, 1, flags)

    def draw_solid_vertical_line(self, x: int, y: int, h: int, flags: int = 0) -> None:
        """Draw an opaque one-pixel-wide line."""
        self.draw_solid_filled_rect(x, y, 1, h, flags)

    def draw_filled_rect(self, x: int, y: int, w: int, h: int, pat: int = SOLID,
                         flags: int = 0, opacity: int = 0) -> None:
        """Fill a rectangle with a pattern or a translucent colour."""
        x += self.offset_x
        y += self.offset_y
        clipped = self._apply_clipping_rect(x, y, w, h)
        if clipped is None:
            return
        x, y, w, h = clipped
        if pat != SOLID:
            for row in range(y, y + h):
                self._draw_horizontal_line_abs(x, row, w, pat, flags, opacity)
            return
        r, g, b = rgb_split(color_val(flags))
        color_argb = argb((OPACITY_MAX - opacity) << 4, r << 3, g << 2, b << 3)
        scratch = Bitmap(PixelFormat.ARGB4444, w, h)
        scratch.draw_solid_filled_rect(0, 0, w, h, color_flags(color_argb))
        self._draw_bitmap_abs(x, y, scratch, 0, 0, w, h)

    def invert_rect(self, x: int, y: int, w: int, h: int, flags: int = 0) -> None:
        """Invert the colours of a rectangle relative to the colour in ``flags``."""
        x += self.offset_x
        y += self.offset_y
        clipped = self._apply_clipping_rect(x, y, w, h)
        if clipped is None:
            return
        x, y, w, h = clipped
        red, green, blue = rgb_split(color_val(flags))
        for row in range(y, y + h):
            index = self._index(x, row)
            for _ in range(w):
                if 0 <= index < len(self.data):
                    bg_red, bg_green, bg_blue = rgb_split(self.data[index])
                    self._put(index, rgb_join(0x1F + red - bg_red,
                                              0x3F + green - bg_green,
                                              0x1F + blue - bg_blue))
                index += 1

    def clear(self, flags: int = 0) -> None:
        """Fill the buffer, from the offset on, with the colour in ``flags``."""
        self.draw_solid_filled_rect(0, 0, self.width - self.offset_x,
                                    self.height - self.offset_y, flags)

    # -- bitmaps -------------------------------------------------------------

    def draw_bitmap(self, x: int, y: int, bmp: Bitmap | None, srcx: int = 0,
                    srcy: int = 0, srcw: int = 0, srch: int = 0,
                    scale: float = 0) -> None:
        """Copy part of ``bmp`` here, scaled by ``scale`` unless it is 0."""
        if bmp is None:
            return
        x += self.offset_x
        y += self.offset_y
        if x >= self.xmax or y >= self.ymax:
            return
        self._draw_bitmap_abs(x, y, bmp, srcx, srcy, srcw, srch, scale)

    def _draw_bitmap_abs(self, x: int, y: int, bmp: Bitmap, srcx: int = 0,
                         srcy: int = 0, srcw: int = 0, srch: int = 0,
                         scale: float = 0) -> None:
        bmpw, bmph = bmp.width, bmp.height
        if srcw == 0:
            srcw = bmpw
        if srch == 0:
            srch = bmph
        if srcx + srcw > bmpw:
            srcw = bmpw - srcx
        if srcy + srch > bmph:
            srch = bmph - srcy

        if scale == 0:
            if x < self.xmin:
                srcw += x - self.xmin
                srcx -= x - self.xmin
                x = self.xmin
            if y < self.ymin:
                srch += y - self.ymin
                srcy -= y - self.ymin
                y = self.ymin
            if x + srcw > self.xmax:
                srcw = self.xmax - x
            if y + srch > self.ymax:
                srch = self.ymax - y
        else:
            if x < self.xmin:
                shift = (x - self.xmin) / scale
                srcw = int(srcw + shift)
                srcx = int(srcx - shift)
                x = self.xmin
            if y < self.ymin:
                shift = (y - self.ymin) / scale
                srch = int(srch + shift)
                srcy = int(srcy - shift)
                y = self.ymin
            if x + srcw * scale > self.xmax:
                srcw = int((self.xmax - x) / scale)
            if y + srch * scale > self.ymax:
                srch = int((self.ymax - y) / scale)

        if srcw <= 0 or srch <= 0:
            return

        alpha = bmp.format == PixelFormat.ARGB4444
        if scale == 0:
            for row in range(srch):
                dst = self._index(x, y + row)
                src = bmp._index(srcx, srcy + row)
                for value in bmp.data[src:src + srcw]:
                    if alpha:
                        self._blend_argb(dst, value)
                    else:
                        self._put(dst, value)
                    dst += 1
            return

        scaledw = int(srcw * scale)
        scaledh = int(srch * scale)
        if x + scaledw > self.width:
            scaledw = self.width - x
        if y + scaledh > self.height:
            scaledh = self.height - y
        for i in range(scaledh):
            dst = self._index(x, y + i)
            qstart = bmp._index(srcx, srcy + int(i / scale))
            for j in range(scaledw):
                value = bmp.data[qstart + int(j / scale)]
                if alpha:
                    self._blend_argb(dst, value)
                else:
                    self._put(dst, value)
                dst += 1

    def draw_scaled_bitmap(self, bitmap: Bitmap | None, x: int, y: int,
                           w: int, h: int) -> None:
        """Draw ``bitmap`` scaled to fit and centred in the given box."""
        if bitmap is None:
            return
        vscale = h / bitmap.height
        hscale = w / bitmap.width
        scale = vscale if vscale < hscale else hscale
        xshift = int((w - bitmap.width * scale) / 2)
        yshift = int((h - bitmap.height * scale) / 2)
        self.draw_bitmap(x + xshift, y + yshift, bitmap, 0, 0, 0, 0, scale)

    def horizontal_flip(self) -> Bitmap:
        """Return a copy mirrored left to right."""
        rows = (self.data[r * self.width:(r + 1) * self.width]
                for r in range(self.height))
        data = [value for row in rows for value in reversed(row)]
        return Bitmap(self.format, self.width, self.height, data)

    def vertical_flip(self) -> Bitmap:
        """Return a copy mirrored top to bottom."""
        data: list[int] = []
        for r in reversed(range(self.height)):
            data.extend(self.data[r * self.width:(r + 1) * self.width])
        return Bitmap(self.format, self.width, self.height, data)

    def invert_mask(self) -> Bitmap:
        """Return a mask copy whose opacities are inverted."""
        data = [(OPACITY_MAX - (value & 0xFF)) & 0xFFFF for value in self.data]
        return Bitmap(self.format, self.width, self.height, data)