"""Triangles, circles, annulus sectors and pie-shaped pattern drawing."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .canvas import Bitmap
from .pixels import SOLID, color_val

_VERTICAL_SLOPE = 99000
_AXIS_SLOPE = 100000


def _tdiv(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


@dataclass
class Slope:
    """A direction from the centre, as a side flag and a scaled slope value.

    ``left`` tells whether the direction points into the left half plane;
    ``value`` is 100 times the cotangent of the angle.
    """

    left: bool
    value: int

    @classmethod
    def from_angle(cls, angle: int) -> Slope:
        """Build the slope of ``angle`` degrees, measured clockwise from up."""
        if angle < 0:
            angle += 360
        if angle > 360:
            angle %= 360
        if angle == 0:
            return cls(False, _AXIS_SLOPE)
        if angle == 360:
            return cls(True, _AXIS_SLOPE)
        radians = angle * (math.pi / 180.0)
        cotangent = math.cos(radians) * 100 / math.sin(radians)
        if angle >= 180:
            return cls(True, int(-cotangent))
        return cls(False, int(cotangent))

    def is_between(self, start: Slope, end: Slope) -> bool:
        """Tell whether this direction lies in the sector from ``start`` to ``end``."""
        value = self.value
        if self.left:
            if start.left:
                if end.left:
                    if end.value > start.value:
                        return start.value <= value <= end.value
                    return value <= end.value or value >= start.value
                return value >= start.value
            if end.left:
                return value <= end.value
            return end.value > start.value
        if start.left:
            if end.left:
                return start.value > end.value
            return value >= end.value
        if end.left:
            return value <= start.value
        if end.value < start.value:
            return end.value <= value <= start.value
        return value <= start.value or value >= end.value

    def invert_vertical(self) -> Slope:
        """Mirror the direction top to bottom, in place."""
        self.value = -self.value
        return self

    def invert_horizontal(self) -> Slope:
        """Mirror the direction left to right, in place."""
        self.left = not self.left
        return self


def _sector_bounds(start_angle: int, end_angle: int) -> tuple[Slope, Slope]:
    if end_angle == start_angle:
        end_angle += 1
    return Slope.from_angle(start_angle), Slope.from_angle(end_angle)


def draw_filled_triangle(canvas: Bitmap, x0: int, y0: int, x1: int, y1: int,
                         x2: int, y2: int, flags: int = 0, opacity: int = 0) -> None:
    """Fill the triangle with the given corners using horizontal spans."""
    if y0 > y1:
        y0, y1, x0, x1 = y1, y0, x1, x0
    if y1 > y2:
        y1, y2, x1, x2 = y2, y1, x2, x1
    if y0 > y1:
        y0, y1, x0, x1 = y1, y0, x1, x0

    if y0 == y2:
        a = min(x0, x1, x2)
        b = max(x0, x1, x2)
        canvas.draw_horizontal_line(a, y0, b - a + 1, SOLID, flags, opacity)
        return

    dx01, dy01 = x1 - x0, y1 - y0
    dx02, dy02 = x2 - x0, y2 - y0
    dx12, dy12 = x2 - x1, y2 - y1
    sa = sb = 0
    last = y1 if y1 == y2 else y1 - 1

    y = y0
    while y <= last:
        a = x0 + _tdiv(sa, dy01)
        b = x0 + _tdiv(sb, dy02)
        sa += dx01
        sb += dx02
        if a > b:
            a, b = b, a
        canvas.draw_horizontal_line(a, y, b - a + 1, SOLID, flags, opacity)
        y += 1

    sa = dx12 * (y - y1)
    sb = dx02 * (y - y0)
    while y <= y2:
        a = x1 + _tdiv(sa, dy12)
        b = x0 + _tdiv(sb, dy02)
        sa += dx12
        sb += dx02
        if a > b:
            a, b = b, a
        canvas.draw_horizontal_line(a, y, b - a + 1, SOLID, flags, opacity)
        y += 1


def draw_circle(canvas: Bitmap, x: int, y: int, radius: int, flags: int = 0) -> None:
    """Draw a one-pixel circle outline (midpoint algorithm)."""
    x1 = radius
    y1 = 0
    decision = 1 - x1
    color = color_val(flags)
    while y1 <= x1:
        for px, py in ((x1, y1), (y1, x1), (-x1, y1), (-y1, x1),
                       (-x1, -y1), (-y1, -x1), (x1, -y1), (y1, -x1)):
            canvas.draw_pixel(px + x, py + y, color)
        y1 += 1
        if decision <= 0:
            decision += 2 * y1 + 1
        else:
            x1 -= 1
            decision += 2 * (y1 - x1) + 1


def draw_filled_circle(canvas: Bitmap, x: int, y: int, radius: int,
                       flags: int = 0) -> None:
    """Fill a disc with opaque horizontal lines."""
    imax = _tdiv(radius * 707, 1000) + 1
    sqmax = radius * radius + _tdiv(radius, 2)
    x1 = radius
    canvas.draw_solid_horizontal_line(x - radius, y, radius * 2, flags)
    for i in range(1, imax + 1):
        if i * i + x1 * x1 > sqmax:
            if x1 > imax:
                canvas.draw_solid_horizontal_line(x - i + 1, y + x1, (i - 1) * 2, flags)
                canvas.draw_solid_horizontal_line(x - i + 1, y - x1, (i - 1) * 2, flags)
            x1 -= 1
        canvas.draw_solid_horizontal_line(x - x1, y + i, x1 * 2, flags)
        canvas.draw_solid_horizontal_line(x - x1, y - i, x1 * 2, flags)


def draw_annulus_sector(canvas: Bitmap, x: int, y: int, internal_radius: int,
                        external_radius: int, start_angle: int, end_angle: int,
                        flags: int = 0) -> None:
    """Fill the part of a ring that lies between two angles."""
    start, end = _sector_bounds(start_angle, end_angle)
    color = color_val(flags)
    x += canvas.offset_x
    y += canvas.offset_y
    internal_dist = internal_radius * internal_radius
    external_dist = external_radius * external_radius

    for y1 in range(external_radius + 1):
        for x1 in range(external_radius + 1):
            dist = x1 * x1 + y1 * y1
            if not internal_dist <= dist <= external_dist:
                continue
            slope = Slope(False, _VERTICAL_SLOPE if x1 == 0 else y1 * 100 // x1)
            if slope.is_between(start, end):
                canvas._draw_pixel_abs(x + x1, y - y1, color)
            if slope.invert_vertical().is_between(start, end):
                canvas._draw_pixel_abs(x + x1, y + y1, color)
            if slope.invert_horizontal().is_between(start, end):
                canvas._draw_pixel_abs(x - x1, y + y1, color)
            if slope.invert_vertical().is_between(start, end):
                canvas._draw_pixel_abs(x - x1, y - y1, color)


def draw_bitmap_pattern_pie(canvas: Bitmap, x: int, y: int, img: bytes,
                            flags: int, start_angle: int, end_angle: int) -> None:
    """Blend an alpha pattern in the colour of ``flags``, limited to a pie slice.

    ``img`` starts with little-endian 16-bit width and height, followed by
    one alpha byte per pixel whose upper four bits are the opacity.
    """
    if len(img) < 4:
        raise ValueError("pattern header is truncated")
    width = int.from_bytes(img[0:2], "little")
    height = int.from_bytes(img[2:4], "little")
    if len(img) < 4 + width * height:
        raise ValueError("pattern data is truncated")
    start, end = _sector_bounds(start_angle, end_angle)
    color = color_val(flags)
    q = img[4:]
    w2 = width // 2
    h2 = height // 2

    for y1 in range(h2 - 1, -1, -1):
        for x1 in range(w2 - 1, -1, -1):
            slope = Slope(False, _VERTICAL_SLOPE if x1 == 0 else y1 * 100 // x1)
            if slope.is_between(start, end):
                canvas.draw_alpha_pixel(x + w2 + x1, y + h2 - y1,
                                        q[(h2 - y1) * width + w2 + x1] >> 4, color)
            if slope.invert_vertical().is_between(start, end):
                canvas.draw_alpha_pixel(x + w2 + x1, y + h2 + y1,
                                        q[(h2 + y1) * width + w2 + x1] >> 4, color)
            if slope.invert_horizontal().is_between(start, end):
                canvas.draw_alpha_pixel(x + w2 - x1, y + h2 + y1,
                                        q[(h2 + y1) * width + w2 - x1] >> 4, color)
            if slope.invert_vertical().is_between(start, end):
                canvas.draw_alpha_pixel(x + w2 - x1, y + h2 - y1,
                                        q[(h2 - y1) * width + w2 - x1] >> 4, color)