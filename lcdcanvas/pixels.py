"""Pixel formats, colour packing and line patterns."""

from __future__ import annotations

from enum import IntEnum


class PixelFormat(IntEnum):
    """Storage format of a 16-bit pixel."""

    RGB565 = 0
    ARGB4444 = 1


OPACITY_MAX = 0x0F

SOLID = 0xFF
DOTTED = 0x55
STASHED = 0x33


def rgb(r: int, g: int, b: int) -> int:
    """Pack 8-bit red, green and blue into an RGB565 value."""
    return (((r & 0xFF) >> 3) << 11) | (((g & 0xFF) >> 2) << 5) | ((b & 0xFF) >> 3)


def rgb_join(r: int, g: int, b: int) -> int:
    """Pack 5-bit red, 6-bit green and 5-bit blue into a 16-bit value."""
    return ((r << 11) + (g << 5) + b) & 0xFFFF


def argb(a: int, r: int, g: int, b: int) -> int:
    """Pack 8-bit alpha, red, green and blue into an ARGB4444 value."""
    return (
        (((a & 0xFF) >> 4) << 12)
        | (((r & 0xFF) >> 4) << 8)
        | (((g & 0xFF) >> 4) << 4)
        | ((b & 0xFF) >> 4)
    )


def rgb_split(color: int) -> tuple[int, int, int]:
    """Split an RGB565 value into its 5, 6 and 5 bit components."""
    return (color >> 11) & 0x1F, (color >> 5) & 0x3F, color & 0x1F


def argb_split(color: int) -> tuple[int, int, int, int]:
    """Split an ARGB4444 value into four 4-bit components."""
    return (color >> 12) & 0x0F, (color >> 8) & 0x0F, (color >> 4) & 0x0F, color & 0x0F


def color_val(flags: int) -> int:
    """Extract the 16-bit colour carried in the upper half of drawing flags."""
    return (flags >> 16) & 0xFFFF


def color_flags(color: int) -> int:
    """Place a 16-bit colour into the upper half of drawing flags."""
    return (color & 0xFFFF) << 16