"""Bitmap fonts, number formatting and text drawing."""

from __future__ import annotations

from enum import IntFlag
from typing import Iterator, Sequence, Union

from .canvas import Bitmap
from .masks import draw_bitmap_pattern

TextData = Union[str, bytes, bytearray]

CHAR_SPACING = 0
_DEFAULT_LENGTH = 255
_PREFIX_MAX = 16
_SUFFIX_MAX = 16


class TextFlags(IntFlag):
    """Layout flags for text; combine with colour flags using ``|``."""

    VERTICAL = 0x01
    LEADING0 = 0x02
    CENTERED = 0x04
    RIGHT = 0x08
    SPACING_NUMBERS_CONST = 0x10


class Font:
    """A bitmap font: one alpha pattern holding all glyphs side by side.

    ``specs[index + 1]`` and ``specs[index + 2]`` give the first column of
    glyph ``index`` and of the glyph after it. ``char_count`` glyphs cover
    codes from 0x20 on; double-byte glyphs follow them.
    """

    def __init__(self, pattern: bytes, specs: Sequence[int], height: int,
                 char_count: int) -> None:
        self.pattern = bytes(pattern)
        self.specs = tuple(specs)
        self.height = height
        self.char_count = char_count
        self.cjk_first_index = char_count

    def glyph_offset(self, index: int) -> int:
        """First pattern column of glyph ``index``."""
        return self.specs[index + 1]

    def char_width(self, index: int) -> int:
        """Width in pixels of glyph ``index``."""
        return self.specs[index + 2] - self.specs[index + 1]

    def mapped_index(self, code: int) -> int:
        """Glyph index of a single-byte character code."""
        return code - 0x20


def _as_bytes(text: TextData) -> bytes:
    if isinstance(text, str):
        return text.encode("latin-1", errors="replace")
    return bytes(text)


def _glyphs(data: bytes, length: int, font: Font) -> Iterator[tuple[int | None, int]]:
    """Yield ``(glyph index, code)``; the index is ``None`` for a line break."""
    stream = iter(data)
    for _, code in zip(range(length), stream):
        if code == 0:
            return
        if code >= 0xFE:
            low = next(stream, None)
            if low is None:
                return
            index = low + ((code & 0x01) << 8) - 1
            if index >= 0x101:
                index -= 1
            yield index + font.cjk_first_index, code
        elif 0x20 <= code < font.char_count + 0x20:
            yield font.mapped_index(code), code
        elif code == 0x0A:
            yield None, code


def _advance(font: Font, width: int, code: int, flags: int) -> int:
    if flags & TextFlags.SPACING_NUMBERS_CONST and 0x30 <= code <= 0x39:
        return font.char_width(font.mapped_index(0x39)) + CHAR_SPACING
    return width + CHAR_SPACING


def format_number(val: int, precision: int = 0, length: int = 0,
                  leading_zero: bool = False, prefix: str | None = None,
                  suffix: str | None = None) -> str:
    """Format an integer with an implied decimal point.

    ``precision`` digits go after the point; ``length`` pads with zeros when
    ``leading_zero`` is set or a point is shown. A prefix longer than 16
    characters is dropped and the suffix is cut to 16 characters.
    """
    mode = precision if precision else (0 if leading_zero else -1)
    negative = val < 0
    val = abs(val)
    chars: list[str] = []
    count = 0
    while True:
        chars.append(chr(0x30 + val % 10))
        count += 1
        val //= 10
        if mode != 0 and count == mode:
            mode = 0
            chars.append(".")
            if val == 0:
                chars.append("0")
        if not (val != 0 or mode > 0 or (mode == 0 and count < length)):
            break
    if negative:
        chars.append("-")
    text = "".join(reversed(chars))
    if prefix and len(prefix) <= _PREFIX_MAX:
        text = prefix + text
    if suffix:
        text += suffix[:_SUFFIX_MAX]
    return text


def text_width(text: TextData, length: int, font: Font, flags: int = 0) -> int:
    """Width in pixels of the widest line of ``text``; ``length`` 0 means all."""
    flags = int(flags)
    data = _as_bytes(text)
    widest = line = 0
    for index, code in _glyphs(data, length or len(data), font):
        if index is None:
            widest = max(widest, line)
            line = 0
        else:
            line += _advance(font, font.char_width(index), code, flags)
    return max(widest, line)


def draw_char(canvas: Bitmap, x: int, y: int, font: Font, index: int,
              flags: int = 0) -> int:
    """Draw glyph ``index`` at ``(x, y)`` and return its width."""
    width = font.char_width(index)
    if width > 0:
        draw_bitmap_pattern(canvas, x, y, font.pattern, int(flags),
                            font.glyph_offset(index), width)
    return width


def draw_sized_text(canvas: Bitmap, x: int, y: int, text: TextData | None,
                    length: int, font: Font, flags: int = 0) -> int:
    """Draw at most ``length`` characters of ``text`` and return the end position.

    The result is the x position after the text (the y position when
    drawing vertically, which runs upward), or the start for right-aligned
    text.
    """
    flags = int(flags)
    vertical = bool(flags & TextFlags.VERTICAL)
    if text is None:
        return y if vertical else x
    data = _as_bytes(text)

    offset_x, offset_y = canvas.offset_x, canvas.offset_y
    x += offset_x
    y += offset_y
    canvas.set_offset(0, 0)
    try:
        if y + font.height <= canvas.ymin or y >= canvas.ymax:
            return x

        if flags & (TextFlags.RIGHT | TextFlags.CENTERED):
            width = text_width(data, length, font, flags)
            shift = -width if flags & TextFlags.RIGHT else int(-width / 2)
            if vertical:
                y -= shift
            else:
                x += shift

        orig = y if vertical else x
        for index, code in _glyphs(data, length, font):
            if index is None:
                if vertical:
                    y = orig
                    x += font.height
                else:
                    x = orig
                    y += font.height
                continue
            width = draw_char(canvas, x, y, font, index, flags)
            step = _advance(font, width, code, flags)
            if vertical:
                y -= step
            else:
                x += step

        pos = y if vertical else x
        return (orig if flags & TextFlags.RIGHT else pos) - offset_x
    finally:
        canvas.set_offset(offset_x, offset_y)


def draw_text(canvas: Bitmap, x: int, y: int, text: TextData | None, font: Font,
              flags: int = 0) -> int:
    """Draw ``text`` (up to 255 characters) and return the end position."""
    if text is None:
        return y if int(flags) & TextFlags.VERTICAL else x
    return draw_sized_text(canvas, x, y, text, _DEFAULT_LENGTH, font, flags)


def draw_text_at_index(canvas: Bitmap, x: int, y: int, table: TextData, idx: int,
                       font: Font, flags: int = 0) -> int:
    """Draw entry ``idx`` of a fixed-width table whose first byte is the width."""
    data = _as_bytes(table)
    length = data[0]
    start = 1 + length * idx
    return draw_sized_text(canvas, x, y, data[start:], length, font, flags)


def draw_number(canvas: Bitmap, x: int, y: int, val: int, font: Font, flags: int = 0,
                length: int = 0, prefix: str | None = None, suffix: str | None = None,
                precision: int = 0) -> int:
    """Format ``val`` with :func:`format_number` and draw it."""
    text = format_number(val, precision, length,
                         bool(int(flags) & TextFlags.LEADING0), prefix, suffix)
    return draw_text(canvas, x, y, text, font, flags)