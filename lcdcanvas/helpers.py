"""Small integer and string helpers shared by the drawing code."""

from __future__ import annotations

from typing import TypeVar, Union

T = TypeVar("T")

TextData = Union[str, bytes, bytearray]


def _trunc_div(a: int, b: int) -> int:
    """Integer division that rounds toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def limit(vmin: T, x: T, vmax: T) -> T:
    """Clamp ``x`` into ``[vmin, vmax]``; ``vmax`` wins if the bounds cross."""
    lower = vmin if vmin > x else x
    return vmax if lower > vmax else lower


def div_round_closest(n: int, d: int) -> int:
    """Divide ``n`` by ``d``, rounding halves away from zero; 0 when ``d`` is 0."""
    if d == 0:
        return 0
    half = _trunc_div(d, 2)
    if (n < 0) != (d < 0):
        return _trunc_div(n - half, d)
    return _trunc_div(n + half, d)


def mult_div_round_closest(v: int, n: int, d: int) -> int:
    """Compute ``v * n / d`` rounded to the closest integer."""
    if n == d:
        return v
    return div_round_closest(v * n, d)


def mod(k: int, n: int) -> int:
    """Remainder of ``k / n`` made non-negative by adding ``n`` once."""
    rest = k - n * _trunc_div(k, n)
    return rest + n if rest < 0 else rest


def align32(n: int) -> int:
    """Round ``n`` up to the next multiple of four."""
    rest = n & 3
    return n + 4 - rest if rest else n


def sgn(a):
    """Return 1, -1 or 0 according to the sign of ``a``."""
    if a > 0:
        return 1
    if a < 0:
        return -1
    return 0


def _char_code(data: TextData, index: int) -> int:
    item = data[index]
    return item if isinstance(item, int) else ord(item)


def _cut_at_nul(data: TextData) -> TextData:
    """Return ``data`` up to, not including, its first NUL character."""
    nul = "\0" if isinstance(data, str) else b"\0"
    end = data.find(nul)
    return data if end < 0 else data[:end]


def text_at_index(table: TextData, idx: int) -> TextData:
    """Return entry ``idx`` of a fixed-width string table.

    The first character of ``table`` holds the width of each entry; an
    entry ends early at a NUL character.
    """
    length = _char_code(table, 0)
    start = 1 + idx * length
    return _cut_at_nul(table[start:start + length])


def find_next_line(data: TextData) -> int | None:
    """Return the index of the next line break in ``data``.

    A newline directly preceded by a double-byte lead character (0xFE or
    0xFF) belongs to that character and is skipped.  Text ends at the first
    NUL character.  Returns ``None`` when there is no line break.
    """
    data = _cut_at_nul(data)
    newline = "\n" if isinstance(data, str) else b"\n"
    start = 0
    while True:
        pos = data.find(newline, start)
        if pos < 0:
            return None
        if pos == start or _char_code(data, pos - 1) < 0xFE:
            return pos
        start = pos + 1