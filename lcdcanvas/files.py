"""File name extension handling and case-insensitive ordering."""

from __future__ import annotations

from typing import Iterable

LEN_FILE_EXTENSION_MAX = 5

_ASCII_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)


def _fold(text: str) -> str:
    return text.translate(_ASCII_LOWER)


def get_file_extension(filename: str, size: int = 0, ext_max_len: int = 0) -> str | None:
    """Return the extension of ``filename``, dot included, or ``None``.

    Only the first ``size`` characters are considered (all when 0) and the
    dot must lie within the last ``ext_max_len`` characters (5 when 0).
    """
    length = size or len(filename)
    max_len = ext_max_len or LEN_FILE_EXTENSION_MAX
    name = filename[:length]
    pos = name.rfind(".", max(0, length - max_len))
    return name[pos:] if pos >= 0 else None


def _find_matching_extension(extension: str, pattern: str) -> str | None:
    remaining = len(pattern)
    ext = get_file_extension(pattern)
    while remaining > 0 and ext:
        if _fold(extension[:len(ext)]) == _fold(ext):
            return ext
        remaining -= len(ext)
        if remaining > 0:
            ext = get_file_extension(pattern, remaining)
    return None


def is_extension_matching(extension: str, pattern: str) -> bool:
    """Tell whether ``extension`` is one of the extensions joined in ``pattern``.

    ``pattern`` is a run of extensions such as ``".gif.jpg.png"``; it is
    searched from its end and compared without regard to case.
    """
    return _find_matching_extension(extension, pattern) is not None


def compare_nocase(first: str, second: str) -> bool:
    """Return True when ``first`` sorts before ``second`` ignoring ASCII case."""
    return _fold(first) < _fold(second)


def sort_nocase(names: Iterable[str]) -> list[str]:
    """Sort names ignoring ASCII case, keeping the order of equal names."""
    return sorted(names, key=_fold)