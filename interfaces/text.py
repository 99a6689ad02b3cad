"""Small string helpers used when laying out usage text."""

from __future__ import annotations

import textwrap
from pathlib import PurePosixPath


def padded(text: str, width: int, pad_char: str = " ") -> str:
    """Right-pad ``text`` with ``pad_char`` up to ``width`` characters."""

    if len(pad_char) != 1:
        raise ValueError("pad_char must be a single character")
    return text.ljust(width, pad_char)


def wrapped(text: str, width: int) -> list[str]:
    """Split ``text`` into lines no wider than ``width`` at word boundaries.

    Words longer than ``width`` are kept whole on their own line. A
    non-positive width disables wrapping.
    """
    if width <= 0:
        return [text]
    lines = textwrap.wrap(
        text,
        width=width,
        break_long_words=False,
        break_on_hyphens=False,
    )
    return lines or [""]


def program_name(path: str) -> str:
    """Return the last path component of an invocation path."""

    if not path:
        return ""
    return PurePosixPath(path).name or path


__all__ = ["padded", "program_name", "wrapped"]
