"""
Tiny ANSI color utilities for usage output.

Respects NO_COLOR to disable. Enables only when the target stream is a TTY
unless FORCE_COLOR is set.
"""

from __future__ import annotations

import os
import sys
from typing import IO, Optional


def color_enabled(stream: Optional[IO[str]] = None) -> bool:
    if os.getenv("NO_COLOR") is not None:
        return False
    if os.getenv("FORCE_COLOR") is not None:
        return True
    target = stream if stream is not None else sys.stderr
    try:
        return target.isatty()
    except Exception:
        return False


class _Codes:
    RESET = "\x1b[0m"
    BOLD = "\x1b[1m"
    RED = "\x1b[31m"
    YELLOW = "\x1b[33m"
    BLUE = "\x1b[34m"
    CYAN = "\x1b[36m"


def color(text: str, *, fg: str | None = None, bold: bool = False, enabled: bool = True) -> str:
    if not enabled or not text or (fg is None and not bold):
        return text
    parts: list[str] = []
    if bold:
        parts.append(_Codes.BOLD)
    if fg:
        parts.append(getattr(_Codes, fg.upper(), ""))
    return "".join(parts) + text + _Codes.RESET


__all__ = ["color", "color_enabled"]
