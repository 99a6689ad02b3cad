"""Example command-line programs built on flagline."""

from __future__ import annotations

from .demo import build_command_line, main

__all__ = ["build_command_line", "main"]
