"""Usage and help text rendering for a registered option set.

Rendering never influences parsing. Each piece of output is tagged with an
``OutputKind`` and passed through a format function, so callers can swap
the layout wholesale via ``CommandLine.format_output``.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, List, Optional, Sequence

from interfaces.text import padded, wrapped

from .colors import color
from .options import Option

__all__ = ["FormatOutput", "OutputKind", "UsageRenderer", "default_format"]


class OutputKind(Enum):
    HEADING = "heading"
    ERROR = "error"
    OPTION_FLAG = "option_flag"
    OPTION_HELP = "option_help"


FormatOutput = Callable[[str, OutputKind], str]


def default_format(
    text: str,
    kind: OutputKind,
    *,
    flag_width: int = 0,
    help_width: int = 0,
    use_color: bool = False,
) -> str:
    """Lay out one piece of usage output the way ``print_usage`` shows it.

    ``flag_width`` pads flag labels so their colons line up; a positive
    ``help_width`` wraps help messages at word boundaries.
    """
    if kind is OutputKind.HEADING:
        return color(text, bold=True, enabled=use_color) + "\n"
    if kind is OutputKind.ERROR:
        return color(text, fg="red", enabled=use_color) + "\n\n"
    if kind is OutputKind.OPTION_FLAG:
        return "  " + color(padded(text, flag_width), fg="cyan", enabled=use_color) + ":\n"
    return "".join(f"    {line}\n" for line in wrapped(text, help_width))


class UsageRenderer:
    """Builds the full usage text for a program and its options."""

    def __init__(
        self,
        options: Sequence[Option],
        *,
        program: str,
        flag_width: int = 0,
        help_width: int = 0,
        use_color: bool = False,
        format_output: Optional[FormatOutput] = None,
    ) -> None:
        self.options = list(options)
        self.program = program
        self.flag_width = flag_width
        self.help_width = help_width
        self.use_color = use_color
        self.format_output = format_output

    def format(self, text: str, kind: OutputKind) -> str:
        if self.format_output is not None:
            return self.format_output(text, kind)
        return default_format(
            text,
            kind,
            flag_width=self.flag_width,
            help_width=self.help_width,
            use_color=self.use_color,
        )

    def heading(self) -> str:
        return f"Usage: {self.program} [options]"

    def render(self, error: Optional[BaseException] = None) -> str:
        parts: List[str] = []
        if error is not None:
            parts.append(self.format(str(error), OutputKind.ERROR))
        parts.append(self.format(self.heading(), OutputKind.HEADING))
        for option in self.options:
            parts.append(self.format(option.flag_description, OutputKind.OPTION_FLAG))
            parts.append(self.format(option.help_message, OutputKind.OPTION_HELP))
        return "".join(parts)
