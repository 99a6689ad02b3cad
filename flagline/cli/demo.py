"""Example program exercising every flagline option type.

Run ``flagline-demo --help`` to see the generated usage text, or pass a few
flags to see how they are parsed::

    flagline-demo -f out.tar -cvv --level 9 --include a.txt b.txt -- extra
"""

from __future__ import annotations

import locale
import logging
import os
import sys
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ..colors import color, color_enabled
from ..config import get_runtime_config
from ..errors import MissingRequiredOptionsError, ParseError
from ..options import (
    BoolOption,
    CounterOption,
    DoubleOption,
    EnumOption,
    IntOption,
    MultiStringOption,
    Option,
    StringOption,
)
from ..parser import CommandLine
from ..version import __version__

logger = logging.getLogger(__name__)

DEFAULT_PROG = "flagline-demo"
EXIT_USAGE = 2


class Operation(Enum):
    CREATE = "create"
    EXTRACT = "extract"
    LIST = "list"


@dataclass
class DemoOptions:
    file: StringOption
    compress: BoolOption
    level: IntOption
    ratio: DoubleOption
    include: MultiStringOption
    operation: EnumOption[Operation]
    verbose: CounterOption
    show_config: BoolOption
    help: BoolOption

    def all(self) -> List[Option]:
        return [
            self.file,
            self.compress,
            self.level,
            self.ratio,
            self.include,
            self.operation,
            self.verbose,
            self.show_config,
            self.help,
        ]


def build_command_line(arguments: Optional[Sequence[str]] = None) -> Tuple[CommandLine, DemoOptions]:
    """Construct the demo ``CommandLine`` with its options registered."""

    opts = DemoOptions(
        file=StringOption("f", "file", required=True, help_message="Archive file to operate on."),
        compress=BoolOption("c", "compress", help_message="Compress the archive contents."),
        level=IntOption("l", "level", help_message="Compression level (integer)."),
        ratio=DoubleOption("r", "ratio", help_message="Target compression ratio (decimal, locale aware)."),
        include=MultiStringOption("i", "include", help_message="Files to include; consumes every following value."),
        operation=EnumOption(
            "o",
            "operation",
            enum_type=Operation,
            help_message="Operation to perform: " + ", ".join(op.value for op in Operation) + ".",
        ),
        verbose=CounterOption("v", "verbose", help_message="Increase verbosity; repeat for more output."),
        show_config=BoolOption(long_flag="show-config", help_message="Print the resolved usage configuration."),
        help=BoolOption("h", "help", help_message="Show this help and exit."),
    )
    cli = CommandLine(arguments)
    cli.add_options(*opts.all())
    return cli, opts


def _describe(option: Option) -> str:
    value = getattr(option, "value", None)
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, list):
        return " ".join(value)
    return "-" if value is None else str(value)


def _print_config() -> None:
    usage = get_runtime_config().usage
    enabled = color_enabled(sys.stdout)
    print(color("Usage configuration:", fg="yellow", bold=True, enabled=enabled))
    print(f"  color: {'auto' if usage.color is None else usage.color}")
    print(f"  help_width: {usage.help_width}")
    print()


def _print_results(cli: CommandLine, opts: DemoOptions) -> None:
    enabled = color_enabled(sys.stdout)
    print(color(f"{cli.program_label()} {__version__}", fg="yellow", bold=True, enabled=enabled))
    for option in opts.all():
        if option in (opts.help, opts.show_config):
            continue
        label = option.long_flag or option.short_flag or ""
        state = _describe(option) if option.was_set else color("(unset)", fg="blue", enabled=enabled)
        print(f"  {label:<10} {state}")
    if cli.unparsed_arguments:
        print(f"  {'unparsed':<10} {' '.join(cli.unparsed_arguments)}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the demo; ``argv`` excludes the program name."""

    if os.getenv("FLAGLINE_DEBUG") == "1":
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    try:
        locale.setlocale(locale.LC_NUMERIC, "")
    except locale.Error as exc:
        logger.debug("Could not apply the environment numeric locale: %s", exc)

    arguments = [DEFAULT_PROG, *argv] if argv is not None else list(sys.argv)
    cli, opts = build_command_line(arguments)
    try:
        cli.parse(strict=True)
    except MissingRequiredOptionsError as exc:
        if opts.help.was_set:
            cli.print_usage(file=sys.stdout)
            return 0
        cli.print_usage(exc)
        return EXIT_USAGE
    except ParseError as exc:
        cli.print_usage(exc)
        return EXIT_USAGE

    if opts.help.was_set:
        cli.print_usage(file=sys.stdout)
        return 0
    if opts.show_config.was_set:
        _print_config()
    _print_results(cli, opts)
    return 0


__all__ = ["DemoOptions", "Operation", "build_command_line", "main"]
