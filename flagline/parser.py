"""Argument vector scanning and option matching."""

from __future__ import annotations

import logging
import sys
from typing import IO, List, Optional, Sequence, Set

from interfaces.locale_decimal import parse_decimal
from interfaces.text import program_name

from .colors import color_enabled
from .config import get_runtime_config
from .errors import (
    FlagInUseError,
    InvalidArgumentError,
    InvalidValueError,
    MissingRequiredOptionsError,
)
from .options import (
    LONG_OPTION_PREFIX,
    SHORT_OPTION_PREFIX,
    DecimalParser,
    DoubleOption,
    Option,
    is_numeric,
)
from .usage import FormatOutput, OutputKind, UsageRenderer, default_format

__all__ = ["ARGUMENT_ATTACHER", "ARGUMENT_STOPPER", "CommandLine"]

logger = logging.getLogger(__name__)

ARGUMENT_STOPPER = "--"
ARGUMENT_ATTACHER = "="


class CommandLine:
    """Registry of options plus the raw argument vector they are parsed from.

    ``arguments[0]`` is the invocation path and never takes part in
    matching. Options are tried in registration order.
    """

    def __init__(
        self,
        arguments: Optional[Sequence[str]] = None,
        *,
        decimal_parser: Optional[DecimalParser] = None,
        uses_sub_commands: bool = False,
        format_output: Optional[FormatOutput] = None,
    ) -> None:
        self._arguments: tuple[str, ...] = tuple(sys.argv if arguments is None else arguments)
        self._options: List[Option] = []
        self._max_flag_description_width: Optional[int] = None
        self._unparsed_arguments: List[str] = []
        self.decimal_parser: DecimalParser = decimal_parser or parse_decimal
        self.uses_sub_commands = uses_sub_commands
        self.format_output = format_output

    # -----------------
    # Registry
    # -----------------
    @property
    def arguments(self) -> tuple[str, ...]:
        return self._arguments

    @property
    def options(self) -> tuple[Option, ...]:
        return tuple(self._options)

    @property
    def unparsed_arguments(self) -> List[str]:
        """Tokens no option claimed during the last successful ``parse``."""

        return list(self._unparsed_arguments)

    @property
    def max_flag_description_width(self) -> int:
        if self._max_flag_description_width is None:
            self._max_flag_description_width = max(
                (len(opt.flag_description) for opt in self._options),
                default=0,
            )
        return self._max_flag_description_width

    def _used_flags(self) -> Set[str]:
        used: Set[str] = set()
        for option in self._options:
            used.update(option.flags)
        return used

    def add_option(self, option: Option) -> None:
        """Register ``option``; raises ``FlagInUseError`` on a spelling clash."""

        used = self._used_flags()
        for flag in option.flags:
            if flag in used:
                raise FlagInUseError(flag)
        if isinstance(option, DoubleOption) and option.decimal_parser is None:
            option.decimal_parser = self.decimal_parser
        self._options.append(option)
        self._max_flag_description_width = None

    def add_options(self, *options: Option) -> None:
        for option in options:
            self.add_option(option)

    def set_options(self, *options: Option) -> None:
        """Replace every registered option with ``options``."""

        self._options = []
        self._max_flag_description_width = None
        self.add_options(*options)

    # -----------------
    # Parsing
    # -----------------
    def _flag_values(self, flag_index: int, attached: Optional[str]) -> List[str]:
        values: List[str] = [attached] if attached is not None else []
        for arg in self._arguments[flag_index + 1:]:
            if arg == ARGUMENT_STOPPER:
                break
            # negative numbers are values, not flags
            if arg.startswith(SHORT_OPTION_PREFIX) and not is_numeric(arg, self.decimal_parser):
                break
            values.append(arg)
        return values

    def _apply(
        self,
        option: Option,
        values: List[str],
        index: int,
        attached: Optional[str],
        claimed: Set[int],
    ) -> None:
        if not option.set_value(values):
            raise InvalidValueError(option, values)
        last = index + option.claimed_values
        if attached is not None:
            last -= 1
        claimed.update(range(index, max(last, index) + 1))
        logger.debug(
            "Matched %s at index %d (claimed %d value(s))",
            option.flag_description,
            index,
            option.claimed_values,
        )

    def _match_whole(
        self, name: str, index: int, attached: Optional[str], claimed: Set[int]
    ) -> bool:
        for option in self._options:
            if option.flag_match(name):
                values = self._flag_values(index, attached)
                self._apply(option, values, index, attached, claimed)
                return True
        return False

    def _match_cluster(
        self, name: str, index: int, attached: Optional[str], claimed: Set[int]
    ) -> bool:
        matched = False
        last_position = len(name) - 1
        for position, char in enumerate(name):
            for option in self._options:
                if not option.flag_match(char):
                    continue
                # only the final flag of a cluster may take values
                values = self._flag_values(index, attached) if position == last_position else []
                self._apply(option, values, index, attached, claimed)
                matched = True
                break
        return matched

    def parse(self, strict: bool = False) -> None:
        """Scan the argument vector and populate every registered option.

        Raises ``InvalidArgumentError`` (strict mode only),
        ``InvalidValueError`` or ``MissingRequiredOptionsError``.
        """
        self._unparsed_arguments = []
        claimed: Set[int] = set()

        for index in range(1, len(self._arguments)):
            arg = self._arguments[index]
            if arg == ARGUMENT_STOPPER:
                break
            if index in claimed or not arg.startswith(SHORT_OPTION_PREFIX):
                continue

            is_long = arg.startswith(LONG_OPTION_PREFIX)
            body = arg[len(LONG_OPTION_PREFIX if is_long else SHORT_OPTION_PREFIX):]
            if not body:
                continue

            name, _, attached_text = body.partition(ARGUMENT_ATTACHER)
            attached = attached_text or None

            matched = self._match_whole(name, index, attached, claimed)
            if not matched and not is_long:
                matched = self._match_cluster(name, index, attached, claimed)

            if not matched:
                if strict:
                    raise InvalidArgumentError(arg)
                logger.debug("No option matches %r; keeping it as unparsed", arg)

        missing = [opt for opt in self._options if opt.required and not opt.was_set]
        if missing:
            raise MissingRequiredOptionsError(missing)

        self._unparsed_arguments = [
            arg for index, arg in enumerate(self._arguments) if index > 0 and index not in claimed
        ]

    # -----------------
    # Usage output
    # -----------------
    def program_label(self) -> str:
        if not self._arguments:
            return ""
        name = program_name(self._arguments[0])
        if self.uses_sub_commands and len(self._arguments) > 1:
            return f"{name} {self._arguments[1]}"
        return name

    def default_format(self, text: str, kind: OutputKind) -> str:
        """Plain layout used when ``format_output`` is unset."""

        return default_format(
            text,
            kind,
            flag_width=self.max_flag_description_width,
            help_width=get_runtime_config().usage.help_width,
        )

    def usage_text(self, error: Optional[BaseException] = None, *, use_color: bool = False) -> str:
        renderer = UsageRenderer(
            self._options,
            program=self.program_label(),
            flag_width=self.max_flag_description_width,
            help_width=get_runtime_config().usage.help_width,
            use_color=use_color,
            format_output=self.format_output,
        )
        return renderer.render(error)

    def print_usage(self, error: Optional[BaseException] = None, *, file: Optional[IO[str]] = None) -> None:
        """Write usage (preceded by ``error`` when given) to ``file`` or stderr."""

        stream = file if file is not None else sys.stderr
        configured = get_runtime_config().usage.color
        use_color = configured if configured is not None else color_enabled(stream)
        stream.write(self.usage_text(error, use_color=use_color))
