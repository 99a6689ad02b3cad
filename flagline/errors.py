"""Error types raised while declaring options or parsing arguments."""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:  # pragma: no cover - type checking only
    from .options import Option

__all__ = [
    "FlagInUseError",
    "InvalidArgumentError",
    "InvalidValueError",
    "MissingRequiredOptionsError",
    "OptionDefinitionError",
    "ParseError",
]


class OptionDefinitionError(ValueError):
    """An option was declared with an unusable flag spelling."""


class FlagInUseError(OptionDefinitionError):
    """A flag spelling is already claimed by a registered option."""

    def __init__(self, flag: str) -> None:
        super().__init__(f"Flag '{flag}' already in use")
        self.flag = flag


class ParseError(Exception):
    """Base class for failures reported by ``CommandLine.parse``."""


class InvalidArgumentError(ParseError):
    """A prefixed token matched no registered option in strict mode."""

    def __init__(self, token: str) -> None:
        super().__init__(token)
        self.token = token

    def __str__(self) -> str:
        return f"Invalid argument: {self.token}"


class InvalidValueError(ParseError):
    """An option rejected the value window it was offered."""

    def __init__(self, option: "Option", values: Sequence[str]) -> None:
        super().__init__(option, list(values))
        self.option = option
        self.values = list(values)

    def __str__(self) -> str:
        shown = ", ".join(self.values)
        return f"Invalid value(s) for option {self.option.flag_description}: {shown}"


class MissingRequiredOptionsError(ParseError):
    """One or more required options were never supplied."""

    def __init__(self, options: Sequence["Option"]) -> None:
        super().__init__(list(options))
        self.options = list(options)

    def __str__(self) -> str:
        flags = ", ".join(opt.flag_description for opt in self.options)
        return f"Missing required options: {flags}"
