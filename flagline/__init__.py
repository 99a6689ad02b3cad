"""flagline: a small command-line option parser."""

from __future__ import annotations

from .errors import (
    FlagInUseError,
    InvalidArgumentError,
    InvalidValueError,
    MissingRequiredOptionsError,
    OptionDefinitionError,
    ParseError,
)
from .options import (
    BoolOption,
    CounterOption,
    DoubleOption,
    EnumOption,
    IntOption,
    MultiStringOption,
    Option,
    StringOption,
)
from .parser import CommandLine
from .usage import OutputKind
from .version import __version__

__all__ = [
    "BoolOption",
    "CommandLine",
    "CounterOption",
    "DoubleOption",
    "EnumOption",
    "FlagInUseError",
    "IntOption",
    "InvalidArgumentError",
    "InvalidValueError",
    "MissingRequiredOptionsError",
    "MultiStringOption",
    "Option",
    "OptionDefinitionError",
    "OutputKind",
    "ParseError",
    "StringOption",
    "__version__",
]
