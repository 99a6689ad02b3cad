"""Option declarations and the conversion rules for each value type.

Every option owns its flag spellings and its parsed state. The parser
hands each matched option a *value window* (the attached value, if any,
followed by the tokens after the flag) and the option decides how many of
those tokens it keeps. Conversion failures are reported as ``False`` from
``set_value``; the parser turns them into ``InvalidValueError``.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Generic, List, Optional, Sequence, Type, TypeVar

from interfaces.locale_decimal import parse_decimal

from .errors import OptionDefinitionError

__all__ = [
    "LONG_OPTION_PREFIX",
    "SHORT_OPTION_PREFIX",
    "BoolOption",
    "CounterOption",
    "DecimalParser",
    "DoubleOption",
    "EnumOption",
    "IntOption",
    "MultiStringOption",
    "Option",
    "StringOption",
    "is_numeric",
    "parse_int",
]

SHORT_OPTION_PREFIX = "-"
LONG_OPTION_PREFIX = "--"

DecimalParser = Callable[[str], Optional[float]]

_INT_RE = re.compile(r"[+-]?[0-9]+")

E = TypeVar("E", bound=Enum)


def parse_int(text: str) -> Optional[int]:
    """Parse a base-10 integer with an optional sign; ``None`` otherwise."""

    if not _INT_RE.fullmatch(text):
        return None
    return int(text)


def is_numeric(text: str, decimal_parser: Optional[DecimalParser] = None) -> bool:
    """Return True when ``text`` reads as a signed integer or decimal."""

    parser = decimal_parser or parse_decimal
    return parse_int(text) is not None or parser(text) is not None


class Option(ABC):
    """A single command-line flag and the state it accumulates while parsing."""

    def __init__(
        self,
        short_flag: Optional[str] = None,
        long_flag: Optional[str] = None,
        *,
        required: bool = False,
        help_message: str = "",
    ) -> None:
        if short_flag is None and long_flag is None:
            raise OptionDefinitionError("An option needs a short flag, a long flag, or both")
        for flag in (short_flag, long_flag):
            if flag is not None and "=" in flag:
                raise OptionDefinitionError(f"Flag cannot contain '=': {flag!r}")
        if short_flag is not None:
            if len(short_flag) != 1:
                raise OptionDefinitionError(f"Short flag must be a single character: {short_flag!r}")
            if is_numeric(short_flag):
                raise OptionDefinitionError(f"Short flag cannot be a numeric value: {short_flag!r}")
        if long_flag is not None:
            if not long_flag:
                raise OptionDefinitionError("Long flag cannot be empty")
            if is_numeric(long_flag):
                raise OptionDefinitionError(f"Long flag cannot be a numeric value: {long_flag!r}")

        self.short_flag = short_flag
        self.long_flag = long_flag
        self.required = required
        self.help_message = help_message
        self._claimed = 0

    @property
    def flags(self) -> tuple[str, ...]:
        return tuple(flag for flag in (self.short_flag, self.long_flag) if flag is not None)

    @property
    def flag_description(self) -> str:
        """Human-readable spelling such as ``-v, --verbose``."""

        parts = []
        if self.short_flag is not None:
            parts.append(f"{SHORT_OPTION_PREFIX}{self.short_flag}")
        if self.long_flag is not None:
            parts.append(f"{LONG_OPTION_PREFIX}{self.long_flag}")
        return ", ".join(parts)

    @property
    def was_set(self) -> bool:
        return False

    @property
    def claimed_values(self) -> int:
        """Number of window tokens kept by the most recent successful match."""

        return self._claimed

    def flag_match(self, flag: str) -> bool:
        return flag == self.short_flag or flag == self.long_flag

    @abstractmethod
    def set_value(self, values: Sequence[str]) -> bool:
        """Convert and store ``values``; return False to reject them."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.flag_description!r})"


class BoolOption(Option):
    """Switch that becomes True when present; takes no value."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._value = False

    @property
    def value(self) -> bool:
        return self._value

    @property
    def was_set(self) -> bool:
        return self._value

    def set_value(self, values: Sequence[str]) -> bool:
        self._value = True
        self._claimed = 0
        return True


class CounterOption(Option):
    """Counts how many times its flag appears (``-vvv`` gives 3)."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._value = 0

    @property
    def value(self) -> int:
        return self._value

    @property
    def was_set(self) -> bool:
        return self._value > 0

    def reset(self) -> None:
        self._value = 0

    def set_value(self, values: Sequence[str]) -> bool:
        self._value += 1
        self._claimed = 0
        return True


class IntOption(Option):
    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._value: Optional[int] = None

    @property
    def value(self) -> Optional[int]:
        return self._value

    @property
    def was_set(self) -> bool:
        return self._value is not None

    def set_value(self, values: Sequence[str]) -> bool:
        if not values:
            return False
        parsed = parse_int(values[0])
        if parsed is None:
            return False
        self._value = parsed
        self._claimed = 1
        return True


class DoubleOption(Option):
    """Floating-point option; the decimal separator follows the locale.

    Without an explicit ``decimal_parser`` the option adopts the parser of
    the ``CommandLine`` it is registered with, falling back to the process
    locale when used on its own.
    """

    def __init__(
        self,
        short_flag: Optional[str] = None,
        long_flag: Optional[str] = None,
        *,
        required: bool = False,
        help_message: str = "",
        decimal_parser: Optional[DecimalParser] = None,
    ) -> None:
        super().__init__(short_flag, long_flag, required=required, help_message=help_message)
        self.decimal_parser: Optional[DecimalParser] = decimal_parser
        self._value: Optional[float] = None

    @property
    def value(self) -> Optional[float]:
        return self._value

    @property
    def was_set(self) -> bool:
        return self._value is not None

    def set_value(self, values: Sequence[str]) -> bool:
        if not values:
            return False
        parser = self.decimal_parser or parse_decimal
        parsed = parser(values[0])
        if parsed is None:
            return False
        self._value = parsed
        self._claimed = 1
        return True


class StringOption(Option):
    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._value: Optional[str] = None

    @property
    def value(self) -> Optional[str]:
        return self._value

    @property
    def was_set(self) -> bool:
        return self._value is not None

    def set_value(self, values: Sequence[str]) -> bool:
        if not values:
            return False
        self._value = values[0]
        self._claimed = 1
        return True


class MultiStringOption(Option):
    """Collects every token in the value window, in order."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._value: Optional[List[str]] = None

    @property
    def value(self) -> Optional[List[str]]:
        return self._value

    @property
    def was_set(self) -> bool:
        return self._value is not None

    def set_value(self, values: Sequence[str]) -> bool:
        if not values:
            return False
        self._value = list(values)
        self._claimed = len(self._value)
        return True


class EnumOption(Option, Generic[E]):
    """Accepts exactly one of the string values of ``enum_type``.

    ``EnumOption("o", "operation", enum_type=Operation)`` stores
    ``Operation("create")`` when given ``--operation create``; any token that
    is not a member value is rejected.
    """

    def __init__(
        self,
        short_flag: Optional[str] = None,
        long_flag: Optional[str] = None,
        *,
        enum_type: Type[E],
        required: bool = False,
        help_message: str = "",
    ) -> None:
        super().__init__(short_flag, long_flag, required=required, help_message=help_message)
        self.enum_type = enum_type
        self._value: Optional[E] = None

    @property
    def value(self) -> Optional[E]:
        return self._value

    @property
    def was_set(self) -> bool:
        return self._value is not None

    @property
    def choices(self) -> List[str]:
        return [member.value for member in self.enum_type if isinstance(member.value, str)]

    def set_value(self, values: Sequence[str]) -> bool:
        if not values:
            return False
        for member in self.enum_type:
            if isinstance(member.value, str) and member.value == values[0]:
                self._value = member
                self._claimed = 1
                return True
        return False
