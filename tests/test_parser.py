from __future__ import annotations

from enum import Enum
from typing import List, Sequence

import pytest

from flagline import (
    BoolOption,
    CommandLine,
    CounterOption,
    DoubleOption,
    EnumOption,
    FlagInUseError,
    IntOption,
    InvalidArgumentError,
    InvalidValueError,
    MissingRequiredOptionsError,
    MultiStringOption,
    StringOption,
)
from interfaces.locale_decimal import LocaleDecimalParser

DOT = LocaleDecimalParser(".")


class Mode(Enum):
    FAST = "fast"
    SAFE = "safe"


def _cli(*args: str) -> CommandLine:
    return CommandLine(["prog", *args], decimal_parser=DOT)


def _is_subsequence(sub: Sequence[str], full: Sequence[str]) -> bool:
    it = iter(full)
    return all(any(tok == candidate for candidate in it) for tok in sub)


# -----------------
# Registration
# -----------------
def test_add_option_rejects_short_flag_collision() -> None:
    cli = _cli()
    cli.add_option(StringOption("n", "name"))
    with pytest.raises(FlagInUseError) as excinfo:
        cli.add_option(IntOption("n", "number"))
    assert excinfo.value.flag == "n"
    assert len(cli.options) == 1


def test_add_option_rejects_long_flag_collision() -> None:
    cli = _cli()
    cli.add_option(StringOption("n", "name"))
    with pytest.raises(FlagInUseError):
        cli.add_option(BoolOption("x", "name"))


def test_set_options_replaces_registry() -> None:
    cli = _cli("-b")
    first = BoolOption("a")
    second = BoolOption("b")
    cli.add_option(first)
    cli.set_options(second, BoolOption("c"))
    assert cli.options[0] is second
    assert len(cli.options) == 2
    cli.parse()
    assert second.value is True
    assert first.value is False


def test_set_options_still_rejects_duplicates() -> None:
    cli = _cli()
    with pytest.raises(FlagInUseError):
        cli.set_options(BoolOption("a"), CounterOption("a"))


def test_max_flag_description_width_tracks_registrations() -> None:
    cli = _cli()
    assert cli.max_flag_description_width == 0
    cli.add_option(BoolOption("a"))
    assert cli.max_flag_description_width == 2
    cli.add_option(BoolOption("b", "bravo"))
    assert cli.max_flag_description_width == len("-b, --bravo")


# -----------------
# Long flags and value windows
# -----------------
@pytest.mark.parametrize(
    "factory, raw, expected",
    [
        (lambda: IntOption("x", "value"), "42", 42),
        (lambda: IntOption("x", "value"), "-3", -3),
        (lambda: DoubleOption("x", "value", decimal_parser=DOT), "2.5", 2.5),
        (lambda: StringOption("x", "value"), "hello", "hello"),
        (lambda: EnumOption("x", "value", enum_type=Mode), "safe", Mode.SAFE),
    ],
)
def test_attached_and_separate_values_agree(factory, raw, expected) -> None:
    separate_opt = factory()
    separate = _cli("--value", raw)
    separate.add_option(separate_opt)
    separate.parse()

    attached_opt = factory()
    attached = _cli(f"--value={raw}")
    attached.add_option(attached_opt)
    attached.parse()

    assert separate_opt.value == expected
    assert attached_opt.value == separate_opt.value
    assert separate.unparsed_arguments == attached.unparsed_arguments == []


def test_negative_number_is_a_value_not_a_flag() -> None:
    count = IntOption("c", "count")
    cli = _cli("--count", "-5")
    cli.add_option(count)
    cli.parse(strict=True)
    assert count.value == -5
    assert cli.unparsed_arguments == []


def test_negative_decimal_is_a_value() -> None:
    ratio = DoubleOption("r", "ratio", decimal_parser=DOT)
    cli = _cli("--ratio", "-2.5")
    cli.add_option(ratio)
    cli.parse(strict=True)
    assert ratio.value == -2.5


def test_string_option_accepts_negative_number() -> None:
    name = StringOption("n", "name")
    cli = _cli("-n", "-3")
    cli.add_option(name)
    cli.parse(strict=True)
    assert name.value == "-3"


def test_scalar_leaves_extra_window_tokens_as_strays() -> None:
    count = IntOption("c", "count")
    cli = _cli("--count", "3", "4", "rest")
    cli.add_option(count)
    cli.parse()
    assert count.value == 3
    assert cli.unparsed_arguments == ["4", "rest"]


def test_attached_value_keeps_further_attachers() -> None:
    name = StringOption("n", "name")
    cli = _cli("--name=a=b")
    cli.add_option(name)
    cli.parse()
    assert name.value == "a=b"


def test_empty_attached_value_falls_back_to_next_token() -> None:
    name = StringOption("n", "name")
    cli = _cli("--name=", "x")
    cli.add_option(name)
    cli.parse()
    assert name.value == "x"
    assert cli.unparsed_arguments == []


def test_multi_string_window_stops_at_next_flag() -> None:
    files = MultiStringOption("f", "files")
    extra = BoolOption("x")
    cli = _cli("-f", "a", "b", "-x", "c")
    cli.add_options(files, extra)
    cli.parse()
    assert files.value == ["a", "b"]
    assert extra.value is True
    assert cli.unparsed_arguments == ["c"]


def test_multi_string_with_attached_value_claims_following_tokens() -> None:
    files = MultiStringOption("f", "files")
    cli = _cli("--files=a", "b", "c")
    cli.add_option(files)
    cli.parse()
    assert files.value == ["a", "b", "c"]
    assert cli.unparsed_arguments == []


def test_value_window_stops_at_end_of_options_marker() -> None:
    files = MultiStringOption("f", "files")
    cli = _cli("--files", "a", "--", "b")
    cli.add_option(files)
    cli.parse()
    assert files.value == ["a"]
    assert cli.unparsed_arguments == ["--", "b"]


def test_switch_with_attached_value_still_consumes_flag_token() -> None:
    flag = BoolOption("q", "quiet")
    cli = _cli("--quiet=yes", "tail")
    cli.add_option(flag)
    cli.parse()
    assert flag.value is True
    assert cli.unparsed_arguments == ["tail"]


def test_invalid_value_reports_option_and_window() -> None:
    count = IntOption("c", "count")
    cli = _cli("--count", "abc", "def")
    cli.add_option(count)
    with pytest.raises(InvalidValueError) as excinfo:
        cli.parse()
    assert excinfo.value.option is count
    assert excinfo.value.values == ["abc", "def"]
    assert str(excinfo.value) == "Invalid value(s) for option -c, --count: abc, def"
    assert count.value is None


def test_missing_value_is_invalid() -> None:
    mode = EnumOption("m", "mode", enum_type=Mode)
    cli = _cli("--mode", "--other")
    cli.add_option(mode)
    with pytest.raises(InvalidValueError) as excinfo:
        cli.parse()
    assert excinfo.value.values == []


def test_enum_rejects_unknown_member() -> None:
    mode = EnumOption("m", "mode", enum_type=Mode)
    cli = _cli("--mode", "turbo")
    cli.add_option(mode)
    with pytest.raises(InvalidValueError):
        cli.parse()
    assert not mode.was_set


# -----------------
# Short flag clusters
# -----------------
def test_bundled_switches_are_all_set() -> None:
    a, b = BoolOption("a"), BoolOption("b")
    cli = _cli("-ab")
    cli.add_options(a, b)
    cli.parse(strict=True)
    assert a.value is True
    assert b.value is True
    assert cli.unparsed_arguments == []


def test_counter_cluster_counts_each_character() -> None:
    verbose = CounterOption("v", "verbose")
    cli = _cli("-vvv", "--verbose")
    cli.add_option(verbose)
    cli.parse()
    assert verbose.value == 4


def test_counter_reset_between_parses() -> None:
    verbose = CounterOption("v")
    cli = _cli("-v", "-v", "-v")
    cli.add_option(verbose)
    cli.parse()
    assert verbose.value == 3
    verbose.reset()
    cli.parse()
    assert verbose.value == 3


def test_last_cluster_character_takes_the_value() -> None:
    a = BoolOption("a")
    n = IntOption("n")
    cli = _cli("-an", "7", "tail")
    cli.add_options(a, n)
    cli.parse()
    assert a.value is True
    assert n.value == 7
    assert cli.unparsed_arguments == ["tail"]


def test_last_cluster_character_with_attached_value() -> None:
    a = BoolOption("a")
    n = IntOption("n")
    cli = _cli("-an=7", "tail")
    cli.add_options(a, n)
    cli.parse()
    assert n.value == 7
    assert cli.unparsed_arguments == ["tail"]


def test_valued_option_inside_cluster_gets_empty_window() -> None:
    a = BoolOption("a")
    n = IntOption("n")
    cli = _cli("-na", "7")
    cli.add_options(a, n)
    with pytest.raises(InvalidValueError) as excinfo:
        cli.parse()
    assert excinfo.value.option is n
    assert excinfo.value.values == []


def test_long_prefix_is_never_split_into_a_cluster() -> None:
    a, b = BoolOption("a"), BoolOption("b")
    cli = _cli("--ab")
    cli.add_options(a, b)
    cli.parse()
    assert not a.was_set and not b.was_set
    assert cli.unparsed_arguments == ["--ab"]


def test_cluster_with_partial_match_is_accepted_in_strict_mode() -> None:
    a = BoolOption("a")
    cli = _cli("-az")
    cli.add_option(a)
    cli.parse(strict=True)
    assert a.value is True
    assert cli.unparsed_arguments == []


# -----------------
# Strict mode, required options, strays
# -----------------
def test_strict_mode_rejects_unknown_flag_without_side_effects() -> None:
    later = StringOption("n", "name")
    cli = _cli("--bogus", "--name", "x")
    cli.add_option(later)
    with pytest.raises(InvalidArgumentError) as excinfo:
        cli.parse(strict=True)
    assert excinfo.value.token == "--bogus"
    assert str(excinfo.value) == "Invalid argument: --bogus"
    assert not later.was_set


def test_strict_mode_rejects_unknown_short_flag() -> None:
    cli = _cli("-z")
    cli.add_option(BoolOption("a"))
    with pytest.raises(InvalidArgumentError) as excinfo:
        cli.parse(strict=True)
    assert excinfo.value.token == "-z"


def test_lenient_mode_keeps_unknown_flags_as_strays() -> None:
    cli = _cli("--bogus", "file.txt", "-z")
    cli.add_option(BoolOption("a"))
    cli.parse()
    assert cli.unparsed_arguments == ["--bogus", "file.txt", "-z"]


def test_lone_dash_is_a_stray_even_in_strict_mode() -> None:
    cli = _cli("-")
    cli.add_option(BoolOption("a"))
    cli.parse(strict=True)
    assert cli.unparsed_arguments == ["-"]


def test_missing_required_option_is_reported() -> None:
    name = StringOption("n", "name", required=True)
    other = BoolOption("a")
    cli = _cli("-a")
    cli.add_options(name, other)
    with pytest.raises(MissingRequiredOptionsError) as excinfo:
        cli.parse()
    assert excinfo.value.options == [name]
    assert str(excinfo.value) == "Missing required options: -n, --name"


def test_missing_required_lists_every_unset_option() -> None:
    first = StringOption("a", required=True)
    second = IntOption("b", required=True)
    cli = _cli()
    cli.add_options(first, second)
    with pytest.raises(MissingRequiredOptionsError) as excinfo:
        cli.parse()
    assert excinfo.value.options == [first, second]


def test_required_option_supplied_late_in_vector_is_accepted() -> None:
    name = StringOption("n", "name", required=True)
    flag = BoolOption("a")
    cli = _cli("-a", "stray", "--name", "late")
    cli.add_options(flag, name)
    cli.parse(strict=True)
    assert name.value == "late"
    assert cli.unparsed_arguments == ["stray"]


def test_tokens_after_end_marker_are_strays() -> None:
    a, b = BoolOption("a"), BoolOption("b")
    name = StringOption("n", "name")
    cli = _cli("-a", "--", "-b", "--name", "x")
    cli.add_options(a, b, name)
    cli.parse(strict=True)
    assert a.value is True
    assert b.value is False
    assert not name.was_set
    assert cli.unparsed_arguments == ["--", "-b", "--name", "x"]


def test_invocation_path_is_never_matched() -> None:
    a = BoolOption("a")
    cli = CommandLine(["-a", "x"])
    cli.add_option(a)
    cli.parse()
    assert a.value is False
    assert cli.unparsed_arguments == ["x"]


def test_empty_argument_vector_parses() -> None:
    cli = CommandLine([])
    cli.add_option(BoolOption("a"))
    cli.parse(strict=True)
    assert cli.unparsed_arguments == []


def test_unparsed_arguments_partition_the_vector() -> None:
    args: List[str] = ["prog", "in.txt", "-vv", "--level", "3", "-f", "a", "b", "--", "-x"]
    verbose = CounterOption("v")
    level = IntOption("l", "level")
    files = MultiStringOption("f")
    cli = CommandLine(args, decimal_parser=DOT)
    cli.add_options(verbose, level, files)
    cli.parse()

    claimed = ["-vv", "--level", "3", "-f", "a", "b"]
    unparsed = cli.unparsed_arguments
    assert unparsed == ["in.txt", "--", "-x"]
    assert len(unparsed) + len(claimed) + 1 == len(args)
    assert _is_subsequence(unparsed, args[1:])


def test_reparse_starts_from_fresh_strays() -> None:
    cli = _cli("a", "b")
    cli.parse()
    cli.parse()
    assert cli.unparsed_arguments == ["a", "b"]


def test_unparsed_arguments_is_a_copy() -> None:
    cli = _cli("a")
    cli.parse()
    cli.unparsed_arguments.append("mutated")
    assert cli.unparsed_arguments == ["a"]


def test_defaults_to_process_arguments(monkeypatch) -> None:
    monkeypatch.setattr("sys.argv", ["tool", "-a"])
    a = BoolOption("a")
    cli = CommandLine()
    cli.add_option(a)
    cli.parse()
    assert cli.arguments == ("tool", "-a")
    assert a.value is True


def test_double_option_adopts_engine_decimal_parser() -> None:
    ratio = DoubleOption("r", "ratio")
    cli = CommandLine(["prog", "--ratio", "-2,5"], decimal_parser=LocaleDecimalParser(","))
    cli.add_option(ratio)
    cli.parse(strict=True)
    assert ratio.value == -2.5
    assert cli.unparsed_arguments == []


def test_double_option_keeps_its_own_decimal_parser() -> None:
    own = LocaleDecimalParser(".")
    ratio = DoubleOption("r", "ratio", decimal_parser=own)
    cli = CommandLine(["prog", "--ratio", "2.5"], decimal_parser=LocaleDecimalParser(","))
    cli.add_option(ratio)
    cli.parse()
    assert ratio.decimal_parser is own
    assert ratio.value == 2.5
