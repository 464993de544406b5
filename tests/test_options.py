"""Tests for the option registry (core/options.py).

Coverage:
* Every value kind converts and lands on the right DriverState field.
* Defaults survive when flags are absent.
* ``--recommender-options`` accumulates instead of overwriting.
* Malformed input raises OptionError naming the offending token.
* Bare tokens are returned, not consumed.
"""

from __future__ import annotations

import math

import pytest

from rec_driver.core.models import DriverState
from rec_driver.core.options import (
    META_OPTIONS,
    OPTIONS,
    OptionSpec,
    add_option,
    build_parser,
    parse_options,
    uint,
)
from rec_driver.exceptions import OptionError


def _parse(*argv: str):
    return parse_options(build_parser(prog="test"), argv)


# ---------------------------------------------------------------------------
# Registry table
# ---------------------------------------------------------------------------

class TestRegistry:
    def test_flags_are_unique(self) -> None:
        flags = [spec.flag for spec in OPTIONS + META_OPTIONS]
        assert len(flags) == len(set(flags))

    def test_every_dest_is_a_state_field_or_meta(self) -> None:
        state = DriverState()
        for spec in OPTIONS:
            assert hasattr(state, spec.dest), spec.flag
        assert {spec.dest for spec in META_OPTIONS} == {"show_help", "show_version"}

    def test_only_recommender_options_appends(self) -> None:
        appending = [spec.flag for spec in OPTIONS if spec.kind == "append"]
        assert appending == ["recommender-options"]


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

class TestDefaults:
    def test_empty_command_line(self) -> None:
        parsed = _parse()
        state = parsed.state
        assert state.training_file is None
        assert state.data_dir == ""
        assert state.recommender_options == ""
        assert state.compute_fit is False
        assert state.no_id_mapping is False
        assert state.random_seed is None
        assert state.cross_validation == 0
        assert state.test_ratio == 0
        assert state.max_iter == 100
        assert state.epsilon == 0
        assert math.isinf(state.cutoff)
        assert state.find_iter == 0
        assert parsed.extra_args == ()
        assert parsed.show_help is False
        assert parsed.show_version is False

    def test_empty_string_is_distinct_from_unset(self) -> None:
        state = _parse("--prediction-file=").state
        assert state.prediction_file == ""


# ---------------------------------------------------------------------------
# Value kinds
# ---------------------------------------------------------------------------

class TestValueKinds:
    def test_string_with_equals(self) -> None:
        assert _parse("--training-file=train.txt").state.training_file == "train.txt"

    def test_string_with_separate_value(self) -> None:
        assert _parse("--test-file", "test.txt").state.test_file == "test.txt"

    def test_string_overwrites(self) -> None:
        state = _parse("--recommender=A", "--recommender=B").state
        assert state.method == "B"

    @pytest.mark.parametrize(
        ("argv", "field", "expected"),
        [
            (["--max-iter=30"], "max_iter", 30),
            (["--find-iter", "5"], "find_iter", 5),
            (["--random-seed=-7"], "random_seed", -7),
            (["--cross-validation=5"], "cross_validation", 5),
            (["--epsilon=0.01"], "epsilon", 0.01),
            (["--cutoff=0.5"], "cutoff", 0.5),
            (["--test-ratio", "0.2"], "test_ratio", 0.2),
        ],
    )
    def test_numeric(self, argv: list[str], field: str, expected: float) -> None:
        assert getattr(_parse(*argv).state, field) == expected

    def test_presence_flags(self) -> None:
        state = _parse("--compute-fit", "--no-id-mapping").state
        assert state.compute_fit is True
        assert state.no_id_mapping is True

    def test_meta_flags(self) -> None:
        parsed = _parse("--help", "--version")
        assert parsed.show_help is True
        assert parsed.show_version is True

    def test_recommender_options_accumulate(self) -> None:
        state = _parse("--recommender-options=A", "--recommender-options=B").state
        assert state.recommender_options == " A B"

    def test_recommender_options_single(self) -> None:
        state = _parse("--recommender-options", "num_factors=10 regularization=0.1").state
        assert state.recommender_options == " num_factors=10 regularization=0.1"


class TestUint:
    def test_accepts_zero(self) -> None:
        assert uint("0") == 0

    def test_rejects_negative(self) -> None:
        with pytest.raises(ValueError):
            uint("-1")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

class TestErrors:
    def test_unknown_flag(self) -> None:
        with pytest.raises(OptionError, match="--no-such-flag"):
            _parse("--no-such-flag=1")

    def test_abbreviations_are_not_accepted(self) -> None:
        with pytest.raises(OptionError, match="--train"):
            _parse("--train=x")

    def test_malformed_integer(self) -> None:
        with pytest.raises(OptionError, match="--max-iter") as exc_info:
            _parse("--max-iter=abc")
        assert "abc" in str(exc_info.value)

    def test_malformed_float(self) -> None:
        with pytest.raises(OptionError, match="--test-ratio"):
            _parse("--test-ratio=half")

    def test_negative_unsigned(self) -> None:
        with pytest.raises(OptionError, match="--cross-validation"):
            _parse("--cross-validation=-2")

    def test_missing_value(self) -> None:
        with pytest.raises(OptionError, match="--training-file"):
            _parse("--training-file")

    def test_value_on_presence_flag(self) -> None:
        with pytest.raises(OptionError, match="--compute-fit"):
            _parse("--compute-fit=yes")


# ---------------------------------------------------------------------------
# Positional arguments and extension
# ---------------------------------------------------------------------------

class TestExtraArgs:
    def test_positionals_are_collected_in_order(self) -> None:
        parsed = _parse("foo", "--max-iter=3", "bar")
        assert parsed.extra_args == ("foo", "bar")
        assert parsed.state.max_iter == 3

    def test_negative_number_is_positional(self) -> None:
        assert _parse("-3").extra_args == ("-3",)


class TestExtension:
    def test_program_specific_flag(self) -> None:
        parser = build_parser(prog="test")
        add_option(parser, OptionSpec("num-candidates", "int", "num_candidates", "N"))
        parsed = parse_options(parser, ["--num-candidates=7", "--max-iter=2"])
        assert parsed.namespace.num_candidates == 7
        assert parsed.state.max_iter == 2
        assert not hasattr(parsed.state, "num_candidates")

    def test_writes_onto_given_state(self) -> None:
        state = DriverState()
        mapping = state.user_mapping
        parsed = parse_options(build_parser(), ["--compute-fit"], state)
        assert parsed.state is state
        assert state.compute_fit is True
        assert state.user_mapping is mapping
