"""Token grammar shared by the default, environment and flag stages."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_configurator.domain.values import bool_or_false, int_or_zero, parse_bool, parse_int


@pytest.mark.parametrize("token", ["1", "t", "T", "TRUE", "true", "True"])
def test_parse_bool_true_tokens(token: str) -> None:
    assert parse_bool(token) is True


@pytest.mark.parametrize("token", ["0", "f", "F", "FALSE", "false", "False"])
def test_parse_bool_false_tokens(token: str) -> None:
    assert parse_bool(token) is False


@pytest.mark.parametrize("token", ["", "yes", "tRuE", " true", "2"])
def test_parse_bool_rejects_other_tokens(token: str) -> None:
    with pytest.raises(ValueError):
        parse_bool(token)


@pytest.mark.parametrize("token", ["", "12a", "1.5", " 4", "1_000", "0x10", "+-1"])
def test_parse_int_rejects_non_decimal(token: str) -> None:
    with pytest.raises(ValueError):
        parse_int(token)


def test_parse_int_accepts_signs() -> None:
    assert parse_int("+12") == 12
    assert parse_int("-12") == -12
    assert parse_int("007") == 7


@given(st.integers())
def test_parse_int_reads_decimal_rendering(value: int) -> None:
    assert parse_int(str(value)) == value


def test_best_effort_variants_fall_back_to_zero_values() -> None:
    assert bool_or_false("maybe") is False
    assert bool_or_false("T") is True
    assert int_or_zero("many") == 0
    assert int_or_zero("-3") == -3
