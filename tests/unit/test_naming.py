"""Flag name derivation from environment keys."""

from __future__ import annotations

import string

import pytest
from hypothesis import given
from hypothesis import strategies as st

from lib_configurator import DEFAULT_ENV_PREFIX, form_flag_name

KEY_ALPHABET = string.ascii_letters + string.digits + "_-"


@pytest.mark.parametrize(
    ("candidate", "expected"),
    [
        ("test", "test"),
        ("TEST", "test"),
        ("test_foo", "test-foo"),
        (DEFAULT_ENV_PREFIX + "foo_bar", "foo-bar"),
        (DEFAULT_ENV_PREFIX + "FOO_BAR", "foo-bar"),
        (DEFAULT_ENV_PREFIX.lower() + "foo_bar", "foo-bar"),
        ("", ""),
    ],
)
def test_form_flag_name(candidate: str, expected: str) -> None:
    assert form_flag_name(candidate, prefix=DEFAULT_ENV_PREFIX) == expected


def test_prefix_is_compared_case_insensitively() -> None:
    assert form_flag_name("MYAPP_LOG_LEVEL", prefix="myapp_") == "log-level"


def test_prefix_only_stripped_from_the_front() -> None:
    assert form_flag_name("ENV_CONFIGURATOR_X", prefix=DEFAULT_ENV_PREFIX) == "env-configurator-x"


@given(st.text(alphabet=KEY_ALPHABET, max_size=20))
def test_flag_names_are_lowercase_and_hyphenated(suffix: str) -> None:
    name = form_flag_name(DEFAULT_ENV_PREFIX + suffix, prefix=DEFAULT_ENV_PREFIX)
    assert "_" not in name
    assert name == name.lower()
    assert name == suffix.replace("_", "-").lower()
