"""Flag name derivation."""

from __future__ import annotations


def form_flag_name(candidate: str, *, prefix: str) -> str:
    """Convert an environment key into a command-line flag name.

    The key is upper-cased, *prefix* is stripped from the front when present
    (compared case-insensitively), underscores become hyphens and the result is
    lower-cased.

    Examples
    --------
    >>> form_flag_name("CONFIGURATOR_FOO_BAR_BAZ", prefix="CONFIGURATOR_")
    'foo-bar-baz'
    >>> form_flag_name("test_foo", prefix="CONFIGURATOR_")
    'test-foo'
    """

    name = candidate.upper()
    stripped = prefix.upper()
    if stripped and name.startswith(stripped):
        name = name[len(stripped) :]
    return name.replace("_", "-").lower()
