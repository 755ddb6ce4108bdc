"""Scalar parsing rules for textual configuration values.

Purpose
-------
Keep the token grammar for booleans and integers in one place so the default,
environment, and flag stages agree on what a valid value looks like.

Contents
--------
* :func:`parse_bool` / :func:`parse_int` – strict parsers raising ``ValueError``.
* :func:`bool_or_false` / :func:`int_or_zero` – best-effort variants used for
  developer-authored default literals.
"""

from __future__ import annotations

import re
from typing import Final

_TRUE_TOKENS: Final[frozenset[str]] = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_TOKENS: Final[frozenset[str]] = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_DECIMAL: Final[re.Pattern[str]] = re.compile(r"[+-]?[0-9]+")


def parse_bool(token: str) -> bool:
    """Return the boolean spelled by *token* or raise ``ValueError``.

    Accepted spellings are ``1``, ``t``, ``T``, ``TRUE``, ``true``, ``True`` and
    their false counterparts. Mixed case such as ``tRuE`` is rejected.

    Examples
    --------
    >>> parse_bool("T"), parse_bool("0")
    (True, False)
    >>> parse_bool("yes")
    Traceback (most recent call last):
    ...
    ValueError: invalid boolean token: 'yes'
    """

    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    raise ValueError(f"invalid boolean token: {token!r}")


def parse_int(token: str) -> int:
    """Return the base-10 integer spelled by *token* or raise ``ValueError``.

    Unlike :class:`int`, surrounding whitespace and digit separators are not
    accepted.

    Examples
    --------
    >>> parse_int("-42"), parse_int("+7")
    (-42, 7)
    >>> parse_int("1_000")
    Traceback (most recent call last):
    ...
    ValueError: invalid integer token: '1_000'
    """

    if _DECIMAL.fullmatch(token) is None:
        raise ValueError(f"invalid integer token: {token!r}")
    return int(token, 10)


def bool_or_false(token: str) -> bool:
    """Parse *token* as a boolean, treating unparseable input as ``False``."""

    try:
        return parse_bool(token)
    except ValueError:
        return False


def int_or_zero(token: str) -> int:
    """Parse *token* as a base-10 integer, treating unparseable input as ``0``."""

    try:
        return parse_int(token)
    except ValueError:
        return 0
