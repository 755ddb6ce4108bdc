"""Default stage: write each field's declared default literal.

Purpose
-------
Establish the lowest-precedence values of a record from the ``default``
literal on each :class:`~lib_configurator.domain.fields.Setting`.

Contents
    - ``apply_defaults``: public entry point, recursing into nested records.
    - ``_convert_default``: kind dispatch for a single literal.

System Role
-----------
First stage run by :func:`lib_configurator.core.initialize_config`. Default
literals are authored alongside the record, so malformed literals degrade to the
kind's zero value instead of failing the pass.
"""

from __future__ import annotations

from typing import Any

from ..domain.fields import FieldKind, RecordField, fields_of
from ..domain.values import bool_or_false, int_or_zero
from ..observability import log_debug


def apply_defaults(record: Any) -> int:
    """Write default literals into *record* and its nested records.

    Returns
    -------
    int
        Number of fields written, across all nesting levels.

    Examples
    --------
    >>> from dataclasses import dataclass, field
    >>> from lib_configurator.domain.fields import Setting
    >>> @dataclass
    ... class Demo:
    ...     retries: int = field(default=0, metadata={"setting": Setting(default="3")})
    ...     verbose: bool = field(default=True, metadata={"setting": Setting(default="maybe")})
    >>> demo = Demo()
    >>> apply_defaults(demo)
    2
    >>> demo
    Demo(retries=3, verbose=False)
    """

    written = 0
    for item in fields_of(record):
        if item.kind is FieldKind.RECORD:
            written += apply_defaults(item.child(record))
            continue
        literal = item.setting.default
        if not literal or item.kind is FieldKind.UNSUPPORTED:
            continue
        item.slot(record).set(_convert_default(item, literal))
        log_debug("default_applied", stage="defaults", path=None, field=item.name)
        written += 1
    return written


def _convert_default(item: RecordField, literal: str) -> Any:
    """Return *literal* converted to the kind of *item*."""

    if item.kind is FieldKind.BOOL:
        return bool_or_false(literal)
    if item.kind is FieldKind.INT:
        return int_or_zero(literal)
    return literal
