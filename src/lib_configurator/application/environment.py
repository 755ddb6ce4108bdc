"""Environment stage: overlay environment values and register flags.

Purpose
-------
Apply ``<prefix><env suffix>`` environment variables to a record and bind one
command-line flag per field to the same storage, seeded with the value the
field holds after the environment overlay.

Contents
    - ``bind_environment``: public entry point, recursing into nested records.
    - ``_bind_field``: environment overlay plus flag registration for one field.
    - ``_parse_env``: kind dispatch for a single environment value.
    - ``_register_flag``: idempotent registration against the flag registry.

System Role
-----------
Third stage of :func:`lib_configurator.core.initialize_config`. Parse failures
are absorbed: the field keeps whatever an earlier stage wrote.
"""

from __future__ import annotations

from typing import Any

from ..domain.fields import FieldKind, FieldSlot, RecordField, fields_of
from ..domain.values import parse_bool, parse_int
from ..observability import log_debug
from .context import ConfiguratorContext

_SCALAR_KINDS = frozenset({FieldKind.BOOL, FieldKind.INT, FieldKind.STRING})


def bind_environment(record: Any, context: ConfiguratorContext) -> None:
    """Overlay environment values onto *record* and register matching flags.

    Examples
    --------
    >>> from dataclasses import dataclass, field
    >>> from lib_configurator.adapters.flags.click_registry import ClickFlagRegistry
    >>> from lib_configurator.domain.fields import Setting
    >>> @dataclass
    ... class Demo:
    ...     port: int = field(default=80, metadata={"setting": Setting(env="PORT")})
    >>> ctx = ConfiguratorContext(ClickFlagRegistry(), env_prefix="DEMO_", environ={"DEMO_PORT": "8080"})
    >>> demo = Demo()
    >>> bind_environment(demo, ctx)
    >>> demo.port, ctx.flags.lookup("port").default
    (8080, 8080)
    """

    for item in fields_of(record):
        if item.kind is FieldKind.RECORD:
            bind_environment(item.child(record), context)
        elif item.kind in _SCALAR_KINDS and item.setting.env:
            _bind_field(record, item, context)


def _bind_field(record: Any, item: RecordField, context: ConfiguratorContext) -> None:
    """Apply the environment value for *item* (if any) and register its flag."""

    env_key = context.env_key(item.setting.env)
    raw = context.getenv(env_key)
    slot = item.slot(record)
    if raw:
        try:
            slot.set(_parse_env(item.kind, raw))
        except ValueError as exc:
            log_debug("env_value_invalid", stage="env", path=None, key=env_key, error=str(exc))
        else:
            log_debug("env_value_applied", stage="env", path=None, key=env_key, field=item.name)
    if item.public:
        _register_flag(context, item, slot, context.flag_name(item.setting.env))


def _parse_env(kind: FieldKind, raw: str) -> Any:
    if kind is FieldKind.BOOL:
        return parse_bool(raw)
    if kind is FieldKind.INT:
        return parse_int(raw)
    return raw


def _register_flag(context: ConfiguratorContext, item: RecordField, slot: FieldSlot, name: str) -> None:
    """Register *name* bound to *slot* unless a flag with that name exists."""

    flags = context.flags
    if flags.lookup(name) is not None:
        log_debug("flag_exists", stage="flags", path=None, flag=name, field=item.name)
        return
    current = slot.get()
    if item.kind is FieldKind.BOOL:
        flags.bool_var(slot, name, current, "")
    elif item.kind is FieldKind.INT:
        flags.int_var(slot, name, current, "")
    else:
        flags.string_var(slot, name, current, "")
    log_debug("flag_registered", stage="flags", path=None, flag=name, field=item.name)
