"""JSON record decoder.

Purpose
-------
Overlay a JSON document onto a configuration record, matching object keys
against each field's file key. Nested records consume nested objects.

Contents
--------
* :class:`JSONRecordDecoder` – implementation of
  :class:`lib_configurator.application.ports.RecordDecoder`.
* ``_collect`` / ``_lookup`` / ``_check_scalar`` – helpers that walk the record
  and validate each JSON value against the field kind.

System Role
-----------
Second stage of the population pass. The decoder first collects every
assignment and only writes them once the whole document has been validated, so
a failing document leaves the record untouched.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from ...domain.errors import InvalidFormat
from ...domain.fields import FieldKind, FieldSlot, RecordField, fields_of
from ...observability import log_debug, log_error

_Pending = list[tuple[FieldSlot, Any]]


class JSONRecordDecoder:
    """Decode JSON bytes into an existing dataclass record."""

    def decode(self, payload: bytes, record: Any) -> None:
        """Overlay the JSON object in *payload* onto *record*.

        Unknown keys are ignored and ``null`` values or missing keys leave the
        field untouched. Unsupported field kinds are skipped.

        Raises
        ------
        InvalidFormat
            When *payload* is not valid UTF-8 JSON, is not an object, or holds a
            value whose type does not match the targeted field.

        Examples
        --------
        >>> from dataclasses import dataclass, field
        >>> from lib_configurator.domain.fields import Setting
        >>> @dataclass
        ... class Demo:
        ...     name: str = field(default="", metadata={"setting": Setting(json="service-name")})
        ...     port: int = 0
        >>> demo = Demo()
        >>> JSONRecordDecoder().decode(b'{"service-name": "api", "PORT": 8080, "extra": 1}', demo)
        >>> demo
        Demo(name='api', port=8080)
        """

        try:
            document = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            log_error("config_file_invalid", stage="file", path=None, error=str(exc))
            raise InvalidFormat(f"Invalid JSON: {exc}") from exc
        if not isinstance(document, Mapping):
            log_error("config_file_invalid", stage="file", path=None, error="not a JSON object")
            raise InvalidFormat(f"Configuration document must be a JSON object, got {type(document).__name__}")

        pending: _Pending = []
        _collect(record, document, pending, ())
        for slot, value in pending:
            slot.set(value)
        log_debug("config_file_decoded", stage="file", path=None, fields=len(pending))


def _collect(record: Any, document: Mapping[str, Any], pending: _Pending, trail: tuple[str, ...]) -> None:
    """Append the assignments *document* implies for *record* to *pending*."""

    for item in fields_of(record):
        if item.kind is FieldKind.UNSUPPORTED:
            continue
        value = _lookup(document, item.file_key)
        if value is None:
            continue
        dotted = ".".join((*trail, item.file_key))
        if item.kind is FieldKind.RECORD:
            if not isinstance(value, Mapping):
                raise InvalidFormat(f"Expected a JSON object for {dotted}, got {type(value).__name__}")
            nested = getattr(record, item.name)
            if nested is None:
                nested = item.annotation()
                pending.append((item.slot(record), nested))
            _collect(nested, value, pending, (*trail, item.file_key))
            continue
        _check_scalar(item, value, dotted)
        pending.append((item.slot(record), value))


def _lookup(document: Mapping[str, Any], key: str) -> Any:
    """Return ``document[key]``, falling back to a case-insensitive key match."""

    if key in document:
        return document[key]
    folded = key.casefold()
    for candidate, value in document.items():
        if candidate.casefold() == folded:
            return value
    return None


def _check_scalar(item: RecordField, value: Any, dotted: str) -> None:
    """Raise :class:`InvalidFormat` when *value* does not fit the kind of *item*."""

    if item.kind is FieldKind.BOOL:
        valid = isinstance(value, bool)
    elif item.kind is FieldKind.INT:
        valid = isinstance(value, int) and not isinstance(value, bool)
    else:
        valid = isinstance(value, str)
    if not valid:
        raise InvalidFormat(f"Cannot decode {type(value).__name__} into {item.kind.value} field {dotted}")
