"""Field descriptors for configuration records.

Purpose
-------
Describe the shape of a caller-defined configuration record so the population
stages can walk it without knowing its concrete type. A record is any
``dataclass`` instance; each field carries a :class:`Setting` naming its
default literal, its JSON key, and its environment suffix.

Contents
--------
* :class:`Setting` – per-field metadata (default literal, file key, env suffix).
* :class:`FieldKind` – closed enumeration of the kinds the stages dispatch on.
* :class:`FieldSlot` – get/set handle on one attribute of one record instance.
* :class:`RecordField` – resolved descriptor combining name, kind and setting.
* :func:`fields_of` / :func:`kind_of` – introspection entry points.
* :func:`to_document` – record to file-key mapping, the inverse of decoding.

System Role
-----------
Domain layer; free of I/O apart from debug logging. The default applier, the JSON decoder and the
environment binder all iterate :func:`fields_of` and switch on
:class:`FieldKind`.

Examples
--------
>>> from dataclasses import dataclass
>>> from typing import Annotated
>>> @dataclass
... class Demo:
...     name: Annotated[str, Setting(default="demo", json="name", env="NAME")] = ""
...     ratio: float = 0.0
>>> [(item.name, item.kind.value) for item in fields_of(Demo())]
[('name', 'string'), ('ratio', 'unsupported')]
"""

from __future__ import annotations

import inspect
import sys
from dataclasses import MISSING, Field, dataclass, fields as dataclass_fields, is_dataclass
from enum import Enum
from functools import lru_cache
from typing import Annotated, Any, Final, get_args, get_origin, get_type_hints

from ..observability import log_debug

SETTING_METADATA_KEY: Final[str] = "setting"
"""Key under which :class:`Setting` may be stored in ``dataclasses.field`` metadata."""


@dataclass(frozen=True, slots=True)
class Setting:
    """Declarative metadata attached to a single record field.

    Attributes
    ----------
    default:
        String form of the value written by the default stage. Empty means
        "keep the attribute's own initial value".
    json:
        Key matched against JSON object keys. Empty falls back to the attribute
        name.
    env:
        Suffix appended to the environment prefix. Empty disables both the
        environment lookup and the command-line flag.
    """

    default: str = ""
    json: str = ""
    env: str = ""


EMPTY_SETTING: Final[Setting] = Setting()


class FieldKind(Enum):
    """Kinds of fields the population stages know how to handle."""

    BOOL = "bool"
    INT = "int"
    STRING = "string"
    RECORD = "record"
    UNSUPPORTED = "unsupported"


@dataclass(frozen=True, slots=True)
class FieldSlot:
    """Mutable storage location: attribute *attribute* on instance *owner*."""

    owner: Any
    attribute: str

    def get(self) -> Any:
        return getattr(self.owner, self.attribute)

    def set(self, value: Any) -> None:
        setattr(self.owner, self.attribute, value)


@dataclass(frozen=True, slots=True)
class RecordField:
    """Resolved description of one field on a record type."""

    name: str
    kind: FieldKind
    setting: Setting
    annotation: Any

    @property
    def file_key(self) -> str:
        """Return the JSON key for this field, defaulting to the attribute name."""

        return self.setting.json or self.name

    @property
    def public(self) -> bool:
        """Underscore-prefixed attributes never receive command-line flags."""

        return not self.name.startswith("_")

    def slot(self, record: Any) -> FieldSlot:
        return FieldSlot(record, self.name)

    def child(self, record: Any) -> Any:
        """Return the nested record stored on *record*, creating it when unset."""

        nested = getattr(record, self.name)
        if nested is None:
            nested = self.annotation()
            setattr(record, self.name, nested)
        return nested


def fields_of(record: Any) -> tuple[RecordField, ...]:
    """Return descriptors for every dataclass field of *record* in declaration order.

    Raises
    ------
    TypeError
        When *record* is not a dataclass instance.
    """

    if not is_dataclass(record) or isinstance(record, type):
        raise TypeError(f"configuration record must be a dataclass instance, got {type(record).__name__}")
    return _describe(type(record))


def kind_of(annotation: Any) -> FieldKind:
    """Map a bare type annotation onto a :class:`FieldKind`.

    ``bool`` is tested before ``int`` because it is a subclass of it.

    Examples
    --------
    >>> kind_of(bool), kind_of(int), kind_of(list)
    (<FieldKind.BOOL: 'bool'>, <FieldKind.INT: 'int'>, <FieldKind.UNSUPPORTED: 'unsupported'>)
    """

    if annotation is bool:
        return FieldKind.BOOL
    if annotation is int:
        return FieldKind.INT
    if annotation is str:
        return FieldKind.STRING
    if isinstance(annotation, type) and is_dataclass(annotation):
        return FieldKind.RECORD
    return FieldKind.UNSUPPORTED


def to_document(record: Any) -> dict[str, Any]:
    """Return the supported fields of *record* keyed by their file keys.

    The result has the shape the JSON decoder accepts, so it can be written as
    a configuration file. Unsupported fields are left out.

    Examples
    --------
    >>> from dataclasses import dataclass, field
    >>> @dataclass
    ... class Demo:
    ...     name: str = field(default="api", metadata={"setting": Setting(json="service-name")})
    ...     tags: list = field(default_factory=list)
    >>> to_document(Demo())
    {'service-name': 'api'}
    """

    document: dict[str, Any] = {}
    for item in fields_of(record):
        if item.kind is FieldKind.RECORD:
            document[item.file_key] = to_document(item.child(record))
        elif item.kind is not FieldKind.UNSUPPORTED:
            document[item.file_key] = getattr(record, item.name)
    return document


@lru_cache(maxsize=None)
def _describe(record_type: type) -> tuple[RecordField, ...]:
    """Resolve and cache the field descriptors of *record_type*."""

    hints = _resolve_hints(record_type)
    described: list[RecordField] = []
    for item in dataclass_fields(record_type):
        annotation = hints.get(item.name)
        if annotation is None:
            annotation = _annotation_from_default(item)
        if annotation is None:
            log_debug(
                "field_unresolved", stage="describe", path=None, record=record_type.__qualname__, field=item.name
            )
            described.append(RecordField(item.name, FieldKind.UNSUPPORTED, _metadata_setting(item), item.type))
            continue
        bare, setting = _split_annotation(annotation)
        described.append(RecordField(item.name, kind_of(bare), _metadata_setting(item, setting), bare))
    return tuple(described)


def _resolve_hints(record_type: type) -> dict[str, Any]:
    """Return the resolvable annotations of *record_type*.

    String annotations naming types that live in a function scope cannot be
    evaluated against the module globals. Each annotation is then evaluated on
    its own against its class's module and class namespace, and the ones that
    still fail are left out.
    """

    try:
        return get_type_hints(record_type, include_extras=True)
    except NameError:
        pass
    resolved: dict[str, Any] = {}
    for klass in reversed(record_type.__mro__):
        module = sys.modules.get(klass.__module__)
        globalns = dict(vars(module)) if module is not None else {}
        localns = dict(vars(klass))
        for name, raw in inspect.get_annotations(klass).items():
            if not isinstance(raw, str):
                resolved[name] = raw
                continue
            try:
                resolved[name] = eval(raw, globalns, localns)  # noqa: S307
            except NameError:
                resolved.pop(name, None)
    return resolved


def _annotation_from_default(item: Field) -> Any:
    """Infer a nested record type from the field's default when its annotation is unresolvable."""

    factory = item.default_factory
    if factory is not MISSING and isinstance(factory, type) and is_dataclass(factory):
        return factory
    if item.default is not MISSING and is_dataclass(item.default) and not isinstance(item.default, type):
        return type(item.default)
    return None


def _metadata_setting(item: Field, fallback: Setting = EMPTY_SETTING) -> Setting:
    return item.metadata.get(SETTING_METADATA_KEY, fallback)


def _split_annotation(annotation: Any) -> tuple[Any, Setting]:
    """Separate ``Annotated[T, Setting(...)]`` into ``(T, Setting)``."""

    if get_origin(annotation) is not Annotated:
        return annotation, EMPTY_SETTING
    bare, *extras = get_args(annotation)
    for extra in extras:
        if isinstance(extra, Setting):
            return bare, extra
    return bare, EMPTY_SETTING
