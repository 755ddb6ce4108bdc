"""Application-layer ports describing adapter responsibilities.

Purpose
-------
Define the structural contracts the external collaborators must satisfy so
the population stages can drive them without depending on concrete
implementations.

Contents
--------
* :class:`ConfigFileSource` – fetches raw configuration bytes.
* :class:`RecordDecoder` – decodes raw bytes into a record in place.
* :class:`Flag` – view of a registered command-line flag.
* :class:`FlagRegistry` – binds flag names to field slots and parses arguments.

System Role
-----------
These protocols keep the environment binder and the composition root
independent of ``click`` and of the filesystem. Each adapter under
:mod:`lib_configurator.adapters` implements exactly one of them.
"""

from __future__ import annotations

from typing import Any, Iterable, Protocol, Sequence, runtime_checkable

from ..domain.fields import FieldKind, FieldSlot


@runtime_checkable
class ConfigFileSource(Protocol):
    """Read configuration bytes from the location named by an environment variable."""

    def load(self, location: str) -> bytes:
        """Return file contents or raise :class:`~lib_configurator.domain.errors.NotFound`."""


@runtime_checkable
class RecordDecoder(Protocol):
    """Decode a serialized document into an existing record."""

    def decode(self, payload: bytes, record: Any) -> None:
        """Overlay *payload* onto *record* or raise ``InvalidFormat``."""


class Flag(Protocol):
    """Registered flag as seen by callers of :meth:`FlagRegistry.lookup`."""

    name: str
    kind: FieldKind
    slot: FieldSlot
    default: Any
    usage: str


@runtime_checkable
class FlagRegistry(Protocol):
    """Process-wide table of command-line flags bound to field slots.

    A name is registered at most once; re-registration is the caller's
    responsibility to avoid via :meth:`lookup`.
    """

    def lookup(self, name: str) -> Flag | None:
        """Return the flag registered under *name* or ``None``."""

    def bool_var(self, slot: FieldSlot, name: str, default: bool, usage: str) -> None:
        """Register a boolean flag bound to *slot*."""

    def int_var(self, slot: FieldSlot, name: str, default: int, usage: str) -> None:
        """Register an integer flag bound to *slot*."""

    def string_var(self, slot: FieldSlot, name: str, default: str, usage: str) -> None:
        """Register a string flag bound to *slot*."""

    def flags(self) -> Iterable[Flag]:
        """Yield registered flags in registration order."""

    def parse(self, argv: Sequence[str]) -> bool:
        """Parse *argv* and write command-line values into bound slots."""
