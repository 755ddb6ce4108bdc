"""Command-line flag registry built on ``click``.

Purpose
-------
Bind flag names to record field slots and parse process arguments into them.
Each registered flag becomes a :class:`click.Option`; parsing happens through a
throwaway :class:`click.Command` so the registry can keep growing between
parses.

Contents
--------
* :class:`ClickFlag` – one registered flag (name, kind, slot, default).
* :class:`RejectedValue` – marker for a flag value that failed to convert.
* :class:`ClickFlagRegistry` – implementation of
  :class:`lib_configurator.application.ports.FlagRegistry`.

System Role
-----------
Owned by :class:`~lib_configurator.application.context.ConfiguratorContext`.
The environment stage registers flags, the composition root calls
:meth:`ClickFlagRegistry.parse` as the final stage. Only values that were
actually given on the command line are written, so flags never overwrite a
field with their registration-time default. A value that fails to convert
only skips its own flag.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Sequence

import click
from click.core import ParameterSource

from ...domain.fields import FieldKind, FieldSlot
from ...domain.values import parse_bool, parse_int
from ...observability import log_debug, log_error

_CONTEXT_SETTINGS = {"ignore_unknown_options": True, "allow_extra_args": True}


@dataclass(frozen=True, slots=True)
class RejectedValue:
    """Raw command-line text that could not be converted for a flag."""

    raw: str
    reason: str


class _LenientInteger(click.ParamType):
    """Integer type returning :class:`RejectedValue` instead of failing the whole parse."""

    name = "integer"

    def convert(self, value: Any, param: click.Parameter | None, ctx: click.Context | None) -> Any:
        if isinstance(value, (int, RejectedValue)) and not isinstance(value, bool):
            return value
        try:
            return parse_int(str(value))
        except ValueError as exc:
            return RejectedValue(str(value), str(exc))


_LENIENT_INTEGER = _LenientInteger()


@dataclass(slots=True)
class ClickFlag:
    """A registered flag and the slot it writes to."""

    name: str
    kind: FieldKind
    slot: FieldSlot
    default: Any
    usage: str
    dest: str

    def to_option(self) -> click.Option:
        """Return the :class:`click.Option` that parses this flag.

        Booleans accept ``--name`` and ``--no-name``; integers and strings take
        one value (``--name 5`` or ``--name=5``).
        """

        help_text = self.usage or None
        if self.kind is FieldKind.BOOL:
            return click.Option(
                [f"--{self.name}/--no-{self.name}", self.dest],
                is_flag=True,
                default=self.default,
                help=help_text,
            )
        param_type = _LENIENT_INTEGER if self.kind is FieldKind.INT else click.STRING
        return click.Option([f"--{self.name}", self.dest], type=param_type, default=self.default, help=help_text)


class ClickFlagRegistry:
    """Registry of command-line flags bound to record fields.

    Names are unique: the first registration of a name stays in control and
    callers are expected to check :meth:`lookup` before registering.

    Accepted spellings for a registered flag ``name``: ``--name value``,
    ``--name=value``, ``-name value`` and ``-name=value``. Boolean flags take
    no separate value; they accept ``--name``, ``--no-name`` and
    ``--name=<bool>`` with the same tokens as environment values.

    Examples
    --------
    >>> from lib_configurator.domain.fields import FieldSlot
    >>> class Holder:
    ...     port = 80
    >>> holder = Holder()
    >>> registry = ClickFlagRegistry()
    >>> registry.int_var(FieldSlot(holder, "port"), "port", 80, "")
    >>> registry.parse(["-port", "8080", "serve"])
    True
    >>> holder.port, registry.args
    (8080, ['serve'])
    """

    def __init__(self, *, prog_name: str = "configurator") -> None:
        self._prog_name = prog_name
        self._flags: dict[str, ClickFlag] = {}
        self.args: list[str] = []
        self.parsed = False

    def lookup(self, name: str) -> ClickFlag | None:
        return self._flags.get(name)

    def bool_var(self, slot: FieldSlot, name: str, default: bool, usage: str) -> None:
        self._register(name, FieldKind.BOOL, slot, default, usage)

    def int_var(self, slot: FieldSlot, name: str, default: int, usage: str) -> None:
        self._register(name, FieldKind.INT, slot, default, usage)

    def string_var(self, slot: FieldSlot, name: str, default: str, usage: str) -> None:
        self._register(name, FieldKind.STRING, slot, default, usage)

    def flags(self) -> Iterator[ClickFlag]:
        """Yield registered flags in registration order."""

        yield from self._flags.values()

    def parse(self, argv: Sequence[str]) -> bool:
        """Parse *argv* and write command-line values into the bound slots.

        Unknown options and positional arguments are kept on :attr:`args`.

        Returns
        -------
        bool
            ``False`` when at least one flag value was rejected (for example a
            non-numeric value for an integer flag). Rejected flags keep their
            field's current value; every other flag given is still applied.
        """

        tokens, rejected = self._normalize(argv)
        command = click.Command(
            self._prog_name,
            params=[flag.to_option() for flag in self._flags.values()],
            context_settings=_CONTEXT_SETTINGS,
            add_help_option=False,
        )
        try:
            ctx = command.make_context(self._prog_name, tokens)
        except click.UsageError as exc:
            log_error("flags_invalid", stage="flags", path=None, error=exc.format_message())
            return False

        applied: list[str] = []
        for flag in self._flags.values():
            if ctx.get_parameter_source(flag.dest) is not ParameterSource.COMMANDLINE:
                continue
            value = ctx.params[flag.dest]
            if isinstance(value, RejectedValue):
                _reject(flag.name, value.raw, value.reason, rejected)
                continue
            flag.slot.set(value)
            applied.append(flag.name)
        self.args = list(ctx.args)
        self.parsed = True
        log_debug(
            "flags_parsed", stage="flags", path=None, applied=applied, rejected=rejected, extra_args=len(self.args)
        )
        return not rejected

    def _normalize(self, argv: Sequence[str]) -> tuple[list[str], list[str]]:
        """Rewrite registered flags into the ``--name`` forms click understands.

        Returns the rewritten tokens and the names of flags whose value was
        dropped before click saw it.
        """

        tokens: list[str] = []
        rejected: list[str] = []
        remaining = iter(argv)
        for token in remaining:
            if token == "--":
                tokens.append(token)
                tokens.extend(remaining)
                break
            name, has_value, value = _split_flag(token)
            flag = self._flags.get(name) if name else None
            if flag is None:
                tokens.append(token)
            elif flag.kind is FieldKind.BOOL:
                if not has_value:
                    tokens.append(f"--{name}")
                    continue
                try:
                    tokens.append(f"--{name}" if parse_bool(value) else f"--no-{name}")
                except ValueError as exc:
                    _reject(name, value, str(exc), rejected)
            elif has_value:
                tokens.append(f"--{name}={value}")
            else:
                following = next(remaining, None)
                if following is None:
                    _reject(name, "", "flag needs an argument", rejected)
                else:
                    tokens.extend((f"--{name}", following))
        return tokens, rejected

    def _register(self, name: str, kind: FieldKind, slot: FieldSlot, default: Any, usage: str) -> None:
        if name in self._flags:
            raise ValueError(f"flag redefined: {name}")
        self._flags[name] = ClickFlag(name, kind, slot, default, usage, f"flag_{len(self._flags)}")


def _split_flag(token: str) -> tuple[str, bool, str]:
    """Split ``-name``, ``--name`` or ``--name=value`` into ``(name, has_value, value)``.

    Tokens that are not options yield an empty name.
    """

    if not token.startswith("-") or token in ("-", "--"):
        return "", False, ""
    body = token[2:] if token.startswith("--") else token[1:]
    name, separator, value = body.partition("=")
    return name, bool(separator), value


def _reject(name: str, raw: str, reason: str, rejected: list[str]) -> None:
    rejected.append(name)
    log_error("flag_value_invalid", stage="flags", path=None, flag=name, value=raw, error=reason)
