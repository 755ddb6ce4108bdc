"""Composition root for ``lib_configurator``.

Purpose
-------
Provide the single entry point that populates a configuration record from its
declared defaults, an optional JSON file, environment variables and
command-line flags, in that order, each later stage overriding the previous
one field by field.

Contents
--------
* :func:`default_context` – process-wide :class:`ConfiguratorContext`.
* :func:`initialize_config` – runs all four stages against one record.
* :func:`set_defaults` – default stage.
* :func:`set_from_config_file` – file stage, reporting success as a boolean.
* :func:`set_from_environment` – environment stage plus flag registration.

System Role
-----------
Wires the adapters (file loader, JSON decoder, click flag registry) into the
application-layer stages. No stage failure stops the pass: a failed stage
leaves the values established by the previous stages in place.
"""

from __future__ import annotations

import sys
from typing import Any, Sequence

from .adapters.decoders.json_record import JSONRecordDecoder
from .adapters.file_loaders.default import ConfigFileLoader
from .adapters.flags.click_registry import ClickFlagRegistry
from .application.context import CONFIG_LOCATION_SUFFIX, DEFAULT_ENV_PREFIX, ConfiguratorContext
from .application.defaults import apply_defaults
from .application.environment import bind_environment
from .application.naming import form_flag_name
from .application.ports import ConfigFileSource, RecordDecoder
from .domain.errors import ConfigError, NotFound
from .observability import log_debug, log_info, make_event

_DEFAULT_CONTEXT: ConfiguratorContext | None = None


def default_context() -> ConfiguratorContext:
    """Return the process-wide context, creating it on first use.

    Applications may change ``env_prefix`` (followed by
    :meth:`ConfiguratorContext.refresh_config_location`) before calling
    :func:`initialize_config` without a context.
    """

    global _DEFAULT_CONTEXT
    if _DEFAULT_CONTEXT is None:
        _DEFAULT_CONTEXT = ConfiguratorContext(ClickFlagRegistry())
    return _DEFAULT_CONTEXT


def initialize_config(
    record: Any,
    *,
    context: ConfiguratorContext | None = None,
    argv: Sequence[str] | None = None,
) -> None:
    """Populate *record* in place from defaults, file, environment and flags.

    Parameters
    ----------
    record:
        Dataclass instance whose fields carry
        :class:`~lib_configurator.domain.fields.Setting` metadata.
    context:
        Prefix, environment and flag registry to use. Defaults to
        :func:`default_context`.
    argv:
        Arguments parsed in the flag stage. Defaults to ``sys.argv[1:]``.

    Side Effects
    ------------
    Registers flags on ``context.flags`` (first registration of a name wins) and
    emits structured logging events for every stage.

    Examples
    --------
    >>> from lib_configurator.examples.sample import ServiceConfig
    >>> ctx = ConfiguratorContext(ClickFlagRegistry(), environ={"CONFIGURATOR_PORT": "99"})
    >>> config = ServiceConfig()
    >>> initialize_config(config, context=ctx, argv=["--host", "0.0.0.0"])
    >>> config.host, config.port, config.debug, config.database.pool_size
    ('0.0.0.0', 99, False, 5)
    """

    ctx = context or default_context()
    set_defaults(record)
    set_from_config_file(record, ctx)
    set_from_environment(record, ctx)
    ctx.flags.parse(sys.argv[1:] if argv is None else argv)
    log_info("configuration_initialized", **make_event("final", None, {"record": type(record).__name__}))


def set_defaults(record: Any) -> None:
    """Write each field's declared default literal into *record*."""

    written = apply_defaults(record)
    log_debug("defaults_applied", **make_event("defaults", None, {"fields": written}))


def set_from_config_file(
    record: Any,
    context: ConfiguratorContext | None = None,
    *,
    loader: ConfigFileSource | None = None,
    decoder: RecordDecoder | None = None,
) -> bool:
    """Overlay the JSON file named by ``context.config_location`` onto *record*.

    Returns
    -------
    bool
        ``True`` when the file was read and decoded; ``False`` when no path is
        configured, the file cannot be read, or its content does not decode.
        On ``False`` the record keeps its previous values.

    Examples
    --------
    >>> from lib_configurator.examples.sample import ServiceConfig
    >>> ctx = ConfiguratorContext(ClickFlagRegistry(), environ={})
    >>> set_from_config_file(ServiceConfig(), ctx)
    False
    """

    ctx = context or default_context()
    source = loader or ConfigFileLoader(environ=ctx.environ)
    try:
        payload = source.load(ctx.config_location)
        (decoder or JSONRecordDecoder()).decode(payload, record)
    except NotFound as exc:
        log_debug("config_file_skipped", **make_event("file", None, {"reason": str(exc)}))
        return False
    except ConfigError as exc:
        log_debug("config_file_rejected", **make_event("file", None, {"reason": str(exc)}))
        return False
    log_debug("config_file_merged", **make_event("file", ctx.environ.get(ctx.config_location)))
    return True


def set_from_environment(record: Any, context: ConfiguratorContext | None = None) -> None:
    """Overlay prefixed environment variables onto *record* and register flags."""

    bind_environment(record, context or default_context())


__all__ = [
    "CONFIG_LOCATION_SUFFIX",
    "DEFAULT_ENV_PREFIX",
    "ConfiguratorContext",
    "default_context",
    "form_flag_name",
    "initialize_config",
    "set_defaults",
    "set_from_config_file",
    "set_from_environment",
]
