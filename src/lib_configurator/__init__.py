"""Public package surface for ``lib_configurator``.

Populate a dataclass record from declared defaults, an optional JSON file,
environment variables and command-line flags. :func:`initialize_config` is the
entry point; :class:`Setting` is the per-field metadata.
"""

from __future__ import annotations

from .application.context import ConfiguratorContext
from .adapters.flags.click_registry import ClickFlagRegistry
from .core import (
    CONFIG_LOCATION_SUFFIX,
    DEFAULT_ENV_PREFIX,
    default_context,
    form_flag_name,
    initialize_config,
    set_defaults,
    set_from_config_file,
    set_from_environment,
)
from .domain.errors import ConfigError, FileUnavailable, InvalidFormat, MissingLocation, NotFound
from .domain.fields import FieldKind, Setting, fields_of, to_document
from .observability import bind_trace_id, get_logger

__all__ = [
    "CONFIG_LOCATION_SUFFIX",
    "DEFAULT_ENV_PREFIX",
    "ClickFlagRegistry",
    "ConfigError",
    "ConfiguratorContext",
    "FieldKind",
    "FileUnavailable",
    "InvalidFormat",
    "MissingLocation",
    "NotFound",
    "Setting",
    "bind_trace_id",
    "default_context",
    "fields_of",
    "form_flag_name",
    "get_logger",
    "initialize_config",
    "set_defaults",
    "set_from_config_file",
    "set_from_environment",
    "to_document",
]
