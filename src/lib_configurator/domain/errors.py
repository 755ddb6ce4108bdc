"""Domain-level exception hierarchy.

Purpose
-------
Expose the error taxonomy shared by adapters and the composition root. The
hierarchy lives in the domain layer so adapters may depend on it without the
domain depending on them.

Contents
--------
* :class:`ConfigError` – umbrella base class for all configuration issues.
* :class:`InvalidFormat` – the configuration file could not be decoded into
  the record.
* :class:`NotFound` – an optional configuration resource is absent.
* :class:`MissingLocation` – no config file path is configured.
* :class:`FileUnavailable` – a path is configured but cannot be read.

System Role
-----------
Adapters raise these exceptions; :func:`lib_configurator.core.set_from_config_file`
catches :class:`ConfigError` and reduces it to a boolean so that configuration
assembly never halts process start-up.
"""

from __future__ import annotations


class ConfigError(Exception):
    """Base type for all exceptions emitted by ``lib_configurator``.

    Why
    ----
    Provide a single catch-all type for consumers that do not need fine-grained
    handling.
    """


class InvalidFormat(ConfigError):
    """Raised when file contents cannot be decoded into the record.

    Typical Sources
    ---------------
    Malformed JSON, a non-object document, or a JSON value whose type does not
    match the field it targets.
    """


class NotFound(ConfigError):
    """Represents missing-but-optional resources.

    Why
    ----
    Allow adapters to signal absence without aborting the population pass. The
    composition root treats this as a non-fatal condition.
    """


class MissingLocation(NotFound):
    """No configuration file path is set in the environment."""


class FileUnavailable(NotFound):
    """A configuration file path is set but the file cannot be read."""
