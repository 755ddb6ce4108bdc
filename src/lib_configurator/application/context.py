"""Configurator context: prefix, config location, environment and flags.

Purpose
-------
Hold the state one population pass reads from: the environment prefix, the
name of the variable carrying the config file path, the environment store and
the flag registry. Passing the context explicitly keeps tests isolated; the
composition root also keeps one process-wide instance for applications that do
not care.

Contents
--------
* :data:`DEFAULT_ENV_PREFIX` / :data:`CONFIG_LOCATION_SUFFIX` – built-in names.
* :func:`derive_config_location` – ``prefix + "CONFIG"``.
* :class:`ConfiguratorContext` – the mutable context object.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Final, Mapping

from .naming import form_flag_name
from .ports import FlagRegistry

DEFAULT_ENV_PREFIX: Final[str] = "CONFIGURATOR_"
CONFIG_LOCATION_SUFFIX: Final[str] = "CONFIG"


def derive_config_location(prefix: str) -> str:
    """Return the environment variable naming the config file for *prefix*.

    Examples
    --------
    >>> derive_config_location("MYAPP_")
    'MYAPP_CONFIG'
    """

    return prefix + CONFIG_LOCATION_SUFFIX


@dataclass(slots=True)
class ConfiguratorContext:
    """Mutable settings shared by every stage of a population pass.

    Attributes
    ----------
    flags:
        Registry that receives one flag per bindable field.
    env_prefix:
        Prepended to every environment suffix. May be changed before a pass.
    environ:
        Environment store; defaults to :data:`os.environ` so changes made at
        runtime are observed.
    config_location:
        Name of the variable holding the config file path. Derived from
        ``env_prefix`` once, at construction; changing ``env_prefix`` later
        requires :meth:`refresh_config_location`.

    Examples
    --------
    >>> from lib_configurator.adapters.flags.click_registry import ClickFlagRegistry
    >>> ctx = ConfiguratorContext(ClickFlagRegistry(), env_prefix="DEMO_", environ={})
    >>> ctx.config_location, ctx.env_key("port"), ctx.flag_name("log_level")
    ('DEMO_CONFIG', 'DEMO_PORT', 'log-level')
    """

    flags: FlagRegistry
    env_prefix: str = DEFAULT_ENV_PREFIX
    environ: Mapping[str, str] = field(default_factory=lambda: os.environ)
    config_location: str = ""

    def __post_init__(self) -> None:
        if not self.config_location:
            self.config_location = derive_config_location(self.env_prefix)

    def refresh_config_location(self) -> str:
        """Re-derive :attr:`config_location` from the current prefix and return it."""

        self.config_location = derive_config_location(self.env_prefix)
        return self.config_location

    def env_key(self, suffix: str) -> str:
        """Return the upper-cased environment variable name for *suffix*."""

        return (self.env_prefix + suffix).upper()

    def flag_name(self, suffix: str) -> str:
        return form_flag_name(self.env_prefix + suffix, prefix=self.env_prefix)

    def getenv(self, name: str) -> str:
        """Return the value of *name*, or ``""`` when it is unset."""

        return self.environ.get(name, "")
