"""Sample configuration record used by the CLI and the documentation.

The record shows both nesting and every supported field kind. With the
default prefix its environment variables are ``CONFIGURATOR_HOST``,
``CONFIGURATOR_PORT``, ``CONFIGURATOR_DEBUG``, ``CONFIGURATOR_DATABASE_URL`` and
``CONFIGURATOR_DATABASE_POOL_SIZE``; its flags are ``--host``, ``--port``,
``--debug/--no-debug``, ``--database-url`` and ``--database-pool-size``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Annotated

from ..domain.fields import Setting


@dataclass
class DatabaseConfig:
    """Connection settings nested under the ``database`` key."""

    url: Annotated[str, Setting(default="sqlite:///service.db", json="url", env="DATABASE_URL")] = ""
    pool_size: Annotated[int, Setting(default="5", json="pool_size", env="DATABASE_POOL_SIZE")] = 0


@dataclass
class ServiceConfig:
    """Top-level settings of a small network service."""

    host: Annotated[str, Setting(default="127.0.0.1", json="host", env="HOST")] = ""
    port: Annotated[int, Setting(default="8080", json="port", env="PORT")] = 0
    debug: Annotated[bool, Setting(default="false", json="debug", env="DEBUG")] = False
    tags: list[str] = field(default_factory=list)
    database: Annotated[DatabaseConfig, Setting(json="database")] = field(default_factory=DatabaseConfig)
