"""Shared records and helpers for the test suite."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated, Any, Mapping

from lib_configurator import ClickFlagRegistry, ConfiguratorContext, Setting


@dataclass
class NestedSettings:
    foo: Annotated[str, Setting(default="test-foo", json="test-foo", env="ENV_TEST_FOO")] = ""


@dataclass
class SuiteConfig:
    foo: Annotated[str, Setting(default="foo", json="foo", env="ENV_FOO")] = ""
    foo_empty: str = ""
    bar: Annotated[int, Setting(default="1234", json="bar", env="ENV_BAR")] = 0
    bar_empty: int = 0
    baz: Annotated[bool, Setting(default="true", json="baz", env="ENV_BAZ")] = False
    baz_empty: bool = False
    unsupported: Annotated[
        dict[str, str], Setting(default="doesnt-matter", json="doesnt-matter", env="DOESNT_MATTER")
    ] = field(default_factory=dict)
    test: Annotated[NestedSettings, Setting(json="test")] = field(default_factory=NestedSettings)


@dataclass
class SharedNameConfig:
    """Declares the same env suffix as :class:`SuiteConfig.foo`."""

    foo: Annotated[str, Setting(default="shared", env="ENV_FOO")] = ""


@dataclass
class EdgeConfig:
    ratio: Annotated[float, Setting(default="0.5", json="ratio", env="RATIO")] = 0.0
    hosts: Annotated[list[str], Setting(env="HOSTS")] = field(default_factory=list)
    _secret: Annotated[str, Setting(default="hidden", env="SECRET")] = ""
    verbose: bool = field(default=False, metadata={"setting": Setting(default="yes", env="VERBOSE")})
    retries: int = field(default=7, metadata={"setting": Setting(default="three", env="RETRIES")})
    nested: Annotated[NestedSettings | None, Setting(json="nested")] = None
    child: NestedSettings = None  # type: ignore[assignment]


def make_context(environ: Mapping[str, str] | None = None, *, prefix: str = "CONFIGURATOR_") -> ConfiguratorContext:
    """Return a context with its own flag registry and an isolated environment."""

    return ConfiguratorContext(ClickFlagRegistry(), env_prefix=prefix, environ=dict(environ or {}))


def write_json(directory: Path, name: str, payload: Any) -> Path:
    path = directory / name
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


VALID_DOCUMENT = {"foo": "abcd", "test": {"test-foo": "bcde"}}
