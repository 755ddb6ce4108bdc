"""Example configuration asset generation helpers.

Purpose
-------
Produce a reproducible ``config.json`` and ``.env.example`` for the sample
record so operators can see every source the population pass reads.

Contents
    - ``ExampleSpec``: dataclass capturing a relative path and text content.
    - ``generate_examples``: public orchestration expressed through helper
      verbs.
    - ``_build_specs``: yields the example files for a record.
    - ``_write_examples`` / ``_should_write``: tiny filesystem helpers.

System Role
-----------
Called by the ``generate-examples`` CLI command; has no runtime coupling to the
population pass beyond reading the record's defaults.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator

from ..application.context import DEFAULT_ENV_PREFIX, derive_config_location
from ..application.defaults import apply_defaults
from ..domain.fields import FieldKind, fields_of, to_document
from .sample import ServiceConfig

CONFIG_FILENAME = "config.json"
ENV_FILENAME = ".env.example"


@dataclass(slots=True)
class ExampleSpec:
    """Describe a single example file to be written to disk.

    Attributes
    ----------
    relative_path:
        Path relative to the destination directory.
    content:
        File contents (UTF-8 text).
    """

    relative_path: Path
    content: str


def generate_examples(
    destination: str | Path,
    *,
    record: Any | None = None,
    prefix: str = DEFAULT_ENV_PREFIX,
    force: bool = False,
) -> list[Path]:
    """Write ``config.json`` and ``.env.example`` for *record* under *destination*.

    Parameters
    ----------
    destination:
        Directory that receives the files; created when missing.
    record:
        Record whose defaults fill the examples. Defaults to
        :class:`~lib_configurator.examples.sample.ServiceConfig`.
    prefix:
        Environment prefix used in ``.env.example``.
    force:
        When ``True`` existing files are overwritten; otherwise they are skipped.

    Returns
    -------
    list[Path]
        Paths written during this invocation.

    Examples
    --------
    >>> from tempfile import TemporaryDirectory
    >>> tmp = TemporaryDirectory()
    >>> sorted(path.name for path in generate_examples(tmp.name))
    ['.env.example', 'config.json']
    >>> generate_examples(tmp.name)
    []
    >>> tmp.cleanup()
    """

    template = record if record is not None else ServiceConfig()
    apply_defaults(template)
    return _write_examples(Path(destination), _build_specs(template, prefix), force)


def _write_examples(destination: Path, specs: Iterator[ExampleSpec], force: bool) -> list[Path]:
    """Write all ``specs`` under *destination* honouring the *force* flag."""

    written: list[Path] = []
    for spec in specs:
        path = destination / spec.relative_path
        if not _should_write(path, force):
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(spec.content, encoding="utf-8")
        written.append(path)
    return written


def _should_write(path: Path, force: bool) -> bool:
    """Return ``True`` when *path* should be written respecting *force*."""

    return force or not path.exists()


def _build_specs(record: Any, prefix: str) -> Iterator[ExampleSpec]:
    """Yield the JSON document and the dotenv template for *record*."""

    yield ExampleSpec(Path(CONFIG_FILENAME), json.dumps(to_document(record), indent=2) + "\n")
    lines = [
        "# Copy to .env (or export) to override the JSON file",
        f"{derive_config_location(prefix)}={CONFIG_FILENAME}",
    ]
    lines.extend(f"# {key}={value}" for key, value in _env_entries(record, prefix))
    yield ExampleSpec(Path(ENV_FILENAME), "\n".join(lines) + "\n")


def _env_entries(record: Any, prefix: str) -> Iterator[tuple[str, str]]:
    """Yield ``(variable, default)`` pairs for every bindable field of *record*."""

    for item in fields_of(record):
        if item.kind is FieldKind.RECORD:
            yield from _env_entries(item.child(record), prefix)
        elif item.kind is not FieldKind.UNSUPPORTED and item.setting.env:
            value = getattr(record, item.name)
            rendered = str(value).lower() if isinstance(value, bool) else str(value)
            yield (prefix + item.setting.env).upper(), rendered
