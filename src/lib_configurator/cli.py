"""CLI adapter for ``lib_configurator`` built on ``lib_cli_exit_tools``.

Purpose
-------
Let operators see what a population pass produces for a record without writing
Python: which flag names a prefix yields, which flags a record registers, and
the final values once defaults, file, environment and flags are applied.

Contents
--------
* :data:`CLICK_CONTEXT_SETTINGS` – shared Click settings ensuring ``-h`` works.
* :func:`cli` – root command that wires traceback handling into
  ``lib_cli_exit_tools``.
* :func:`cli_info` – prints distribution metadata.
* :func:`cli_flag_name` – exposes :func:`lib_configurator.application.naming.form_flag_name`.
* :func:`cli_flags` – lists the flags a record registers.
* :func:`cli_read` – runs :func:`lib_configurator.core.initialize_config` and prints
  the record as JSON.
* :func:`cli_generate_examples` – writes example files for a record.
* :func:`main` – entry point used by ``console_scripts`` registration.

System Role
-----------
Outermost layer. Every command builds its own
:class:`~lib_configurator.application.context.ConfiguratorContext` so repeated
invocations in one process never share a flag registry.
"""

from __future__ import annotations

import json
import os
import sys
from importlib import import_module, metadata
from pathlib import Path
from typing import Any, Final, Optional, Sequence

import lib_cli_exit_tools
import rich_click as click

from .adapters.flags.click_registry import ClickFlagRegistry
from .application.context import DEFAULT_ENV_PREFIX, ConfiguratorContext
from .application.naming import form_flag_name
from .core import initialize_config, set_defaults, set_from_config_file, set_from_environment
from .domain.fields import to_document
from .examples import generate_examples as _generate_examples

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
_PASSTHROUGH_CONTEXT_SETTINGS = {**CLICK_CONTEXT_SETTINGS, "ignore_unknown_options": True}
_TRACEBACK_SUMMARY_LIMIT: Final[int] = 500
_TRACEBACK_VERBOSE_LIMIT: Final[int] = 10_000

DEFAULT_RECORD: Final[str] = "lib_configurator.examples.sample:ServiceConfig"


def _resolve_version() -> str:
    """Return the installed package version, or ``"0.0.0"`` for source checkouts."""

    try:
        return metadata.version("lib_configurator")
    except metadata.PackageNotFoundError:
        return "0.0.0"


@click.group(
    help="Populate typed configuration records from defaults, JSON, environment and flags",
    context_settings=CLICK_CONTEXT_SETTINGS,
    invoke_without_command=False,
)
@click.version_option(
    version=_resolve_version(),
    prog_name="lib_configurator",
    message="lib_configurator version %(version)s",
)
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool) -> None:
    """Root command storing the traceback preference for ``lib_cli_exit_tools``.

    Side Effects
        Mutates ``lib_cli_exit_tools.config.traceback`` and
        ``lib_cli_exit_tools.config.traceback_force_color``.
    """

    ctx.ensure_object(dict)
    ctx.obj["traceback"] = traceback
    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print basic distribution metadata so users can confirm installation."""

    try:
        meta = metadata.metadata("lib_configurator")
    except metadata.PackageNotFoundError:
        click.echo("lib_configurator (metadata unavailable)")
        return
    click.echo(f"Info for {meta.get('Name', 'lib_configurator')}:")
    click.echo(f"  Version         : {meta.get('Version', _resolve_version())}")
    click.echo(f"  Requires-Python : {meta.get('Requires-Python', '>=3.10')}")
    summary = meta.get("Summary")
    if summary:
        click.echo(f"  Summary         : {summary}")


@cli.command("flag-name", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("key")
@click.option("--prefix", default=DEFAULT_ENV_PREFIX, show_default=True, help="Environment prefix to strip")
def cli_flag_name(key: str, prefix: str) -> None:
    """Print the command-line flag name derived from environment *KEY*.

    Examples
    --------
    >>> from click.testing import CliRunner
    >>> result = CliRunner().invoke(cli, ["flag-name", "CONFIGURATOR_LOG_LEVEL"])
    >>> result.output.strip()
    'log-level'
    """

    click.echo(form_flag_name(key, prefix=prefix))


@cli.command("flags", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--record", "record_path", default=DEFAULT_RECORD, show_default=True, help="Record class as module:Class")
@click.option("--prefix", default=DEFAULT_ENV_PREFIX, show_default=True, help="Environment variable prefix")
def cli_flags(record_path: str, prefix: str) -> None:
    """List the flags a record registers, with their defaults after defaults, file and environment."""

    record = _load_record(record_path)
    context = _build_context(prefix, None)
    set_defaults(record)
    set_from_config_file(record, context)
    set_from_environment(record, context)
    payload = [
        {"name": flag.name, "kind": flag.kind.value, "default": flag.default} for flag in context.flags.flags()
    ]
    click.echo(json.dumps(payload, indent=2))


@cli.command("read", context_settings=_PASSTHROUGH_CONTEXT_SETTINGS)
@click.option("--record", "record_path", default=DEFAULT_RECORD, show_default=True, help="Record class as module:Class")
@click.option("--prefix", default=DEFAULT_ENV_PREFIX, show_default=True, help="Environment variable prefix")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="JSON file to use instead of the <prefix>CONFIG environment variable",
)
@click.option("--indent", type=int, default=None, help="Pretty-print JSON output with the provided indent size")
@click.argument("flag_args", nargs=-1, type=click.UNPROCESSED)
def cli_read(
    record_path: str,
    prefix: str,
    config_path: Optional[Path],
    indent: Optional[int],
    flag_args: Sequence[str],
) -> None:
    """Populate a record and print it as JSON keyed by file keys.

    Arguments after the options are parsed as the record's own flags, for
    example ``read -- --port 9000 --debug``.
    """

    record = _load_record(record_path)
    context = _build_context(prefix, config_path)
    initialize_config(record, context=context, argv=list(flag_args))
    click.echo(json.dumps(to_document(record), indent=indent))


@cli.command("generate-examples", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--destination",
    type=click.Path(path_type=Path, file_okay=False, dir_okay=True, resolve_path=True),
    required=True,
    help="Directory that will receive config.json and .env.example",
)
@click.option("--record", "record_path", default=DEFAULT_RECORD, show_default=True, help="Record class as module:Class")
@click.option("--prefix", default=DEFAULT_ENV_PREFIX, show_default=True, help="Environment variable prefix")
@click.option(
    "--force/--no-force",
    default=False,
    help="Overwrite existing example files if set",
    show_default=True,
)
def cli_generate_examples(destination: Path, record_path: str, prefix: str, force: bool) -> None:
    """Generate example configuration files under *destination*."""

    created = _generate_examples(destination, record=_load_record(record_path), prefix=prefix, force=force)
    click.echo(json.dumps([str(path) for path in created], indent=2))


def _load_record(record_path: str) -> Any:
    """Import ``module:Class`` and return a fresh instance of the record class."""

    module_name, _, attribute = record_path.partition(":")
    if not module_name or not attribute:
        raise click.BadParameter("Record must be given as module:Class", param_hint="--record")
    try:
        record_type = getattr(import_module(module_name), attribute)
    except (ImportError, AttributeError) as exc:
        raise click.BadParameter(f"Cannot import {record_path}: {exc}", param_hint="--record") from exc
    return record_type()


def _build_context(prefix: str, config_path: Optional[Path]) -> ConfiguratorContext:
    """Return a context with a fresh flag registry, optionally pinning the config file."""

    context = ConfiguratorContext(ClickFlagRegistry(prog_name="lib_configurator read"), env_prefix=prefix)
    if config_path is not None:
        context.environ = {**os.environ, context.config_location: str(config_path)}
    return context


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    prog_name: str = "lib_configurator",
    restore_traceback: bool = True,
) -> int:
    """Execute the CLI with shared exit handling and return the exit code."""

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        try:
            return lib_cli_exit_tools.run_cli(
                cli,
                argv=list(argv) if argv is not None else None,
                prog_name=prog_name,
            )
        except BaseException as exc:  # noqa: BLE001 - funnel through shared printers
            lib_cli_exit_tools.print_exception_message(
                trace_back=lib_cli_exit_tools.config.traceback,
                length_limit=(
                    _TRACEBACK_VERBOSE_LIMIT if lib_cli_exit_tools.config.traceback else _TRACEBACK_SUMMARY_LIMIT
                ),
            )
            return lib_cli_exit_tools.get_system_exit_code(exc)
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


if __name__ == "__main__":  # pragma: no cover - exercised via console entry point
    raise SystemExit(main(sys.argv[1:]))
