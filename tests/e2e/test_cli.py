"""End-to-end CLI coverage for the commands exposed by lib_configurator.

Each command builds its own context, so the tests drive it purely through
``CliRunner`` environments and arguments.
"""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

import lib_cli_exit_tools

from lib_configurator import cli
from tests.support import write_json

ISOLATED_ENV = {"CONFIGURATOR_CONFIG": None, "CONFIGURATOR_PORT": None, "CONFIGURATOR_HOST": None}
SUPPORT_RECORD = "tests.support:SuiteConfig"


def _runner() -> CliRunner:
    """Return a fresh CLI runner so each test starts from a clean state."""

    return CliRunner()


def test_cli_flag_name_command() -> None:
    result = _runner().invoke(cli.cli, ["flag-name", "MYAPP_DATABASE_URL", "--prefix", "MYAPP_"])
    assert result.exit_code == 0
    assert result.output.strip() == "database-url"


def test_cli_read_outputs_defaults() -> None:
    result = _runner().invoke(cli.cli, ["read"], env=ISOLATED_ENV)
    assert result.exit_code == 0
    assert json.loads(result.output) == {
        "host": "127.0.0.1",
        "port": 8080,
        "debug": False,
        "database": {"url": "sqlite:///service.db", "pool_size": 5},
    }


def test_cli_read_applies_every_stage(tmp_path: Path) -> None:
    path = write_json(tmp_path, "config.json", {"host": "file-host", "database": {"pool_size": 9}})
    result = _runner().invoke(
        cli.cli,
        ["read", "--config", str(path), "--indent", "2", "--", "--port", "9000", "--debug"],
        env={**ISOLATED_ENV, "CONFIGURATOR_DATABASE_URL": "postgres://db"},
    )
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["host"] == "file-host"
    assert payload["port"] == 9000
    assert payload["debug"] is True
    assert payload["database"] == {"url": "postgres://db", "pool_size": 9}


def test_cli_read_uses_the_prefixed_config_variable(tmp_path: Path) -> None:
    path = write_json(tmp_path, "config.json", {"foo": "abcd", "test": {"test-foo": "bcde"}})
    result = _runner().invoke(
        cli.cli,
        ["read", "--record", SUPPORT_RECORD, "--prefix", "DEMO_"],
        env={"DEMO_CONFIG": str(path), "DEMO_ENV_BAR": "42"},
    )
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert payload["foo"] == "abcd"
    assert payload["bar"] == 42
    assert payload["test"] == {"test-foo": "bcde"}


def test_cli_read_rejects_unknown_record() -> None:
    result = _runner().invoke(cli.cli, ["read", "--record", "tests.support:Missing"])
    assert result.exit_code == 2
    assert "--record" in result.output


def test_cli_flags_lists_registered_flags() -> None:
    result = _runner().invoke(cli.cli, ["flags"], env={**ISOLATED_ENV, "CONFIGURATOR_PORT": "81"})
    assert result.exit_code == 0
    payload = json.loads(result.output)
    assert [entry["name"] for entry in payload] == ["host", "port", "debug", "database-url", "database-pool-size"]
    assert payload[1] == {"name": "port", "kind": "int", "default": 81}


def test_cli_generate_examples_command(tmp_path: Path) -> None:
    destination = tmp_path / "examples"
    result = _runner().invoke(cli.cli, ["generate-examples", "--destination", str(destination)])
    assert result.exit_code == 0
    created = {Path(item).name for item in json.loads(result.output)}
    assert created == {"config.json", ".env.example"}

    again = _runner().invoke(cli.cli, ["generate-examples", "--destination", str(destination)])
    assert json.loads(again.output) == []


def test_cli_info_handles_missing_metadata(monkeypatch) -> None:
    def _raise_pkg_not_found(_name: str):
        raise cli.metadata.PackageNotFoundError

    monkeypatch.setattr(cli.metadata, "metadata", _raise_pkg_not_found)
    result = _runner().invoke(cli.cli, ["info"])
    assert result.exit_code == 0
    assert "metadata unavailable" in result.output


def test_cli_main_restores_traceback_flag(monkeypatch) -> None:
    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    monkeypatch.delenv("CONFIGURATOR_CONFIG", raising=False)
    exit_code = cli.main(["--traceback", "flag-name", "CONFIGURATOR_LOG_LEVEL"], restore_traceback=True)
    assert exit_code == 0
    assert getattr(lib_cli_exit_tools.config, "traceback", False) == previous_traceback
