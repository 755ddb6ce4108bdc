from __future__ import annotations

import json
from pathlib import Path

from lib_configurator.examples import ServiceConfig, generate_examples
from tests.support import SuiteConfig


def test_generate_examples_idempotent(tmp_path: Path) -> None:
    written_first = generate_examples(tmp_path)
    assert {path.name for path in written_first} == {"config.json", ".env.example"}
    # second call without force should not overwrite
    assert generate_examples(tmp_path) == []


def test_generate_examples_force_overwrites(tmp_path: Path) -> None:
    target = tmp_path / "config.json"
    generate_examples(tmp_path)
    original = target.read_text(encoding="utf-8")
    target.write_text("override", encoding="utf-8")
    generate_examples(tmp_path, force=True)
    assert target.read_text(encoding="utf-8") == original


def test_example_json_holds_sample_defaults(tmp_path: Path) -> None:
    generate_examples(tmp_path)
    document = json.loads((tmp_path / "config.json").read_text(encoding="utf-8"))
    assert document == {
        "host": "127.0.0.1",
        "port": 8080,
        "debug": False,
        "database": {"url": "sqlite:///service.db", "pool_size": 5},
    }


def test_example_env_file_lists_prefixed_variables(tmp_path: Path) -> None:
    generate_examples(tmp_path, record=SuiteConfig(), prefix="DEMO_")
    lines = (tmp_path / ".env.example").read_text(encoding="utf-8").splitlines()
    assert "DEMO_CONFIG=config.json" in lines
    assert "# DEMO_ENV_FOO=foo" in lines
    assert "# DEMO_ENV_BAR=1234" in lines
    assert "# DEMO_ENV_BAZ=true" in lines
    assert "# DEMO_ENV_TEST_FOO=test-foo" in lines
    assert not any("DOESNT_MATTER" in line for line in lines)


def test_sample_record_starts_empty() -> None:
    assert ServiceConfig().port == 0
