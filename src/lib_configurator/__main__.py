"""``python -m lib_configurator`` entry point delegating to :func:`lib_configurator.cli.main`."""

from __future__ import annotations

import sys

from .cli import main

if __name__ == "__main__":  # pragma: no cover - exercised via python -m
    raise SystemExit(main(sys.argv[1:], prog_name="python -m lib_configurator"))
