"""Sample record and example-file helpers for ``lib_configurator``."""

from .generate import ExampleSpec, generate_examples
from .sample import DatabaseConfig, ServiceConfig

__all__ = [
    "DatabaseConfig",
    "ExampleSpec",
    "ServiceConfig",
    "generate_examples",
]
