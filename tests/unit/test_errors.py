from __future__ import annotations

from lib_configurator.domain.errors import ConfigError, FileUnavailable, InvalidFormat, MissingLocation, NotFound


def test_error_hierarchy() -> None:
    assert issubclass(InvalidFormat, ConfigError)
    assert issubclass(NotFound, ConfigError)
    assert issubclass(MissingLocation, NotFound)
    assert issubclass(FileUnavailable, NotFound)
    for exception in (InvalidFormat(""), MissingLocation(""), FileUnavailable("")):
        assert isinstance(exception, ConfigError)
