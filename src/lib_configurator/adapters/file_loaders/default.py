"""Configuration file loader.

Purpose
-------
Locate the configuration file through an environment variable and return its
raw bytes. Decoding is left to :mod:`lib_configurator.adapters.decoders`.

Contents
--------
* :class:`ConfigFileLoader` – implementation of
  :class:`lib_configurator.application.ports.ConfigFileSource`.

System Role
-----------
Invoked by :func:`lib_configurator.core.set_from_config_file`. Both failure modes
raise subclasses of :class:`~lib_configurator.domain.errors.NotFound` so the
composition root can skip the file stage without aborting.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

from ...domain.errors import FileUnavailable, MissingLocation
from ...observability import log_debug


class ConfigFileLoader:
    """Read the file whose path is stored in an environment variable."""

    def __init__(self, *, environ: Mapping[str, str] | None = None) -> None:
        """Initialise the loader with a specific ``environ`` mapping for testability.

        Parameters
        ----------
        environ:
            Mapping to read the path variable from. Defaults to :data:`os.environ`.
        """

        self._environ = os.environ if environ is None else environ
        self.last_loaded_path: str | None = None

    def load(self, location: str) -> bytes:
        """Return the bytes of the file named by the variable *location*.

        Parameters
        ----------
        location:
            Name of the environment variable holding the file path, for
            example ``CONFIGURATOR_CONFIG``.

        Raises
        ------
        MissingLocation
            When the variable is unset or empty.
        FileUnavailable
            When the file cannot be read (missing, a directory, no permission).

        Examples
        --------
        >>> from tempfile import NamedTemporaryFile
        >>> tmp = NamedTemporaryFile(delete=False)
        >>> _ = tmp.write(b'{"foo": "abcd"}')
        >>> tmp.close()
        >>> ConfigFileLoader(environ={"APP_CONFIG": tmp.name}).load("APP_CONFIG")
        b'{"foo": "abcd"}'
        >>> Path(tmp.name).unlink()
        """

        self.last_loaded_path = None
        path = self._environ.get(location, "")
        if not path:
            log_debug("config_location_missing", stage="file", path=None, variable=location)
            raise MissingLocation(f"No valid file path detected under environment variable {location}")
        try:
            payload = Path(path).read_bytes()
        except OSError as exc:
            log_debug("config_file_unavailable", stage="file", path=path, error=str(exc))
            raise FileUnavailable(f"Configuration file {path} is not readable: {exc}") from exc
        self.last_loaded_path = path
        log_debug("config_file_read", stage="file", path=path, size=len(payload))
        return payload
