"""Configuration and environment loader for the ingest stage.

This module provides FetchConfig, which loads and validates the settings
needed to retrieve the raw schools directory extract: where it lives, how
long to wait for it and how to decode it.

Role in Architecture
--------------------
- Forms the boundary between the process environment (including an
  optional project ``.env`` file) and the fetcher's typed settings.
- No fetching or parsing logic: only configuration loading and validation.

Examples
--------
>>> from ca_schools.pipeline.ingest.config import FetchConfig
>>> cfg = FetchConfig()
>>> assert cfg.timeout > 0
"""

import os
from pathlib import Path

from dotenv import load_dotenv

import ca_schools.config as _project_config
from ca_schools.config import (
    DEFAULT_FETCH_TIMEOUT,
    DEFAULT_SOURCE_ENCODING,
    DEFAULT_SOURCE_URL,
)
from ca_schools.exceptions import ConfigurationError


class FetchConfig:
    r"""Settings for retrieving the raw extract.

    Values are read from environment variables, after loading a ``.env``
    file at the project root when one exists. Explicit keyword arguments
    take precedence over both.

    Parameters
    ----------
    source : str | None, optional
        URL or local path of the extract. Falls back to ``SCHOOLS_SOURCE``
        and then ``DEFAULT_SOURCE_URL``.
    timeout : int | None, optional
        Request timeout in seconds. Falls back to ``FETCH_TIMEOUT`` and then
        ``DEFAULT_FETCH_TIMEOUT``.
    encoding : str | None, optional
        Text encoding of the extract. Falls back to ``SOURCE_ENCODING`` and
        then ``DEFAULT_SOURCE_ENCODING``.

    Attributes
    ----------
    source : str
        URL or filesystem path of the extract.
    timeout : int
        Positive request timeout in seconds.
    encoding : str
        Text encoding used to decode the extract.

    Raises
    ------
    ConfigurationError
        If the timeout is not a positive integer or the source is blank.

    Examples
    --------
    >>> import os
    >>> os.environ["FETCH_TIMEOUT"] = "5"
    >>> FetchConfig().timeout
    5
    """

    def __init__(
        self,
        source: str | None = None,
        timeout: int | None = None,
        encoding: str | None = None,
    ) -> None:
        env_path = Path(_project_config.PROJECT_ROOT) / ".env"
        if env_path.exists():
            load_dotenv(env_path, override=False)
        self.source: str = str(
            source or os.getenv("SCHOOLS_SOURCE") or DEFAULT_SOURCE_URL
        ).strip()
        self.encoding: str = (
            encoding or os.getenv("SOURCE_ENCODING") or DEFAULT_SOURCE_ENCODING
        )
        raw_timeout = (
            timeout
            if timeout is not None
            else os.getenv("FETCH_TIMEOUT", DEFAULT_FETCH_TIMEOUT)
        )
        try:
            self.timeout: int = int(raw_timeout)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(
                f"Invalid fetch timeout: {raw_timeout!r}",
                context={"timeout": str(raw_timeout)},
            ) from exc
        if self.timeout <= 0:
            raise ConfigurationError(
                "Fetch timeout must be positive", context={"timeout": self.timeout}
            )
        if not self.source:
            raise ConfigurationError("Missing source for the schools extract")

    def __repr__(self) -> str:
        return (
            f"FetchConfig(source={self.source!r}, timeout={self.timeout}, "
            f"encoding={self.encoding!r})"
        )
