"""Retrieval and parsing of the raw schools directory extract.

The extract is fetched exactly once per run, either over HTTP(S) or from a
local file, and parsed into a DataFrame whose cells are all strings. The
network connection or file handle is scoped to a ``with`` block so it is
released on every exit path. Failures are not retried: they surface as
``FetchError`` immediately.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from urllib.parse import urlparse

import pandas as pd
import requests

from ca_schools.config import SOURCE_DELIMITER, SUPPORTED_URL_SCHEMES
from ca_schools.exceptions import FetchError

from .config import FetchConfig

logger = logging.getLogger(__name__)


def is_remote_source(source: str | Path) -> bool:
    """Return True if ``source`` is an HTTP(S) URL.

    Raises
    ------
    FetchError
        If ``source`` carries a URL scheme other than http, https or file.
    """
    if isinstance(source, Path):
        return False
    scheme = urlparse(str(source)).scheme.lower()
    if scheme in SUPPORTED_URL_SCHEMES:
        return True
    # Single-letter schemes are Windows drive letters
    if scheme in ("", "file") or len(scheme) == 1:
        return False
    raise FetchError(
        f"Unsupported source scheme '{scheme}'", context={"source": str(source)}
    )


def _local_path(source: str | Path) -> Path:
    if isinstance(source, str) and source.lower().startswith("file://"):
        return Path(urlparse(source).path)
    return Path(source)


def fetch_raw_text(
    source: str | Path,
    *,
    timeout: int,
    encoding: str,
) -> str:
    """Retrieve the raw extract as text.

    Parameters
    ----------
    source : str | Path
        HTTP(S) URL, ``file://`` URL or filesystem path.
    timeout : int
        Request timeout in seconds (ignored for local files).
    encoding : str
        Text encoding of the extract.

    Returns
    -------
    str
        The decoded file content.

    Raises
    ------
    FetchError
        If the host is unreachable, the server answers with an error status,
        the file cannot be read or the content cannot be decoded.
    """
    if is_remote_source(source):
        url = str(source)
        logger.info("Downloading schools extract from %s", url)
        try:
            with requests.get(url, timeout=timeout, stream=True) as response:
                response.raise_for_status()
                payload = response.content
        except requests.RequestException as exc:
            raise FetchError(
                f"Could not download {url}: {exc}", context={"source": url}
            ) from exc
        logger.debug("Received %d bytes", len(payload))
    else:
        path = _local_path(source)
        logger.info("Reading schools extract from %s", path)
        try:
            with path.open("rb") as handle:
                payload = handle.read()
        except OSError as exc:
            raise FetchError(
                f"Could not read {path}: {exc}", context={"source": str(path)}
            ) from exc
    try:
        return payload.decode(encoding)
    except (UnicodeDecodeError, LookupError) as exc:
        raise FetchError(
            f"Could not decode extract as {encoding}: {exc}",
            context={"source": str(source), "encoding": encoding},
        ) from exc


def parse_raw_table(text: str) -> pd.DataFrame:
    """Parse tab-separated extract text into a string-typed DataFrame.

    Every cell is kept as the literal string found in the file (no NA
    coercion), so retained columns pass through the pipeline unchanged and
    leading zeros of codes survive.

    Raises
    ------
    FetchError
        If the text is empty or cannot be parsed as tab-separated data.
    """
    if not text.strip():
        raise FetchError("Schools extract is empty")
    try:
        table = pd.read_csv(
            io.StringIO(text),
            sep=SOURCE_DELIMITER,
            dtype=str,
            keep_default_na=False,
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError) as exc:
        raise FetchError(f"Malformed schools extract: {exc}") from exc
    logger.info(
        "Parsed %d rows and %d columns from extract", len(table), len(table.columns)
    )
    return table


def fetch_raw_table(
    source: str | Path | None = None, config: FetchConfig | None = None
) -> pd.DataFrame:
    """Fetch and parse the raw extract in one step.

    ``source`` overrides ``config.source``; when ``config`` is omitted it is
    loaded from the environment.

    Examples
    --------
    >>> table = fetch_raw_table("data/pubschls.txt")  # doctest: +SKIP
    >>> "CDSCode" in table.columns  # doctest: +SKIP
    True
    """
    config = config or FetchConfig()
    target = source if source is not None else config.source
    text = fetch_raw_text(target, timeout=config.timeout, encoding=config.encoding)
    return parse_raw_table(text)
