"""
Module: catalog.loader

Purpose:
    Load the OS catalog from a local JSON file (optionally gzipped) or
    an http(s) URL. This is the "catalog provider" the wizard consumes
    once at start-up; failures surface as a single user-facing message.

Key Functions:
    - load_os_list(): Load and parse the catalog from a source
    - save_os_list(): Write a parsed catalog back to disk (offline cache)

Key Classes:
    - CatalogError: Exception carrying the message shown on the error page

Dependencies:
    - json, gzip, urllib (std)
    - catalog.parser: parse_os_list, dump_os

Used By:
    - gui.workers.CatalogWorker: background loading
"""

from __future__ import annotations

import gzip
import json
import logging
import urllib.error
import urllib.request
from pathlib import Path
from typing import Any, List, Optional, Union

from quickget_wizard import __version__
from quickget_wizard.core.models import OperatingSystem

from .parser import ParseError, dump_os, parse_os_list

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_S = 30


class CatalogError(Exception):
    """Error loading the OS catalog."""
    pass


def is_url(source: Union[str, Path]) -> bool:
    """Check if a catalog source is an http(s) URL."""
    return isinstance(source, str) and source.startswith(("http://", "https://"))


def load_os_list(
    source: Union[str, Path],
    *,
    cache_path: Optional[Path] = None,
) -> List[OperatingSystem]:
    """
    Load the catalog.

    For URL sources, a successful download is written to ``cache_path``
    and a failed download falls back to that cache when it exists.

    Args:
        source: File path (``.json`` or ``.json.gz``) or http(s) URL
        cache_path: Optional offline copy for URL sources

    Returns:
        Operating systems in catalog order

    Raises:
        CatalogError: If the catalog cannot be read or parsed

    Example:
        >>> os_list = load_os_list(Path("workspace/quickget_data.json"))
        >>> [os.display_name for os in os_list][:2]
        ['Alpine Linux', 'Arch Linux']
    """
    if is_url(source):
        try:
            payload = _fetch(str(source))
        except CatalogError:
            if cache_path is not None and cache_path.exists():
                logger.warning(f"Catalog download failed, using cached copy at {cache_path}")
                return load_os_list(cache_path)
            raise
        os_list = _parse(payload, str(source))
        if cache_path is not None:
            save_os_list(cache_path, os_list)
        return os_list

    path = Path(source)
    return _parse(_read_file(path), str(path))


def save_os_list(path: Path, os_list: List[OperatingSystem]) -> None:
    """
    Write a catalog to disk with atomic replacement.

    Failures are logged, not raised: the cache is an optimisation.
    """
    temp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        temp_path.write_text(json.dumps([dump_os(os) for os in os_list], indent=2), encoding="utf-8")
        temp_path.replace(path)
        logger.debug(f"Cached {len(os_list)} operating systems to {path}")
    except OSError as e:
        logger.warning(f"Failed to cache catalog to {path}: {e}")
        try:
            if temp_path.exists():
                temp_path.unlink()
        except OSError:
            pass


def _parse(payload: Any, source: str) -> List[OperatingSystem]:
    try:
        os_list = parse_os_list(payload, source=source)
    except ParseError as e:
        raise CatalogError(f"Catalog is malformed: {e}") from e
    if not os_list:
        raise CatalogError(f"Catalog contains no operating systems: {source}")
    logger.info(f"Loaded {len(os_list)} operating systems from {source}")
    return os_list


def _read_file(path: Path) -> Any:
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}")
    try:
        if path.suffix == ".gz":
            with gzip.open(path, "rt", encoding="utf-8") as f:
                return json.load(f)
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise CatalogError(f"Invalid JSON in {path}: {e}") from e
    except (OSError, EOFError) as e:
        raise CatalogError(f"Failed to read catalog {path}: {e}") from e


def _fetch(url: str) -> Any:
    request = urllib.request.Request(url, headers={"User-Agent": f"quickget-wizard/{__version__}"})
    try:
        with urllib.request.urlopen(request, timeout=REQUEST_TIMEOUT_S) as resp:
            raw = resp.read()
    except urllib.error.HTTPError as e:
        raise CatalogError(f"Catalog download failed (HTTP {e.code}): {url}") from e
    except urllib.error.URLError as e:
        raise CatalogError(f"Catalog download failed: {e.reason}") from e
    except OSError as e:
        raise CatalogError(f"Catalog download failed: {e}") from e

    if url.endswith(".gz") or raw[:2] == b"\x1f\x8b":
        try:
            raw = gzip.decompress(raw)
        except OSError as e:
            raise CatalogError(f"Catalog download is not valid gzip: {e}") from e
    try:
        return json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CatalogError(f"Invalid JSON from {url}: {e}") from e
