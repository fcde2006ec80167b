"""
Module: catalog.parser

Purpose:
    Parse the quickget catalog JSON into immutable OperatingSystem
    objects. Validates structure; tolerates unknown architectures by
    skipping the affected records.

Key Functions:
    - parse_os_list(): Parse the top-level OS list
    - parse_os(): Parse a single OS entry
    - parse_record(): Parse a single release/edition/arch record

Key Classes:
    - ParseError: Exception for malformed catalog data

Dependencies:
    - quickget_wizard.core.models: Arch, ConfigRecord, OperatingSystem

Used By:
    - catalog.loader: load_os_list()
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from quickget_wizard.core.models import Arch, ConfigRecord, OperatingSystem

logger = logging.getLogger(__name__)


class ParseError(Exception):
    """Error parsing catalog data."""
    pass


def parse_os_list(payload: Any, *, source: str = "catalog") -> List[OperatingSystem]:
    """
    Parse the catalog payload into operating systems.

    Entries are returned in catalog order. Duplicate OS names keep the
    first occurrence.

    Args:
        payload: Decoded JSON (a list of OS objects)
        source: Source identifier for error messages

    Returns:
        List of OperatingSystem objects

    Raises:
        ParseError: If the payload is not a list or an entry is malformed

    Example:
        >>> os_list = parse_os_list([{"name": "alpine", "pretty_name": "Alpine Linux",
        ...                           "releases": [{"release": "3.18", "arch": "x86_64"}]}])
        >>> os_list[0].releases[0].release
        '3.18'
    """
    if not isinstance(payload, list):
        raise ParseError(f"Expected a list of operating systems in {source}, got {type(payload).__name__}")

    os_list: List[OperatingSystem] = []
    seen: set[str] = set()
    for position, entry in enumerate(payload):
        os = parse_os(entry, source=f"{source}[{position}]")
        if os.name in seen:
            logger.warning(f"Duplicate OS '{os.name}' in {source}, keeping first entry")
            continue
        seen.add(os.name)
        os_list.append(os)

    logger.debug(f"Parsed {len(os_list)} operating systems from {source}")
    return os_list


def parse_os(data: Any, *, source: str = "catalog") -> OperatingSystem:
    """
    Parse one OS entry.

    Args:
        data: Dict with ``name`` and ``releases``; ``pretty_name``,
            ``homepage`` and ``description`` are optional
        source: Source identifier for error messages

    Returns:
        OperatingSystem with its records in catalog order

    Raises:
        ParseError: If required fields are missing or mistyped
    """
    if not isinstance(data, dict):
        raise ParseError(f"Expected an object in {source}, got {type(data).__name__}")

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ParseError(f"Missing OS name in {source}")

    releases_raw = data.get("releases", [])
    if not isinstance(releases_raw, list):
        raise ParseError(f"'releases' must be a list in {source} ({name})")

    records: List[ConfigRecord] = []
    for position, raw in enumerate(releases_raw):
        record = parse_record(raw, source=f"{source}.releases[{position}]")
        if record is not None:
            records.append(record)

    pretty_name = data.get("pretty_name")
    return OperatingSystem(
        name=name.strip(),
        display_name=pretty_name if isinstance(pretty_name, str) and pretty_name else name.strip(),
        homepage=_optional_str(data.get("homepage")),
        description=_optional_str(data.get("description")),
        releases=tuple(records),
    )


def parse_record(data: Any, *, source: str = "catalog") -> Optional[ConfigRecord]:
    """
    Parse one config record.

    A missing arch means x86_64. An arch outside the supported set
    skips the record (returns None) rather than failing the whole OS.

    Raises:
        ParseError: If the record is not an object or a field is mistyped
    """
    if not isinstance(data, dict):
        raise ParseError(f"Expected an object in {source}, got {type(data).__name__}")

    for key in ("release", "edition", "arch"):
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            raise ParseError(f"'{key}' must be a string in {source}: {value!r}")

    arch_raw = data.get("arch")
    if arch_raw is None:
        arch = Arch.x86_64
    else:
        arch = Arch.parse(arch_raw)
        if arch is None:
            logger.warning(f"Skipping record with unsupported arch {arch_raw!r} in {source}")
            return None

    return ConfigRecord(
        release=_optional_str(data.get("release")),
        edition=_optional_str(data.get("edition")),
        arch=arch,
    )


def _optional_str(value: Any) -> Optional[str]:
    """Normalise empty / non-string values to None."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def dump_os(os: OperatingSystem) -> Dict[str, Any]:
    """Inverse of parse_os(); used to write catalog fixtures and caches."""
    return {
        "name": os.name,
        "pretty_name": os.display_name,
        "homepage": os.homepage,
        "description": os.description,
        "releases": [
            {"release": r.release, "edition": r.edition, "arch": r.arch.value}
            for r in os.releases
        ],
    }
