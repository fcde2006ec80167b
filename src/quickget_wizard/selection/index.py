"""
Module: selection.index

Purpose:
    Read-only query view over one operating system's config records.
    Answers the three filtered projections the constraint engine needs.

Key Classes:
    - ConfigIndex: releases_for / editions_for / archs_for

Dependencies:
    - quickget_wizard.core.models: Arch, ConfigRecord

Used By:
    - selection.engine: refresh()
    - selection.controller: built once per OS selection

Design Note:
    All queries are O(n) scans. Catalog entries have tens to low
    hundreds of records, so nothing is cached.
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from quickget_wizard.core.models import Arch, ConfigRecord


def _unique(values: Iterable[Optional[str]]) -> tuple[str, ...]:
    """Drop None and duplicates, keeping first-seen order."""
    seen: dict[str, None] = {}
    for value in values:
        if value is not None and value not in seen:
            seen[value] = None
    return tuple(seen)


class ConfigIndex:
    """
    Filtered / unique-projection queries over config records.

    A None constraint means "unconstrained", never "match records whose
    field is None".

    Example:
        >>> index = ConfigIndex(alpine.releases)
        >>> index.releases_for(arch=Arch.aarch64)
        ('3.18',)
        >>> index.editions_for() is None
        True
    """

    def __init__(self, records: Iterable[ConfigRecord]):
        self._records: tuple[ConfigRecord, ...] = tuple(records)

    @property
    def records(self) -> tuple[ConfigRecord, ...]:
        return self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ConfigRecord]:
        return iter(self._records)

    def _matching(
        self,
        *,
        release: Optional[str] = None,
        edition: Optional[str] = None,
        arch: Optional[Arch] = None,
    ) -> Iterator[ConfigRecord]:
        for record in self._records:
            if release is not None and record.release != release:
                continue
            if edition is not None and record.edition != edition:
                continue
            if arch is not None and record.arch != arch:
                continue
            yield record

    def releases_for(
        self, arch: Optional[Arch] = None, edition: Optional[str] = None
    ) -> tuple[str, ...]:
        """Releases of records matching arch and edition, first-seen order."""
        return _unique(r.release for r in self._matching(arch=arch, edition=edition))

    def editions_for(
        self, arch: Optional[Arch] = None, release: Optional[str] = None
    ) -> Optional[tuple[str, ...]]:
        """
        Editions of records matching arch and release.

        Returns:
            Editions in first-seen order, or None (absent) when the
            matching records expose no edition at all
        """
        editions = _unique(r.edition for r in self._matching(arch=arch, release=release))
        return editions or None

    def archs_for(
        self, release: Optional[str] = None, edition: Optional[str] = None
    ) -> tuple[Arch, ...]:
        """Arches present among matching records, in canonical Arch order."""
        present = {r.arch for r in self._matching(release=release, edition=edition)}
        return tuple(arch for arch in Arch if arch in present)

    def has_release(self, release: str) -> bool:
        return any(r.release == release for r in self._records)

    def has_edition(self, edition: str) -> bool:
        return any(r.edition == edition for r in self._records)

    def has_arch(self, arch: Arch) -> bool:
        return any(r.arch == arch for r in self._records)

    def __repr__(self) -> str:
        return f"ConfigIndex(records={len(self._records)})"
