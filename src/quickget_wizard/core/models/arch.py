"""
Module: core.models.arch

Purpose:
    CPU architecture enum shared by catalog records and the selection
    state. The member order is the fixed display order of the arch
    choice list.

Key Classes:
    - Arch: x86_64 / aarch64 / riscv64

Used By:
    - core.models.catalog: ConfigRecord.arch
    - selection.index: archs_for() universe
    - selection.controller: host arch preselection
"""

from __future__ import annotations

import platform
from enum import Enum
from typing import Optional


class Arch(Enum):
    """
    Guest CPU architecture offered by the catalog.

    Iterating the enum yields the universe in its canonical order
    ``[x86_64, aarch64, riscv64]``; choice lists filter this order and
    never re-sort it.

    Example:
        >>> Arch.parse("arm64")
        <Arch.aarch64: 'aarch64'>
        >>> [a.value for a in Arch]
        ['x86_64', 'aarch64', 'riscv64']
    """

    x86_64 = "x86_64"
    aarch64 = "aarch64"
    riscv64 = "riscv64"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional[Arch]:
        """
        Map a catalog or ``uname -m`` style string to an Arch.

        Args:
            raw: Architecture name such as "amd64", "arm64" or "riscv64"

        Returns:
            Matching Arch, or None for unknown / empty input
        """
        if not raw:
            return None
        key = raw.strip().lower()
        return _ALIASES.get(key)

    @classmethod
    def host(cls) -> Arch:
        """Arch of the running machine, x86_64 when it is not one we know."""
        return cls.parse(platform.machine()) or cls.x86_64


_ALIASES = {
    "x86_64": Arch.x86_64,
    "amd64": Arch.x86_64,
    "x64": Arch.x86_64,
    "aarch64": Arch.aarch64,
    "arm64": Arch.aarch64,
    "riscv64": Arch.riscv64,
}
