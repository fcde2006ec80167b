"""
Module: core.models.catalog

Purpose:
    Immutable catalog models: one operating system and the buildable
    (release, edition, arch) combinations it offers.

Key Classes:
    - ConfigRecord: One buildable combination
    - OperatingSystem: Display data plus ordered config records

Dependencies:
    - dataclasses (std)
    - .arch.Arch

Used By:
    - catalog.parser: builds these from the catalog JSON
    - selection.index: ConfigIndex snapshots OperatingSystem.releases
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .arch import Arch


@dataclass(frozen=True)
class ConfigRecord:
    """
    One buildable configuration of an operating system.

    Several records may share a release, edition or arch; the
    combination identifies a unique build target.

    Attributes:
        release: Release name ("3.18", "edge"), None when the OS has no releases
        edition: Edition name ("gnome", "server"), None when not applicable
        arch: Guest architecture

    Example:
        >>> ConfigRecord(release="3.18", edition=None, arch=Arch.aarch64)
        ConfigRecord(release='3.18', edition=None, arch=<Arch.aarch64: 'aarch64'>)
    """

    release: Optional[str] = None
    edition: Optional[str] = None
    arch: Arch = Arch.x86_64

    def __post_init__(self) -> None:
        """Validate arch type on construction."""
        if not isinstance(self.arch, Arch):
            raise ValueError(f"arch must be an Arch, got {self.arch!r}")


@dataclass(frozen=True)
class OperatingSystem:
    """
    An operating system entry in the catalog.

    Attributes:
        name: Catalog key ("alpine")
        display_name: Human name shown in the OS list ("Alpine Linux")
        homepage: Project homepage URL, if any
        description: One-line description, if any
        releases: Ordered config records; order drives choice list order
    """

    name: str
    display_name: str
    homepage: Optional[str] = None
    description: Optional[str] = None
    releases: tuple[ConfigRecord, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("OperatingSystem.name must not be empty")
        # Accept lists from callers but store an immutable tuple
        if not isinstance(self.releases, tuple):
            object.__setattr__(self, "releases", tuple(self.releases))

    def __str__(self) -> str:
        return self.display_name
