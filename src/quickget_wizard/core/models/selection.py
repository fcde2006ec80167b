"""
Module: core.models.selection

Purpose:
    The wizard's selection state and the immutable tuple handed to the
    downstream build stage once the selection is complete.

Key Classes:
    - SelectionField: The three catalog-derived, mutually dependent fields
    - SelectionState: Mutable selection plus current choice lists
    - BuildSelection: Frozen, validated result of a complete selection

Dependencies:
    - dataclasses (std)
    - pathlib (std)
    - .arch.Arch, .catalog.OperatingSystem

Used By:
    - selection.engine: rewrites SelectionState in place
    - selection.controller: owns the state, produces BuildSelection

Design Note:
    SelectionState is the only mutable model in the package. Its single
    writer is the controller (directly for numeric/directory fields,
    through the engine for release/edition/arch).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

from .arch import Arch
from .catalog import OperatingSystem

MIN_RAM_GIB = 0.25
MIN_CPU_CORES = 1


class SelectionField(Enum):
    """Catalog-derived field whose change triggers a refresh."""

    RELEASE = "release"
    EDITION = "edition"
    ARCH = "arch"


@dataclass
class SelectionState:
    """
    Current selection for one operating system.

    Attributes:
        release: Chosen release, or None
        release_choices: Releases reachable under the current edition/arch
        edition: Chosen edition, or None
        edition_choices: Editions reachable under the current release/arch,
            None (absent, not empty) when no record exposes an edition
        arch: Chosen arch, or None
        arch_choices: Arches reachable under the current release/edition,
            in canonical Arch order
        cpu_cores: Guest CPU cores, independent of the catalog fields
        ram_gib: Guest RAM in GiB, independent of the catalog fields
        output_directory: Where the VM image is written

    Invariants (after every engine refresh):
        - release is None or in release_choices
        - edition is None or in a present edition_choices
        - arch is None or in arch_choices
    """

    release: Optional[str] = None
    release_choices: tuple[str, ...] = ()
    edition: Optional[str] = None
    edition_choices: Optional[tuple[str, ...]] = None
    arch: Optional[Arch] = None
    arch_choices: tuple[Arch, ...] = ()
    cpu_cores: int = MIN_CPU_CORES
    ram_gib: float = MIN_RAM_GIB
    output_directory: Path = field(default_factory=Path.cwd)

    def get(self, which: SelectionField) -> Any:
        """Current value of a catalog-derived field."""
        return getattr(self, which.value)

    def clear(self, which: SelectionField) -> None:
        """Reset a catalog-derived field to None."""
        setattr(self, which.value, None)

    def choices(self, which: SelectionField) -> Optional[tuple]:
        """Current choice list of a catalog-derived field."""
        return getattr(self, f"{which.value}_choices")

    def selection_key(self) -> tuple[Optional[str], Optional[str], Optional[Arch]]:
        """The (release, edition, arch) triple; used to detect a fixed point."""
        return (self.release, self.edition, self.arch)

    @property
    def has_editions(self) -> bool:
        """True if the edition selector should be shown."""
        return self.edition_choices is not None

    @property
    def is_complete(self) -> bool:
        """
        Check if every required catalog field is set.

        Edition is required only while an edition list is present.
        Consistency between the fields is guaranteed by the engine.
        """
        if self.release is None or self.arch is None:
            return False
        if self.edition_choices is not None and self.edition is None:
            return False
        return True


@dataclass(frozen=True)
class BuildSelection:
    """
    Complete, consistent selection consumed by the build stage (immutable).

    Attributes:
        os: Selected operating system
        release: Selected release
        edition: Selected edition, None when the OS has none for this release
        arch: Selected guest arch
        cpu_cores: Guest CPU cores
        ram_gib: Guest RAM in GiB
        output_directory: Target directory for the VM

    Example:
        >>> selection = controller.build_selection()
        >>> selection.to_dict()["arch"]
        'x86_64'
    """

    os: OperatingSystem
    release: str
    edition: Optional[str]
    arch: Arch
    cpu_cores: int
    ram_gib: float
    output_directory: Path

    def __post_init__(self) -> None:
        """Validate numeric fields on construction."""
        if self.cpu_cores < MIN_CPU_CORES:
            raise ValueError(f"cpu_cores must be >= {MIN_CPU_CORES}: {self.cpu_cores}")
        if not math.isfinite(self.ram_gib) or self.ram_gib < MIN_RAM_GIB:
            raise ValueError(f"ram_gib must be >= {MIN_RAM_GIB}: {self.ram_gib}")

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict for logging or handing to the build stage."""
        return {
            "os": self.os.name,
            "release": self.release,
            "edition": self.edition,
            "arch": self.arch.value,
            "cpu_cores": self.cpu_cores,
            "ram_gib": round(self.ram_gib, 2),
            "output_directory": str(self.output_directory),
        }

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        edition = f"/{self.edition}" if self.edition else ""
        return (
            f"BuildSelection({self.os.name} {self.release}{edition} {self.arch.value}, "
            f"cores={self.cpu_cores}, ram={self.ram_gib:.2f}GiB)"
        )
