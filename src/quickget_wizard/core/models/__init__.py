"""
Core Models Package

Catalog models are frozen dataclasses owned by the catalog; the wizard
only reads them. SelectionState is the one mutable model and has a single
writer (the selection controller).

| Model | Mutability | Owner |
|-------|------------|-------|
| `Arch` | enum | - |
| `ConfigRecord` | frozen | OperatingSystem |
| `OperatingSystem` | frozen | catalog |
| `SelectionState` | mutable | SelectionController |
| `BuildSelection` | frozen | downstream build stage |
"""

from .arch import Arch
from .catalog import ConfigRecord, OperatingSystem
from .selection import (
    MIN_CPU_CORES,
    MIN_RAM_GIB,
    BuildSelection,
    SelectionField,
    SelectionState,
)

__all__ = [
    "Arch",
    "ConfigRecord",
    "OperatingSystem",
    "SelectionField",
    "SelectionState",
    "BuildSelection",
    "MIN_RAM_GIB",
    "MIN_CPU_CORES",
]
