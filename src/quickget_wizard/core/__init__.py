"""
quickget-wizard Core Package

Shared data models for the catalog, selection and GUI packages. Nothing
in here imports Qt, so the whole selection flow is testable headless.

**DESIGN NOTES:**

1. **Catalog data is immutable**
   - ConfigRecord and OperatingSystem are frozen; selecting an OS
     snapshots its records into a new ConfigIndex.

2. **One mutable state, one writer**
   - SelectionState is rewritten in place by the constraint engine and
     the controller only. Choice lists are always derived, never edited.
"""

from .models import (
    Arch,
    BuildSelection,
    ConfigRecord,
    OperatingSystem,
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
]
