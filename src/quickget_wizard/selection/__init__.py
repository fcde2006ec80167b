"""
Module: selection

Purpose:
    Narrow one OS's config records to a single buildable configuration.
    Keeps release, edition and arch mutually consistent and holds the
    independent RAM / CPU / directory settings.

Key Functions:
    - refresh(): Fixed-point constraint propagation
    - invariant_violations(): State sanity check

Key Classes:
    - ConfigIndex: Filtered projections over config records
    - SelectionController: Event façade owning the SelectionState
    - WizardConfig: Controller bounds and defaults
    - HostResourceProbe / StaticResourceProbe: Host RAM and CPU queries

Used By:
    - quickget_wizard.gui: main window and options page
"""

from .config import WizardConfig
from .controller import Page, SelectionController
from .engine import invariant_violations, refresh
from .index import ConfigIndex
from .resources import GIB, HostResourceProbe, ResourceProbe, StaticResourceProbe

__all__ = [
    "ConfigIndex",
    "refresh",
    "invariant_violations",
    "SelectionController",
    "Page",
    "WizardConfig",
    "ResourceProbe",
    "HostResourceProbe",
    "StaticResourceProbe",
    "GIB",
]
