"""
Module: selection.controller

Purpose:
    Façade between user events and the selection state. Tracks which
    wizard page is active, rebuilds the index on OS selection, routes
    release/edition/arch picks through the constraint engine and assigns
    numeric / directory fields directly.

Key Classes:
    - Page: Wizard pages the controller can be on
    - SelectionController: Event handlers and read-only queries

Dependencies:
    - selection.index, selection.engine: propagation
    - selection.resources: injected host probe
    - selection.config: WizardConfig

Used By:
    - gui.main_window: page switching and catalog results
    - gui.widgets.options_page: option events
"""

from __future__ import annotations

import logging
import math
from enum import Enum, auto
from pathlib import Path
from typing import Optional, Sequence

from quickget_wizard.core.models import (
    Arch,
    BuildSelection,
    OperatingSystem,
    SelectionField,
    SelectionState,
)

from .config import WizardConfig
from .engine import refresh
from .index import ConfigIndex
from .resources import GIB, ResourceProbe

logger = logging.getLogger(__name__)


class Page(Enum):
    """Wizard page shown for the current controller state."""

    LOADING = auto()    # Catalog still loading
    SELECT_OS = auto()  # Catalog loaded, no OS chosen
    OPTIONS = auto()    # OS chosen, narrowing the configuration
    ERROR = auto()      # Catalog failed to load (terminal)


class SelectionController:
    """
    Single writer of the wizard's SelectionState.

    Every handler runs to completion (including the refresh loop)
    before returning, so callers never observe a half-propagated state.

    Example:
        >>> controller = SelectionController(StaticResourceProbe())
        >>> controller.os_list_loaded(os_list)
        >>> controller.select_os(alpine)
        >>> controller.select_arch(Arch.aarch64)
        >>> controller.state.release_choices
        ('3.18',)
    """

    def __init__(
        self,
        probe: ResourceProbe,
        config: Optional[WizardConfig] = None,
        *,
        output_directory: Optional[Path] = None,
        host_arch: Optional[Arch] = None,
    ):
        """
        Initialize controller.

        Args:
            probe: Host resource queries (RAM / CPU cores)
            config: Bounds and defaults; WizardConfig() when omitted
            output_directory: Initial target directory; process cwd when omitted
            host_arch: Arch used for preselection; detected when omitted
        """
        self.probe = probe
        self.config = config or WizardConfig()
        self._host_arch = host_arch or Arch.host()
        self._output_directory = output_directory or Path.cwd()

        self._page = Page.LOADING
        self._error_message: Optional[str] = None
        self._os_list: tuple[OperatingSystem, ...] = ()
        self._selected_os: Optional[OperatingSystem] = None
        self._index: Optional[ConfigIndex] = None
        self._state: Optional[SelectionState] = None

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def page(self) -> Page:
        return self._page

    @property
    def error_message(self) -> Optional[str]:
        return self._error_message

    @property
    def os_list(self) -> tuple[OperatingSystem, ...]:
        return self._os_list

    @property
    def selected_os(self) -> Optional[OperatingSystem]:
        return self._selected_os

    @property
    def index(self) -> Optional[ConfigIndex]:
        return self._index

    @property
    def state(self) -> Optional[SelectionState]:
        return self._state

    @property
    def output_directory(self) -> Path:
        return self._output_directory

    @property
    def is_complete(self) -> bool:
        return self._state is not None and self._state.is_complete

    def build_selection(self) -> Optional[BuildSelection]:
        """
        The complete selection for the build stage.

        Returns:
            BuildSelection, or None while release/edition/arch are incomplete
        """
        if self._state is None or self._selected_os is None or not self._state.is_complete:
            return None
        state = self._state
        return BuildSelection(
            os=self._selected_os,
            release=state.release,
            edition=state.edition,
            arch=state.arch,
            cpu_cores=state.cpu_cores,
            ram_gib=state.ram_gib,
            output_directory=state.output_directory,
        )

    def ram_bounds(self) -> tuple[float, float]:
        """(min, max) RAM in GiB for the RAM slider."""
        total = self.probe.total_ram_bytes() / GIB
        return self.config.min_ram_gib, max(self.config.min_ram_gib, total)

    def cpu_core_bounds(self) -> tuple[int, int]:
        """(min, max) CPU cores for the core slider."""
        return self.config.min_cpu_cores, max(self.config.min_cpu_cores, self.probe.total_cpu_cores())

    # ─────────────────────────────────────────────────────────────────────────
    # Catalog events
    # ─────────────────────────────────────────────────────────────────────────

    def os_list_loaded(self, os_list: Sequence[OperatingSystem]) -> None:
        """Catalog arrived; show the OS list."""
        self._os_list = tuple(os_list)
        self._error_message = None
        self._page = Page.SELECT_OS
        logger.info(f"Catalog ready with {len(self._os_list)} operating systems")

    def os_list_failed(self, message: str) -> None:
        """Catalog failed; the message is shown verbatim and not retried."""
        self._error_message = message
        self._page = Page.ERROR
        logger.error(f"Catalog failed to load: {message}")

    # ─────────────────────────────────────────────────────────────────────────
    # Selection events
    # ─────────────────────────────────────────────────────────────────────────

    def select_os(self, os: OperatingSystem) -> SelectionState:
        """
        Start a fresh selection for ``os``.

        Replaces index and state atomically; nothing but the output
        directory carries over from the previous OS.
        """
        index = ConfigIndex(os.releases)
        state = SelectionState(
            cpu_cores=self._default_cpu_cores(),
            ram_gib=self._default_ram_gib(),
            output_directory=self._output_directory,
        )
        refresh(index, state)

        if self.config.preselect_host_arch and self._host_arch in state.arch_choices:
            state.arch = self._host_arch
            refresh(index, state, SelectionField.ARCH)

        self._selected_os = os
        self._index = index
        self._state = state
        self._page = Page.OPTIONS
        logger.info(
            f"Selected {os.display_name}: {len(index)} configs, "
            f"{len(state.release_choices)} releases, arches {[a.value for a in state.arch_choices]}"
        )
        return state

    def back_to_os_list(self) -> None:
        """Discard the current selection and return to the OS list."""
        self._selected_os = None
        self._index = None
        self._state = None
        self._page = Page.SELECT_OS

    def select_release(self, release: Optional[str]) -> Optional[SelectionState]:
        return self._select(SelectionField.RELEASE, release)

    def select_edition(self, edition: Optional[str]) -> Optional[SelectionState]:
        return self._select(SelectionField.EDITION, edition)

    def select_arch(self, arch: Optional[Arch]) -> Optional[SelectionState]:
        return self._select(SelectionField.ARCH, arch)

    def _select(self, which: SelectionField, value) -> Optional[SelectionState]:
        """Set one catalog field, then propagate with it held authoritative."""
        if self._state is None or self._index is None:
            logger.debug(f"Ignoring {which.value}={value!r}: no OS selected")
            return None
        if value is not None and not self._offers(which, value):
            logger.debug(f"Ignoring {which.value}={value!r}: not offered by {self._selected_os.name}")
            return self._state
        setattr(self._state, which.value, value)
        # Clearing a field has nothing to hold fixed
        refresh(self._index, self._state, which if value is not None else None)
        return self._state

    def _offers(self, which: SelectionField, value) -> bool:
        if which is SelectionField.RELEASE:
            return self._index.has_release(value)
        if which is SelectionField.EDITION:
            return self._index.has_edition(value)
        return self._index.has_arch(value)

    # ─────────────────────────────────────────────────────────────────────────
    # Independent fields (no propagation)
    # ─────────────────────────────────────────────────────────────────────────

    def set_ram(self, ram_gib: float) -> None:
        """
        Set guest RAM in GiB.

        Raises:
            ValueError: If not finite or below the configured minimum
        """
        if not math.isfinite(ram_gib) or ram_gib < self.config.min_ram_gib:
            raise ValueError(f"RAM must be at least {self.config.min_ram_gib} GiB: {ram_gib}")
        if self._state is None:
            logger.debug("Ignoring RAM change: no OS selected")
            return
        self._state.ram_gib = float(ram_gib)

    def set_cpu_cores(self, cpu_cores: int) -> None:
        """
        Set guest CPU cores.

        Raises:
            ValueError: If below the configured minimum
        """
        if cpu_cores < self.config.min_cpu_cores:
            raise ValueError(f"CPU cores must be at least {self.config.min_cpu_cores}: {cpu_cores}")
        if self._state is None:
            logger.debug("Ignoring CPU core change: no OS selected")
            return
        self._state.cpu_cores = int(cpu_cores)

    def set_output_directory(self, directory: Optional[Path]) -> None:
        """
        Apply a directory picker result.

        None means the picker was cancelled and leaves everything as is.
        Existence is not checked here.
        """
        if directory is None:
            logger.debug("Directory picker cancelled")
            return
        self._output_directory = Path(directory)
        if self._state is not None:
            self._state.output_directory = self._output_directory
        logger.info(f"Output directory: {self._output_directory}")

    # ─────────────────────────────────────────────────────────────────────────
    # Defaults
    # ─────────────────────────────────────────────────────────────────────────

    def _default_ram_gib(self) -> float:
        low, high = self.ram_bounds()
        recommended = self.probe.recommended_ram_bytes() / GIB
        return min(max(recommended, low), high)

    def _default_cpu_cores(self) -> int:
        low, high = self.cpu_core_bounds()
        return min(max(self.probe.recommended_cpu_cores(), low), high)
