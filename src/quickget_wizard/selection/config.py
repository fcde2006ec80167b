"""
Module: selection.config

Purpose:
    Immutable tunables for the selection controller, validated on
    construction.

Key Classes:
    - WizardConfig: Numeric bounds and OS-selection defaults

Used By:
    - selection.controller: SelectionController
    - gui.main_window: built from SettingsStore values
"""

from __future__ import annotations

from dataclasses import dataclass

from quickget_wizard.core.models import MIN_CPU_CORES, MIN_RAM_GIB


@dataclass(frozen=True)
class WizardConfig:
    """
    Configuration for the selection controller (immutable).

    Attributes:
        min_ram_gib: Lower bound of the RAM setting
        ram_step_gib: RAM slider granularity
        min_cpu_cores: Lower bound of the CPU core setting
        preselect_host_arch: On OS selection, preselect the host's arch
            when the OS offers it

    Example:
        >>> config = WizardConfig(preselect_host_arch=True)
        >>> config.min_ram_gib
        0.25
    """

    min_ram_gib: float = MIN_RAM_GIB
    ram_step_gib: float = 0.01
    min_cpu_cores: int = MIN_CPU_CORES
    preselect_host_arch: bool = False

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if self.min_ram_gib < MIN_RAM_GIB:
            raise ValueError(f"min_ram_gib must be >= {MIN_RAM_GIB}: {self.min_ram_gib}")
        if self.ram_step_gib <= 0:
            raise ValueError(f"ram_step_gib must be positive: {self.ram_step_gib}")
        if self.min_cpu_cores < MIN_CPU_CORES:
            raise ValueError(f"min_cpu_cores must be >= {MIN_CPU_CORES}: {self.min_cpu_cores}")
