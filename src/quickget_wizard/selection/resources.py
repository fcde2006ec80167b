"""
Module: selection.resources

Purpose:
    Host resource queries used to seed and bound the RAM / CPU core
    settings. Injected into the controller so tests never read the real
    host.

Key Classes:
    - ResourceProbe: Protocol the controller depends on
    - HostResourceProbe: psutil-backed probe of the running machine
    - StaticResourceProbe: Fixed values for tests and headless use

Key Functions:
    - recommended_ram_bytes(): VM RAM sizing rule for a host total
    - recommended_cpu_cores(): VM core sizing rule for a host total

Dependencies:
    - psutil: total memory and CPU counts

Used By:
    - selection.controller: defaults at OS selection, slider bounds
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional, Protocol

import psutil

logger = logging.getLogger(__name__)

GIB = 1024 ** 3

# (host threshold GiB, VM RAM GiB), first match wins
_RAM_TIERS = ((128, 32), (64, 16), (16, 8), (8, 4))
_DEFAULT_RAM_GIB = 2

# (host threshold cores, VM cores), first match wins
_CORE_TIERS = ((32, 16), (16, 8), (8, 4), (4, 2))


class ResourceProbe(Protocol):
    """Read-only host capability; all queries are assumed to succeed."""

    def total_ram_bytes(self) -> int: ...

    def total_cpu_cores(self) -> int: ...

    def recommended_ram_bytes(self) -> int: ...

    def recommended_cpu_cores(self) -> int: ...


def recommended_ram_bytes(total_bytes: int) -> int:
    """
    VM RAM for a host with ``total_bytes`` of memory.

    Never recommends more than the host has.

    Example:
        >>> recommended_ram_bytes(32 * GIB) // GIB
        8
    """
    total_gib = total_bytes / GIB
    ram_gib = _DEFAULT_RAM_GIB
    for threshold, vm_gib in _RAM_TIERS:
        if total_gib >= threshold:
            ram_gib = vm_gib
            break
    return min(ram_gib * GIB, total_bytes)


def recommended_cpu_cores(total_cores: int) -> int:
    """
    VM cores for a host with ``total_cores`` logical cores.

    Example:
        >>> recommended_cpu_cores(12)
        4
    """
    for threshold, vm_cores in _CORE_TIERS:
        if total_cores >= threshold:
            return vm_cores
    return 1


class HostResourceProbe:
    """Probe of the running machine via psutil."""

    def total_ram_bytes(self) -> int:
        return int(psutil.virtual_memory().total)

    def total_cpu_cores(self) -> int:
        # Logical count matches what the hypervisor can hand out
        count = psutil.cpu_count(logical=True) or os.cpu_count() or 1
        return max(1, int(count))

    def recommended_ram_bytes(self) -> int:
        return recommended_ram_bytes(self.total_ram_bytes())

    def recommended_cpu_cores(self) -> int:
        return recommended_cpu_cores(self.total_cpu_cores())


@dataclass(frozen=True)
class StaticResourceProbe:
    """
    Probe with fixed answers.

    Recommended values default to the same sizing rules as the host
    probe when not given explicitly.

    Example:
        >>> probe = StaticResourceProbe(total_ram=16 * GIB, total_cores=8)
        >>> probe.recommended_cpu_cores()
        4
    """

    total_ram: int = 8 * GIB
    total_cores: int = 4
    recommended_ram: Optional[int] = None
    recommended_cores: Optional[int] = None

    def total_ram_bytes(self) -> int:
        return self.total_ram

    def total_cpu_cores(self) -> int:
        return self.total_cores

    def recommended_ram_bytes(self) -> int:
        if self.recommended_ram is not None:
            return self.recommended_ram
        return recommended_ram_bytes(self.total_ram)

    def recommended_cpu_cores(self) -> int:
        if self.recommended_cores is not None:
            return self.recommended_cores
        return recommended_cpu_cores(self.total_cores)
