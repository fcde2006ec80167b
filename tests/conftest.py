import os
import sys
from pathlib import Path

import pytest

# Widget tests run headless
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Add src to sys.path so we can import quickget_wizard
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from quickget_wizard.core.models import Arch, ConfigRecord, OperatingSystem
from quickget_wizard.selection import GIB, StaticResourceProbe


# Common test fixtures
@pytest.fixture
def alpine() -> OperatingSystem:
    """Alpine: no editions, 'edge' only on x86_64."""
    return OperatingSystem(
        name="alpine",
        display_name="Alpine Linux",
        homepage="https://alpinelinux.org/",
        releases=(
            ConfigRecord("3.18", None, Arch.x86_64),
            ConfigRecord("3.18", None, Arch.aarch64),
            ConfigRecord("edge", None, Arch.x86_64),
        ),
    )


@pytest.fixture
def ubuntu() -> OperatingSystem:
    """Catalog with editions, a release without editions and a record without a release."""
    return OperatingSystem(
        name="ubuntu",
        display_name="Ubuntu",
        releases=(
            ConfigRecord("22.04", "desktop", Arch.x86_64),
            ConfigRecord("22.04", "server", Arch.x86_64),
            ConfigRecord("22.04", "server", Arch.aarch64),
            ConfigRecord("24.04", "desktop", Arch.x86_64),
            ConfigRecord("24.04", "server", Arch.aarch64),
            ConfigRecord("24.04", "server", Arch.riscv64),
            ConfigRecord("daily", None, Arch.x86_64),
            ConfigRecord(None, "live", Arch.riscv64),
        ),
    )


@pytest.fixture
def os_list(alpine, ubuntu) -> list[OperatingSystem]:
    return [alpine, ubuntu]


@pytest.fixture
def probe() -> StaticResourceProbe:
    """16 GiB / 8 cores host: recommends 8 GiB and 4 cores."""
    return StaticResourceProbe(total_ram=16 * GIB, total_cores=8)
