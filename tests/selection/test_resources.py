"""
Unit Tests for host resource probing and sizing rules.
"""

from types import SimpleNamespace

import pytest

from quickget_wizard.selection import GIB, HostResourceProbe, StaticResourceProbe, WizardConfig
from quickget_wizard.selection import resources
from quickget_wizard.selection.resources import recommended_cpu_cores, recommended_ram_bytes


class TestSizingRules:
    @pytest.mark.parametrize("host_gib,expected_gib", [
        (256, 32), (128, 32), (96, 16), (64, 16), (32, 8), (16, 8), (12, 4), (8, 4), (6, 2),
    ])
    def test_ram_tiers(self, host_gib, expected_gib):
        assert recommended_ram_bytes(host_gib * GIB) == expected_gib * GIB

    def test_ram_when_host_below_default_then_capped(self):
        assert recommended_ram_bytes(GIB) == GIB

    @pytest.mark.parametrize("host_cores,expected", [
        (64, 16), (32, 16), (24, 8), (16, 8), (12, 4), (8, 4), (6, 2), (4, 2), (2, 1), (1, 1),
    ])
    def test_core_tiers(self, host_cores, expected):
        assert recommended_cpu_cores(host_cores) == expected


class TestHostResourceProbe:
    def test_totals_when_psutil_patched_then_reported(self, monkeypatch):
        monkeypatch.setattr(resources.psutil, "virtual_memory", lambda: SimpleNamespace(total=32 * GIB))
        monkeypatch.setattr(resources.psutil, "cpu_count", lambda logical=True: 12)
        probe = HostResourceProbe()
        assert probe.total_ram_bytes() == 32 * GIB
        assert probe.total_cpu_cores() == 12
        assert probe.recommended_ram_bytes() == 8 * GIB
        assert probe.recommended_cpu_cores() == 4

    def test_cores_when_psutil_unknown_then_os_count(self, monkeypatch):
        monkeypatch.setattr(resources.psutil, "cpu_count", lambda logical=True: None)
        monkeypatch.setattr(resources.os, "cpu_count", lambda: 6)
        assert HostResourceProbe().total_cpu_cores() == 6

    def test_real_host_when_probed_then_positive(self):
        probe = HostResourceProbe()
        assert probe.total_ram_bytes() > 0
        assert probe.total_cpu_cores() >= 1


class TestStaticResourceProbe:
    def test_explicit_recommendations_win(self):
        probe = StaticResourceProbe(total_ram=64 * GIB, total_cores=32, recommended_ram=GIB, recommended_cores=3)
        assert probe.recommended_ram_bytes() == GIB
        assert probe.recommended_cpu_cores() == 3

    def test_defaults_follow_sizing_rules(self):
        probe = StaticResourceProbe()
        assert probe.recommended_ram_bytes() == 4 * GIB
        assert probe.recommended_cpu_cores() == 2


class TestWizardConfig:
    def test_defaults(self):
        config = WizardConfig()
        assert config.min_ram_gib == 0.25
        assert config.min_cpu_cores == 1
        assert config.preselect_host_arch is False

    @pytest.mark.parametrize("kwargs", [
        {"min_ram_gib": 0.1},
        {"ram_step_gib": 0},
        {"min_cpu_cores": 0},
    ])
    def test_invalid_values_raise(self, kwargs):
        with pytest.raises(ValueError):
            WizardConfig(**kwargs)
