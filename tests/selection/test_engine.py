"""
Unit Tests for the constraint propagation engine.

Covers the Alpine walkthrough, absent vs empty editions, narrowing then
widening, unknown values and an exhaustive sweep of short event
sequences checking the selection invariants after every step.
"""

import itertools
from dataclasses import replace

import pytest

from quickget_wizard.core.models import Arch, SelectionField, SelectionState
from quickget_wizard.selection import ConfigIndex, invariant_violations, refresh


def _fresh(index: ConfigIndex) -> SelectionState:
    state = SelectionState()
    refresh(index, state)
    return state


def _apply(index: ConfigIndex, state: SelectionState, which: SelectionField, value) -> int:
    setattr(state, which.value, value)
    return refresh(index, state, which if value is not None else None)


@pytest.fixture
def alpine_index(alpine) -> ConfigIndex:
    return ConfigIndex(alpine.releases)


@pytest.fixture
def ubuntu_index(ubuntu) -> ConfigIndex:
    return ConfigIndex(ubuntu.releases)


class TestAlpine:
    """OS without editions."""

    def test_fresh_state_when_refreshed_then_full_lists(self, alpine_index):
        state = _fresh(alpine_index)
        assert state.release_choices == ("3.18", "edge")
        assert state.edition_choices is None
        assert state.arch_choices == (Arch.x86_64, Arch.aarch64)
        assert state.selection_key() == (None, None, None)

    def test_arch_when_picked_then_release_list_narrows(self, alpine_index):
        state = _fresh(alpine_index)
        _apply(alpine_index, state, SelectionField.ARCH, Arch.aarch64)
        assert state.release_choices == ("3.18",)
        assert state.arch == Arch.aarch64

    def test_arch_when_picked_over_edge_then_release_cleared(self, alpine_index):
        state = _fresh(alpine_index)
        _apply(alpine_index, state, SelectionField.RELEASE, "edge")
        assert state.arch_choices == (Arch.x86_64,)

        state.arch = Arch.aarch64
        passes = refresh(alpine_index, state, SelectionField.ARCH)
        assert passes == 2
        assert state.release is None
        assert state.arch == Arch.aarch64
        assert state.release_choices == ("3.18",)

    def test_complete_when_release_and_arch_then_no_edition_needed(self, alpine_index):
        state = _fresh(alpine_index)
        _apply(alpine_index, state, SelectionField.RELEASE, "3.18")
        _apply(alpine_index, state, SelectionField.ARCH, Arch.aarch64)
        assert state.is_complete


class TestEditions:
    """OS with editions."""

    def test_release_without_editions_when_picked_then_edition_cleared(self, ubuntu_index):
        state = _fresh(ubuntu_index)
        _apply(ubuntu_index, state, SelectionField.RELEASE, "22.04")
        _apply(ubuntu_index, state, SelectionField.EDITION, "desktop")

        _apply(ubuntu_index, state, SelectionField.RELEASE, "daily")
        assert state.release == "daily"
        assert state.edition is None
        assert state.edition_choices is None
        assert state.arch_choices == (Arch.x86_64,)
        assert invariant_violations(ubuntu_index, state) == []

    def test_edition_without_release_when_picked_then_release_list_empty(self, ubuntu_index):
        state = _fresh(ubuntu_index)
        _apply(ubuntu_index, state, SelectionField.EDITION, "live")
        assert state.release_choices == ()
        assert state.arch_choices == (Arch.riscv64,)
        assert not state.is_complete

    def test_arch_when_picked_then_cascade_clears_both(self, ubuntu_index):
        state = _fresh(ubuntu_index)
        _apply(ubuntu_index, state, SelectionField.RELEASE, "22.04")
        _apply(ubuntu_index, state, SelectionField.EDITION, "desktop")

        _apply(ubuntu_index, state, SelectionField.ARCH, Arch.aarch64)
        assert state.selection_key() == (None, None, Arch.aarch64)
        assert state.release_choices == ("22.04", "24.04")
        assert state.edition_choices == ("server",)

    def test_consistent_picks_when_applied_then_complete(self, ubuntu_index):
        state = _fresh(ubuntu_index)
        _apply(ubuntu_index, state, SelectionField.RELEASE, "24.04")
        _apply(ubuntu_index, state, SelectionField.EDITION, "server")
        _apply(ubuntu_index, state, SelectionField.ARCH, Arch.riscv64)
        assert state.selection_key() == ("24.04", "server", Arch.riscv64)
        assert state.is_complete


class TestWidening:
    def test_clear_when_applied_then_lists_restored(self, alpine_index):
        initial = _fresh(alpine_index)
        state = replace(initial)

        _apply(alpine_index, state, SelectionField.ARCH, Arch.aarch64)
        _apply(alpine_index, state, SelectionField.RELEASE, "3.18")
        _apply(alpine_index, state, SelectionField.ARCH, None)

        assert state.release == "3.18"
        assert state.release_choices == initial.release_choices
        assert state.arch_choices == (Arch.x86_64, Arch.aarch64)

    def test_all_cleared_when_applied_then_initial_state(self, ubuntu_index):
        initial = _fresh(ubuntu_index)
        state = replace(initial)
        _apply(ubuntu_index, state, SelectionField.RELEASE, "24.04")
        _apply(ubuntu_index, state, SelectionField.EDITION, "server")
        _apply(ubuntu_index, state, SelectionField.RELEASE, None)
        _apply(ubuntu_index, state, SelectionField.EDITION, None)
        assert state == initial


class TestUnknownValues:
    def test_unknown_release_when_set_then_cleared(self, ubuntu_index):
        state = _fresh(ubuntu_index)
        _apply(ubuntu_index, state, SelectionField.RELEASE, "99.04")
        assert state.release is None
        assert invariant_violations(ubuntu_index, state) == []

    def test_edition_when_os_has_none_then_cleared(self, alpine_index):
        state = _fresh(alpine_index)
        _apply(alpine_index, state, SelectionField.EDITION, "server")
        assert state.edition is None
        assert state.edition_choices is None

    def test_arch_when_os_lacks_it_then_cleared(self, alpine_index):
        state = _fresh(alpine_index)
        _apply(alpine_index, state, SelectionField.ARCH, Arch.riscv64)
        assert state.arch is None
        assert state.release_choices == ("3.18", "edge")


class TestInvariantViolations:
    def test_stale_lists_when_checked_then_reported(self, alpine_index):
        state = SelectionState(release="edge", arch=Arch.aarch64)
        problems = invariant_violations(alpine_index, state)
        assert any(p.startswith("release='edge'") for p in problems)
        assert any(p.startswith("arch_choices") for p in problems)

    def test_empty_edition_list_when_checked_then_reported(self, alpine_index):
        state = _fresh(alpine_index)
        state.edition_choices = ()
        assert "edition_choices is empty instead of absent" in invariant_violations(alpine_index, state)


EVENTS = (
    [(SelectionField.RELEASE, v) for v in ("22.04", "24.04", "daily", "99.04", None)]
    + [(SelectionField.EDITION, v) for v in ("desktop", "server", "live", None)]
    + [(SelectionField.ARCH, v) for v in (*Arch, None)]
)


class TestEventSequences:
    """Every sequence of three events keeps the state sound."""

    @pytest.mark.parametrize("first", EVENTS, ids=lambda e: f"{e[0].value}={e[1]}")
    def test_sequences_when_applied_then_invariants_hold(self, ubuntu_index, first):
        for rest in itertools.product(EVENTS, repeat=2):
            state = _fresh(ubuntu_index)
            for which, value in (first, *rest):
                passes = _apply(ubuntu_index, state, which, value)
                assert passes <= 4
                assert invariant_violations(ubuntu_index, state) == [], (first, rest)

                settled = replace(state)
                refresh(ubuntu_index, settled)
                assert settled == state, "refresh is not idempotent"

                # A just-set value survives exactly when the catalog offers it
                if value is not None:
                    offered = value in (state.choices(which) or ())
                    assert (state.get(which) == value) == offered
