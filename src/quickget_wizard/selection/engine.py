"""
Module: selection.engine

Purpose:
    Constraint propagation between release, edition and arch. After any
    of the three changes, every choice list is recomputed from the index
    and selections that are no longer reachable are cleared, cascading
    until a fixed point.

Key Functions:
    - refresh(): Run the propagation loop on a SelectionState in place
    - invariant_violations(): Report broken selection invariants

Dependencies:
    - selection.index: ConfigIndex
    - quickget_wizard.core.models: SelectionField, SelectionState

Used By:
    - selection.controller: after every release/edition/arch event

Algorithm:
    Each pass recomputes, in order,
        release_choices := releases_for(arch, edition)
        edition_choices := editions_for(arch, release)
        arch_choices    := archs_for(release, edition)
    clearing a field whose value is missing from its fresh list. The
    field that just changed is authoritative and is not cleared while
    the loop runs. Passes repeat until none changes a field. Clearing is
    monotone (fields are only ever set to None), so the loop terminates;
    in practice within two or three passes.

    If the authoritative value is missing from its own list at the
    fixed point (the catalog does not offer it at all) it is cleared as
    well and the loop continues without an authority.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from quickget_wizard.core.models import Arch, SelectionField, SelectionState

from .index import ConfigIndex

logger = logging.getLogger(__name__)

_ARCH_ORDER = list(Arch)


def refresh(
    index: ConfigIndex,
    state: SelectionState,
    changed: Optional[SelectionField] = None,
) -> int:
    """
    Recompute choice lists and evict unreachable selections.

    Args:
        index: Config records of the selected OS
        state: Selection to rewrite in place
        changed: Field the user just set (held fixed), or None

    Returns:
        Number of passes run (at least 1)

    Example:
        >>> state.release = "edge"
        >>> state.arch = Arch.aarch64
        >>> refresh(index, state, SelectionField.ARCH)
        2
        >>> state.release_choices
        ('3.18',)
    """
    authority = changed
    passes = 0
    while True:
        passes += 1
        before = state.selection_key()
        _run_pass(index, state, authority)
        if state.selection_key() != before:
            continue

        if authority is not None and not _is_reachable(state, authority):
            logger.debug(
                f"{authority.value}={state.get(authority)!r} is not offered by the catalog, clearing"
            )
            state.clear(authority)
            authority = None
            continue

        logger.debug(
            f"Refresh converged after {passes} pass(es): release={state.release!r} "
            f"edition={state.edition!r} arch={state.arch}"
        )
        return passes


def _run_pass(
    index: ConfigIndex,
    state: SelectionState,
    hold: Optional[SelectionField],
) -> None:
    state.release_choices = index.releases_for(state.arch, state.edition)
    if hold is not SelectionField.RELEASE and not _is_reachable(state, SelectionField.RELEASE):
        logger.debug(f"Clearing release {state.release!r}: not in {state.release_choices}")
        state.release = None

    state.edition_choices = index.editions_for(state.arch, state.release)
    if hold is not SelectionField.EDITION and not _is_reachable(state, SelectionField.EDITION):
        logger.debug(f"Clearing edition {state.edition!r}: not in {state.edition_choices}")
        state.edition = None

    state.arch_choices = index.archs_for(state.release, state.edition)
    if hold is not SelectionField.ARCH and not _is_reachable(state, SelectionField.ARCH):
        logger.debug(f"Clearing arch {state.arch}: not in {state.arch_choices}")
        state.arch = None


def _is_reachable(state: SelectionState, which: SelectionField) -> bool:
    """An unset field is always reachable; absent choices reach nothing."""
    value = state.get(which)
    if value is None:
        return True
    choices = state.choices(which)
    return choices is not None and value in choices


def invariant_violations(index: ConfigIndex, state: SelectionState) -> List[str]:
    """
    Check a state against the selection invariants.

    Returns:
        Human-readable violations; empty when the state is sound
    """
    problems: List[str] = []
    for which in SelectionField:
        if not _is_reachable(state, which):
            problems.append(f"{which.value}={state.get(which)!r} not in {state.choices(which)!r}")

    expected_releases = index.releases_for(state.arch, state.edition)
    if state.release_choices != expected_releases:
        problems.append(f"release_choices {state.release_choices!r} != {expected_releases!r}")
    expected_editions = index.editions_for(state.arch, state.release)
    if state.edition_choices != expected_editions:
        problems.append(f"edition_choices {state.edition_choices!r} != {expected_editions!r}")
    expected_archs = index.archs_for(state.release, state.edition)
    if state.arch_choices != expected_archs:
        problems.append(f"arch_choices {state.arch_choices!r} != {expected_archs!r}")
    if state.edition_choices == ():
        problems.append("edition_choices is empty instead of absent")

    order = list(state.arch_choices)
    if order != sorted(order, key=_ARCH_ORDER.index):
        problems.append(f"arch_choices out of canonical order: {order!r}")
    return problems
