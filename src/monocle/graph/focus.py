"""Focus session transitions between two consecutive state snapshots."""

from __future__ import annotations

from enum import Enum


class FocusTransition(Enum):
    """How the focus session changed from one snapshot to the next."""

    ENTER = "enter"
    EXIT = "exit"
    TARGET_CHANGE = "target-change"
    NONE = "none"


def is_focus_session_active(focused_node_id: str | None) -> bool:
    """A session is active whenever a non-empty node id is focused."""
    return bool(focused_node_id)


def get_focus_transition(previous: str | None, current: str | None) -> FocusTransition:
    """Classify the change from *previous* to *current* focused node id."""
    was_active = is_focus_session_active(previous)
    is_active = is_focus_session_active(current)
    if not was_active and is_active:
        return FocusTransition.ENTER
    if was_active and not is_active:
        return FocusTransition.EXIT
    if was_active and is_active and previous != current:
        return FocusTransition.TARGET_CHANGE
    return FocusTransition.NONE


def should_force_edge_flush(transition: FocusTransition) -> bool:
    """Whether the renderer must replace its edges rather than diff them."""
    return transition is not FocusTransition.NONE
