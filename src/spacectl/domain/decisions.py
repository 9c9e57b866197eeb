"""Pure decision rules for the deletion workflow."""

from __future__ import annotations

from enum import StrEnum


class ClearOutcome(StrEnum):
    """Result of emptying a space before deletion."""

    CLEARED = "cleared"
    ABORTED = "aborted"


def should_delete(has_force: bool, answer: bool | None) -> bool:
    """Decide whether one space passes the "really delete?" gate.

    Force always passes. Otherwise only an explicit yes passes; no answer
    (non-interactive, nothing pre-answered) means skip.
    """
    if has_force:
        return True
    return answer is True


def needs_clear(app_count: int, instance_count: int) -> bool:
    """A space with children must be cleared before its delete call."""
    return app_count > 0 or instance_count > 0
