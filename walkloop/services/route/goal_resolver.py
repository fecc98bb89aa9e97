"""Convert typed walking goals into a single target path length."""
from __future__ import annotations

from walkloop.models.goal import Goal, GoalKind

STRIDE_LENGTH_M = 0.8
WALKING_SPEED_MPS = 1.4


class GoalDistanceResolver:
    """Collapse a steps / kilometers / minutes goal into meters."""

    def resolve(self, goal: Goal) -> float:
        if goal.kind == GoalKind.STEPS:
            return goal.value * STRIDE_LENGTH_M
        if goal.kind == GoalKind.DISTANCE:
            return goal.value * 1000
        return goal.value * 60 * WALKING_SPEED_MPS
