import pytest
from pydantic import ValidationError

from walkloop.models.goal import Goal, GoalKind
from walkloop.services.route.goal_resolver import GoalDistanceResolver


def test_steps_goal_uses_stride_length():
    resolver = GoalDistanceResolver()
    assert resolver.resolve(Goal(kind=GoalKind.STEPS, value=5000)) == pytest.approx(4000.0)


def test_distance_goal_converts_kilometers():
    resolver = GoalDistanceResolver()
    assert resolver.resolve(Goal(kind=GoalKind.DISTANCE, value=3.0)) == pytest.approx(3000.0)


def test_time_goal_uses_walking_speed():
    resolver = GoalDistanceResolver()
    assert resolver.resolve(Goal(kind=GoalKind.TIME, value=30)) == pytest.approx(30 * 84)


@pytest.mark.parametrize("kind", list(GoalKind))
def test_resolution_is_monotonic_in_value(kind):
    resolver = GoalDistanceResolver()
    values = [0.5, 1, 2, 10, 250, 10000]
    distances = [resolver.resolve(Goal(kind=kind, value=v)) for v in values]
    assert distances == sorted(distances)
    assert len(set(distances)) == len(distances)


@pytest.mark.parametrize("value", [0, -1, -0.5])
def test_goal_rejects_non_positive_values(value):
    with pytest.raises(ValidationError):
        Goal(kind=GoalKind.STEPS, value=value)


def test_goal_is_immutable():
    goal = Goal(kind=GoalKind.DISTANCE, value=2.0)
    with pytest.raises(ValidationError):
        goal.value = 3.0
