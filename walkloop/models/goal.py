"""
Walking goal models
"""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class GoalKind(str, Enum):
    """Unit the goal value is expressed in"""
    STEPS = "steps"
    DISTANCE = "distance"  # kilometers
    TIME = "time"  # minutes


class Goal(BaseModel):
    """User-specified walk target"""
    model_config = ConfigDict(frozen=True)

    kind: GoalKind
    value: float = Field(gt=0)
