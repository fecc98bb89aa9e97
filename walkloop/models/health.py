"""
Health data models for daily walking metrics
"""
from datetime import date
from enum import Enum

from pydantic import BaseModel


class HealthDataType(str, Enum):
    STEP_COUNT = "step_count"
    DISTANCE_WALKING = "distance_walking"
    WALKING_SPEED = "walking_speed"


class AuthorizationStatus(str, Enum):
    GRANTED = "granted"
    DENIED = "denied"
    UNDETERMINED = "undetermined"


class HealthMetrics(BaseModel):
    """Snapshot of today's walking activity; unavailable metrics stay zero"""
    steps: int = 0
    distance_m: float = 0.0
    average_speed_mps: float = 0.0
    day: date
