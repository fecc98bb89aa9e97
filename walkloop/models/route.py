"""
Route models shared by the geometric and street-snapped builders
"""
from enum import Enum
from typing import List, Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class Coordinate(BaseModel):
    """WGS84 coordinate"""
    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)


class RoutePoint(BaseModel):
    """Point on a route with an optional turn instruction"""
    model_config = ConfigDict(frozen=True)

    coordinate: Coordinate
    instruction: Optional[str] = None


class Difficulty(str, Enum):
    EASY = "Easy"
    MODERATE = "Moderate"
    CHALLENGING = "Challenging"


class Terrain(str, Enum):
    URBAN = "Urban"
    PARK = "Park"
    MIXED = "Mixed"


class Route(BaseModel):
    """Closed-loop walking route with estimates"""
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=lambda: uuid4().hex)
    name: str
    points: List[RoutePoint] = Field(min_length=2)
    estimated_distance_m: float = Field(ge=0)
    estimated_steps: int = Field(ge=0)
    estimated_duration_s: float = Field(ge=0)
    difficulty: Difficulty
    terrain: Terrain


class WalkingDirections(BaseModel):
    """Successful point-to-point walking directions lookup"""
    model_config = ConfigDict(frozen=True)

    points: List[Coordinate]
    distance_m: float = 0.0
    travel_time_s: float = 0.0
