"""
Response models for route generation API
Includes route geometry and instruction points
"""
from typing import List, Optional, Dict, Any
from pydantic import BaseModel

from walkloop.models.route import Difficulty, Terrain


class LocationPoint(BaseModel):
    """Location point model"""
    lat: float
    lng: float
    instruction: Optional[str] = None


class RouteGeometry(BaseModel):
    """Route geometry information"""
    overview_polyline: Dict[str, str]  # {"points": "encoded_polyline"}


class RouteOption(BaseModel):
    """Route model with complete information"""
    id: str
    name: str
    distance: float  # Distance in meters
    duration: float  # Duration in seconds
    steps: int
    difficulty: Difficulty
    terrain: Terrain
    points: List[LocationPoint]
    geometry: RouteGeometry


class RouteResponse(BaseModel):
    """Route response model"""
    success: bool = True
    message: str = "success"
    routes: List[RouteOption] = []
    total_count: int = 0
    target_distance_m: float = 0.0
    goal: Dict[str, Any] = {}


class GoalResolution(BaseModel):
    """Target distance resolved from a goal"""
    goal: Dict[str, Any]
    target_distance_m: float
