from typing import Optional
from pydantic import BaseModel

from walkloop.models.goal import Goal
from walkloop.models.route import Coordinate


class RouteRequest(BaseModel):
    start: Coordinate
    goal: Goal
    seed: Optional[int] = None  # reproducible meander when set
