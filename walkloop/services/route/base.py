from __future__ import annotations

from abc import ABC, abstractmethod
from random import Random
from typing import Awaitable, Callable, List, Optional, Tuple

from walkloop.models.route import Coordinate, Route

# Zero-argument factory that starts one variant when called
VariantFactory = Callable[[], Awaitable[Optional[Route]]]


class RouteBuilder(ABC):
    """Builder that contributes one independent unit of work per route variant."""

    steps_per_meter: float

    @abstractmethod
    def variants(
        self, start: Coordinate, target_distance: float, *, rng: Optional[Random] = None
    ) -> List[Tuple[str, VariantFactory]]:
        """Return ``(variant name, factory)`` pairs in declaration order."""

    def estimate_steps(self, distance_m: float) -> int:
        return int(distance_m * self.steps_per_meter)
