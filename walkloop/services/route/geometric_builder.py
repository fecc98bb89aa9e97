"""
Geometric route builder - idealized closed loops computed from a center point
and a target length, with no external calls
"""
from __future__ import annotations

import math
import random
from typing import List, Optional, Tuple

from walkloop.models.route import Coordinate, Difficulty, Route, RoutePoint, Terrain
from walkloop.services.route.base import RouteBuilder, VariantFactory
from walkloop.services.route.geo import (
    meters_to_lon_degrees,
    midpoint,
    make_coordinate,
    offset_coordinate,
)
from walkloop.services.route.goal_resolver import WALKING_SPEED_MPS

CIRCLE_POINTS = 20
FIGURE_EIGHT_POINTS = 16
MEANDER_SEGMENTS = 12

CIRCLE_INSTRUCTIONS = {
    0: "Start walking clockwise",
    CIRCLE_POINTS // 4: "Continue straight",
    CIRCLE_POINTS // 2: "You're halfway!",
    3 * CIRCLE_POINTS // 4: "Almost back to start",
}
SQUARE_INSTRUCTIONS = ["Head north", "Turn right", "Turn right again", "Final turn"]
FIGURE_EIGHT_INSTRUCTIONS = {
    0: "Start first loop",
    FIGURE_EIGHT_POINTS // 2: "Cross to second loop",
}
MEANDER_INSTRUCTIONS = {
    MEANDER_SEGMENTS // 3: "Enjoy the scenery",
    2 * MEANDER_SEGMENTS // 3: "Heading back",
}


class GeometricRouteBuilder(RouteBuilder):
    """
    Pure-geometry route builder.

    Every variant returns exactly one Route. Degenerate target distances
    (zero or negative) produce zero-size but well-formed routes.
    """

    steps_per_meter = 1.25

    def __init__(self, rng: Optional[random.Random] = None):
        self._rng = rng or random.Random()

    def build(
        self, center: Coordinate, target_distance: float, *, rng: Optional[random.Random] = None
    ) -> List[Route]:
        """Build circle, square, figure-eight and meander routes in that order"""
        return [
            self.circle(center, target_distance),
            self.square(center, target_distance),
            self.figure_eight(center, target_distance),
            self.meander(center, target_distance, rng=rng),
        ]

    def variants(
        self, start: Coordinate, target_distance: float, *, rng: Optional[random.Random] = None
    ) -> List[Tuple[str, VariantFactory]]:
        async def run(route_fn, **kwargs) -> Route:
            return route_fn(start, target_distance, **kwargs)

        return [
            ("Perfect Circle", lambda: run(self.circle)),
            ("City Block Loop", lambda: run(self.square)),
            ("Figure Eight", lambda: run(self.figure_eight)),
            ("Scenic Meander", lambda: run(self.meander, rng=rng)),
        ]

    def circle(self, center: Coordinate, target_distance: float) -> Route:
        radius = max(target_distance, 0.0) / (2 * math.pi)

        points: List[RoutePoint] = []
        for i in range(CIRCLE_POINTS):
            angle = i * 2.0 * math.pi / CIRCLE_POINTS
            coordinate = offset_coordinate(
                center, radius * math.cos(angle), radius * math.sin(angle)
            )
            points.append(
                RoutePoint(coordinate=coordinate, instruction=CIRCLE_INSTRUCTIONS.get(i))
            )
        points.append(points[0].model_copy())

        return self._make_route(
            "Perfect Circle", points, 2 * math.pi * radius, Difficulty.EASY, Terrain.URBAN
        )

    def square(self, center: Coordinate, target_distance: float) -> Route:
        side = max(target_distance, 0.0) / 4
        half_side = side / 2

        # NW, NE, SE, SW
        corners = [
            offset_coordinate(center, half_side, -half_side),
            offset_coordinate(center, half_side, half_side),
            offset_coordinate(center, -half_side, half_side),
            offset_coordinate(center, -half_side, -half_side),
        ]

        points: List[RoutePoint] = []
        for index, corner in enumerate(corners):
            points.append(RoutePoint(coordinate=corner, instruction=SQUARE_INSTRUCTIONS[index]))
            if index < len(corners) - 1:
                points.append(RoutePoint(coordinate=midpoint(corner, corners[index + 1])))
        points.append(points[0].model_copy())

        return self._make_route(
            "City Block Loop", points, side * 4, Difficulty.EASY, Terrain.URBAN
        )

    def figure_eight(self, center: Coordinate, target_distance: float) -> Route:
        radius = max(target_distance, 0.0) / (4 * math.pi)
        lon_shift = meters_to_lon_degrees(radius, center.latitude)
        west_center = make_coordinate(center.latitude, center.longitude - lon_shift)
        east_center = make_coordinate(center.latitude, center.longitude + lon_shift)

        points: List[RoutePoint] = []
        for i in range(FIGURE_EIGHT_POINTS):
            angle = i * 2.0 * math.pi / FIGURE_EIGHT_POINTS
            loop_center = west_center if i < FIGURE_EIGHT_POINTS // 2 else east_center
            coordinate = offset_coordinate(
                loop_center, radius * math.cos(angle), radius * math.sin(angle)
            )
            points.append(
                RoutePoint(coordinate=coordinate, instruction=FIGURE_EIGHT_INSTRUCTIONS.get(i))
            )
        points.append(points[0].model_copy())

        return self._make_route(
            "Figure Eight", points, 4 * math.pi * radius, Difficulty.MODERATE, Terrain.MIXED
        )

    def meander(
        self,
        center: Coordinate,
        target_distance: float,
        *,
        rng: Optional[random.Random] = None,
    ) -> Route:
        """
        Random walk of MEANDER_SEGMENTS headings that jumps back to the center.

        The reported distance is the target distance, not the length of the
        sampled polyline; the final leg back to center is not part of the walk.
        """
        rng = rng or self._rng
        target_distance = max(target_distance, 0.0)
        base_radius = target_distance / (MEANDER_SEGMENTS * math.pi)

        current = center
        heading = 0.0
        points = [RoutePoint(coordinate=center, instruction="Begin scenic walk")]

        for i in range(1, MEANDER_SEGMENTS):
            heading += math.pi / 3 + rng.uniform(-math.pi / 6, math.pi / 6)
            segment_length = base_radius * (0.8 + rng.uniform(0, 0.4))
            current = offset_coordinate(
                current,
                segment_length * math.cos(heading),
                segment_length * math.sin(heading),
            )
            points.append(
                RoutePoint(coordinate=current, instruction=MEANDER_INSTRUCTIONS.get(i))
            )

        points.append(RoutePoint(coordinate=center, instruction="You're back!"))

        return self._make_route(
            "Scenic Meander", points, target_distance, Difficulty.MODERATE, Terrain.PARK
        )

    def _make_route(
        self,
        name: str,
        points: List[RoutePoint],
        distance: float,
        difficulty: Difficulty,
        terrain: Terrain,
    ) -> Route:
        return Route(
            name=name,
            points=points,
            estimated_distance_m=distance,
            estimated_steps=self.estimate_steps(distance),
            estimated_duration_s=distance / WALKING_SPEED_MPS,
            difficulty=difficulty,
            terrain=terrain,
        )
