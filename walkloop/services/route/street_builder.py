"""
Street-snapped route builder - generates a few geometric waypoints, then
stitches them together with one walking-directions lookup per edge
"""
from __future__ import annotations

import asyncio
import logging
import math
from random import Random
from typing import List, Optional, Tuple

from walkloop.config import settings
from walkloop.models.route import (
    Coordinate,
    Difficulty,
    Route,
    RoutePoint,
    Terrain,
    WalkingDirections,
)
from walkloop.services.map.map_service import MapService, MapServiceError
from walkloop.services.route.base import RouteBuilder, VariantFactory
from walkloop.services.route.geo import METERS_PER_DEGREE, offset_by_degrees

logger = logging.getLogger(__name__)

LOOP_WAYPOINTS = 6
# N, E, S, W
OUT_AND_BACK_BEARINGS = [0, math.pi / 2, math.pi, 3 * math.pi / 2]
EXPLORATION_BEARINGS = [math.pi / 4, 3 * math.pi / 4, 5 * math.pi / 4, 7 * math.pi / 4]
EXPLORATION_EXTRA_WAYPOINTS = 3

LOOP_INSTRUCTIONS = ("Start your walk", "Continue to next waypoint", "You're back at the start!")
EXPLORATION_INSTRUCTIONS = ("Start exploring", "Exploring new area", "Back to start!")


class StreetSnappedRouteBuilder(RouteBuilder):
    """
    Route builder backed by a walking-directions provider.

    Variants run concurrently; the edges of a single variant are fetched one
    after another. A failed edge is skipped, and a variant that collected
    fewer than two points yields None.
    """

    steps_per_meter = 1.3

    def __init__(self, map_service: MapService, directions_timeout_s: Optional[float] = None):
        self.map_service = map_service
        self.directions_timeout_s = (
            directions_timeout_s
            if directions_timeout_s is not None
            else settings.directions_timeout_s
        )

    async def build(self, start: Coordinate, target_distance: float) -> List[Optional[Route]]:
        """Build all street variants concurrently, in declaration order"""
        return list(
            await asyncio.gather(
                *(factory() for _, factory in self.variants(start, target_distance))
            )
        )

    def variants(
        self, start: Coordinate, target_distance: float, *, rng: Optional[Random] = None
    ) -> List[Tuple[str, VariantFactory]]:
        return [
            ("Neighborhood Loop", lambda: self.loop(start, target_distance, clockwise=True)),
            ("Counter Loop", lambda: self.loop(start, target_distance, clockwise=False)),
            ("Out & Back", lambda: self.out_and_back(start, target_distance)),
            ("Discovery Route", lambda: self.exploration(start, target_distance)),
        ]

    async def loop(
        self, start: Coordinate, target_distance: float, *, clockwise: bool = True
    ) -> Optional[Route]:
        waypoints = self.loop_waypoints(start, target_distance, clockwise=clockwise)
        return await self._stitch_loop(
            "Neighborhood Loop" if clockwise else "Counter Loop",
            waypoints,
            LOOP_INSTRUCTIONS,
            Difficulty.EASY,
            Terrain.URBAN,
        )

    async def out_and_back(self, start: Coordinate, target_distance: float) -> Optional[Route]:
        destinations = self.walkable_destinations(start, target_distance / 2.0)
        if not destinations:
            return None
        destination = destinations[0]

        points: List[RoutePoint] = []
        total_distance = 0.0
        total_duration = 0.0

        outbound = await self._fetch_segment(start, destination)
        if outbound is not None:
            last = len(outbound.points) - 1
            for i, coordinate in enumerate(outbound.points):
                instruction = (
                    "Head out on your route" if i == 0
                    else "Turnaround point reached" if i == last
                    else None
                )
                points.append(RoutePoint(coordinate=coordinate, instruction=instruction))
            total_distance += outbound.distance_m
            total_duration += outbound.travel_time_s

        inbound = await self._fetch_segment(destination, start)
        if inbound is not None:
            last = len(inbound.points) - 1
            # First point repeats the turnaround point
            for i, coordinate in enumerate(inbound.points[1:], start=1):
                instruction = "You're back where you started!" if i == last else None
                points.append(RoutePoint(coordinate=coordinate, instruction=instruction))
            total_distance += inbound.distance_m
            total_duration += inbound.travel_time_s

        return self._make_route(
            "Out & Back", points, total_distance, total_duration, Difficulty.MODERATE, Terrain.MIXED
        )

    async def exploration(self, start: Coordinate, target_distance: float) -> Optional[Route]:
        waypoints = self.exploration_waypoints(start, target_distance)
        return await self._stitch_loop(
            "Discovery Route",
            waypoints,
            EXPLORATION_INSTRUCTIONS,
            Difficulty.MODERATE,
            Terrain.PARK,
        )

    @staticmethod
    def loop_waypoints(
        center: Coordinate, target_distance: float, *, clockwise: bool = True
    ) -> List[Coordinate]:
        radius_deg = target_distance / (2.0 * math.pi) / METERS_PER_DEGREE
        waypoints = []
        for i in range(LOOP_WAYPOINTS):
            angle = i * 2.0 * math.pi / LOOP_WAYPOINTS
            waypoints.append(offset_by_degrees(center, radius_deg, angle if clockwise else -angle))
        return waypoints

    @staticmethod
    def walkable_destinations(start: Coordinate, distance: float) -> List[Coordinate]:
        distance_deg = distance / METERS_PER_DEGREE
        return [offset_by_degrees(start, distance_deg, bearing) for bearing in OUT_AND_BACK_BEARINGS]

    @staticmethod
    def exploration_waypoints(start: Coordinate, target_distance: float) -> List[Coordinate]:
        radius_deg = target_distance / (3.0 * math.pi) / METERS_PER_DEGREE
        waypoints = [start]
        for angle in EXPLORATION_BEARINGS[:EXPLORATION_EXTRA_WAYPOINTS]:
            waypoints.append(offset_by_degrees(start, radius_deg, angle))
        return waypoints

    async def _stitch_loop(
        self,
        name: str,
        waypoints: List[Coordinate],
        instructions: Tuple[str, str, str],
        difficulty: Difficulty,
        terrain: Terrain,
    ) -> Optional[Route]:
        """Join waypoints circularly (last back to first) with directions lookups"""
        start_text, waypoint_text, finish_text = instructions
        points: List[RoutePoint] = []
        total_distance = 0.0
        total_duration = 0.0
        last_leg = len(waypoints) - 1

        for i, from_point in enumerate(waypoints):
            to_point = waypoints[(i + 1) % len(waypoints)]
            segment = await self._fetch_segment(from_point, to_point)
            if segment is None:
                continue

            last_point = len(segment.points) - 1
            for j, coordinate in enumerate(segment.points):
                if i == 0 and j == 0:
                    instruction = start_text
                elif i == last_leg and j == last_point:
                    instruction = finish_text
                elif j == 0:
                    instruction = waypoint_text
                else:
                    instruction = None
                points.append(RoutePoint(coordinate=coordinate, instruction=instruction))

            total_distance += segment.distance_m
            total_duration += segment.travel_time_s

        return self._make_route(name, points, total_distance, total_duration, difficulty, terrain)

    async def _fetch_segment(
        self, origin: Coordinate, destination: Coordinate
    ) -> Optional[WalkingDirections]:
        """One directions lookup; any failure is reported as None"""
        try:
            return await asyncio.wait_for(
                self.map_service.get_walking_directions(origin, destination),
                timeout=self.directions_timeout_s,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "⏱️ Directions lookup timed out after %ss: %s -> %s",
                self.directions_timeout_s,
                _fmt(origin),
                _fmt(destination),
            )
        except MapServiceError as e:
            logger.warning(
                "⚠️ Failed to get walking directions %s -> %s: %s",
                _fmt(origin),
                _fmt(destination),
                e,
            )
        return None

    def _make_route(
        self,
        name: str,
        points: List[RoutePoint],
        distance: float,
        duration: float,
        difficulty: Difficulty,
        terrain: Terrain,
    ) -> Optional[Route]:
        if len(points) < 2:
            logger.info("🚫 %s: not enough directions data to build a route", name)
            return None
        return Route(
            name=name,
            points=points,
            estimated_distance_m=distance,
            estimated_steps=self.estimate_steps(distance),
            estimated_duration_s=duration,
            difficulty=difficulty,
            terrain=terrain,
        )


def _fmt(coordinate: Coordinate) -> str:
    return f"({coordinate.latitude:.5f}, {coordinate.longitude:.5f})"
