"""
Response builder service - converts generated routes to API response format
Includes encoded route geometry and instruction points
"""
from typing import List

import polyline

from walkloop.models.goal import Goal
from walkloop.models.response import LocationPoint, RouteGeometry, RouteOption, RouteResponse
from walkloop.models.route import Route


class ResponseBuilderService:
    """Response builder service - converts internal data to API response format"""

    def build_response(
        self, routes: List[Route], goal: Goal, target_distance_m: float
    ) -> RouteResponse:
        """
        Build API response from generated routes

        Args:
            routes: Routes from the route generator, already in output order
            goal: Goal the routes were generated for
            target_distance_m: Resolved target distance

        Returns:
            RouteResponse with complete route information
        """
        options = [self.build_route_option(route) for route in routes]

        if options:
            message = f"Successfully generated {len(options)} routes"
        else:
            message = "No routes could be generated for this location"

        return RouteResponse(
            success=True,
            message=message,
            routes=options,
            total_count=len(options),
            target_distance_m=target_distance_m,
            goal=goal.model_dump(mode="json"),
        )

    def build_route_option(self, route: Route) -> RouteOption:
        coordinates = [
            (point.coordinate.latitude, point.coordinate.longitude) for point in route.points
        ]
        return RouteOption(
            id=route.id,
            name=route.name,
            distance=route.estimated_distance_m,
            duration=route.estimated_duration_s,
            steps=route.estimated_steps,
            difficulty=route.difficulty,
            terrain=route.terrain,
            points=[
                LocationPoint(lat=lat, lng=lng, instruction=point.instruction)
                for (lat, lng), point in zip(coordinates, route.points)
            ],
            geometry=RouteGeometry(overview_polyline={"points": polyline.encode(coordinates)}),
        )
