"""
Main route generation service
Wires goal resolution, route builders and response building together
"""
import logging
from random import Random
from typing import List, Optional

from walkloop.config import settings
from walkloop.models.goal import Goal
from walkloop.models.request import RouteRequest
from walkloop.models.response import RouteResponse
from walkloop.services.map.google_map_service import GoogleMapService
from walkloop.services.map.map_service import MapService
from walkloop.services.route.base import RouteBuilder
from walkloop.services.route.generator import RouteGenerator
from walkloop.services.route.geometric_builder import GeometricRouteBuilder
from walkloop.services.route.goal_resolver import GoalDistanceResolver
from walkloop.services.route.response_builder import ResponseBuilderService
from walkloop.services.route.street_builder import StreetSnappedRouteBuilder

logger = logging.getLogger(__name__)


class RouteService:
    """
    Main route generation service

    Architecture: Goal resolution → Concurrent route variants → Response building
    """

    def __init__(
        self,
        map_service: Optional[MapService] = None,
        strategies: Optional[List[str]] = None,
    ):
        self.resolver = GoalDistanceResolver()
        self.response_builder = ResponseBuilderService()
        if strategies is None:
            strategies = settings.route_strategies
        self.generator = RouteGenerator(
            self._build_builders(map_service, strategies),
            resolver=self.resolver,
        )

    def _build_builders(
        self, map_service: Optional[MapService], strategies: List[str]
    ) -> List[RouteBuilder]:
        builders: List[RouteBuilder] = []
        for strategy in strategies:
            if strategy == "geometric":
                builders.append(GeometricRouteBuilder())
            elif strategy == "street":
                if map_service is None:
                    if not settings.google_maps_api_key:
                        logger.warning(
                            "⚠️ No Google Maps API key configured, street routes disabled"
                        )
                        continue
                    map_service = GoogleMapService()
                builders.append(StreetSnappedRouteBuilder(map_service))
            else:
                logger.warning("⚠️ Unknown route strategy %r ignored", strategy)
        return builders

    def resolve_target_distance(self, goal: Goal) -> float:
        return self.resolver.resolve(goal)

    async def generate_routes(self, request: RouteRequest) -> RouteResponse:
        """Generate routes for a start point and goal and build the API response"""
        rng = Random(request.seed) if request.seed is not None else None
        routes = await self.generator.generate_routes(request.start, request.goal, rng=rng)
        return self.response_builder.build_response(
            routes, request.goal, self.resolver.resolve(request.goal)
        )
