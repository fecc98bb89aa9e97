import asyncio
import logging
from random import Random
from typing import List, Optional, Sequence

from walkloop.models.goal import Goal
from walkloop.models.route import Coordinate, Route
from walkloop.services.route.base import RouteBuilder
from walkloop.services.route.goal_resolver import GoalDistanceResolver

logger = logging.getLogger(__name__)


class RouteGenerator:
    """
    Route generation orchestrator - resolves the goal into a target distance
    and runs every variant of every configured builder concurrently
    """

    def __init__(
        self,
        builders: Sequence[RouteBuilder],
        resolver: Optional[GoalDistanceResolver] = None,
    ):
        self.builders = list(builders)
        self.resolver = resolver or GoalDistanceResolver()

    async def generate_routes(
        self, start: Coordinate, goal: Goal, *, rng: Optional[Random] = None
    ) -> List[Route]:
        """
        Generate candidate routes for a goal.

        Args:
            start: Start (and finish) coordinate
            goal: Walking goal
            rng: Optional random source for variants that sample randomness

        Returns:
            Routes in builder declaration order. Variants that failed or
            produced no route are omitted; the list may be empty.
        """
        target_distance = self.resolver.resolve(goal)
        logger.info(
            "🗺️ Generating routes for %s %s (target %.1fm)",
            goal.value,
            goal.kind.value,
            target_distance,
        )

        variants = [
            variant
            for builder in self.builders
            for variant in builder.variants(start, target_distance, rng=rng)
        ]

        # Results are collected positionally, not in completion order
        results = await asyncio.gather(
            *(factory() for _, factory in variants), return_exceptions=True
        )

        routes: List[Route] = []
        for (name, _), result in zip(variants, results):
            if isinstance(result, Exception):
                logger.warning("❌ Error generating %s: %s", name, result)
                continue
            if isinstance(result, BaseException):
                raise result
            if result is None or len(result.points) < 2:
                logger.info("   ⚠️ No route for %s", name)
                continue

            logger.info(
                "   ✅ %s: %.0fm, %.0fs, %d steps",
                name,
                result.estimated_distance_m,
                result.estimated_duration_s,
                result.estimated_steps,
            )
            routes.append(result)

        logger.info("🎉 Generated %d of %d routes", len(routes), len(variants))
        return routes
