# Route service package
from .goal_resolver import GoalDistanceResolver
from .geometric_builder import GeometricRouteBuilder
from .street_builder import StreetSnappedRouteBuilder
from .generator import RouteGenerator
from .response_builder import ResponseBuilderService


__all__ = [
    "GoalDistanceResolver",
    "GeometricRouteBuilder",
    "StreetSnappedRouteBuilder",
    "RouteGenerator",
    "ResponseBuilderService",
    ]
