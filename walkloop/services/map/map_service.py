from abc import ABC, abstractmethod
from typing import Optional

from walkloop.models.route import Coordinate, WalkingDirections


class MapServiceError(Exception):
    """Raised when the directions provider cannot be queried"""


class MapService(ABC):
    """Map service abstract interface"""

    @abstractmethod
    async def get_walking_directions(
        self, origin: Coordinate, destination: Coordinate
    ) -> Optional[WalkingDirections]:
        """Get a walking path between two coordinates

        Returns:
            WalkingDirections, or None when the provider found no route
        """
        pass
