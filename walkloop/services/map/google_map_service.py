import logging
from typing import Dict, Optional

import httpx
import polyline

from walkloop.config import settings
from walkloop.models.route import Coordinate, WalkingDirections
from walkloop.services.map.api_counter import APICounter, api_counter
from walkloop.services.map.map_service import MapService, MapServiceError

logger = logging.getLogger(__name__)


class GoogleMapService(MapService):
    """Google Routes API service implementation"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        counter: Optional[APICounter] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.google_maps_api_key
        self.counter = counter or api_counter
        self.transport = transport
        self.routes_url = "https://routes.googleapis.com/directions/v2:computeRoutes"

        if not self.api_key:
            raise ValueError("Google Maps API Key is required")

    async def get_walking_directions(
        self, origin: Coordinate, destination: Coordinate
    ) -> Optional[WalkingDirections]:
        """Get a walking path from origin to destination using Google Routes API"""
        # Check API call limit
        if not self.counter.can_make_call():
            raise MapServiceError(
                f"API call limit exceeded. Max calls per day: {self.counter.max_calls_per_day}"
            )

        request_body = self._build_routes_request_body(origin, destination)

        try:
            async with httpx.AsyncClient(transport=self.transport) as client:
                response = await client.post(
                    self.routes_url,
                    headers={
                        "Content-Type": "application/json",
                        "X-Goog-Api-Key": self.api_key,
                        "X-Goog-FieldMask": "routes.duration,routes.distanceMeters,routes.polyline.encodedPolyline",
                    },
                    json=request_body,
                    timeout=10.0,
                )
                response.raise_for_status()

                # Record API call
                self.counter.record_call()

                data = response.json()

        except ValueError as e:
            raise MapServiceError(f"Malformed Routes API response: {str(e)}") from e
        except httpx.HTTPStatusError as e:
            error_detail = ""
            try:
                error_data = e.response.json()
                error_detail = f" - {error_data.get('error', {}).get('message', '')}"
            except (ValueError, AttributeError):
                pass

            if e.response.status_code == 429:
                raise MapServiceError("API quota exceeded") from e
            elif e.response.status_code == 403:
                raise MapServiceError("API key invalid or Routes API not enabled") from e
            elif e.response.status_code == 400:
                raise MapServiceError(
                    f"Bad request (400): Invalid request parameters{error_detail}"
                ) from e
            else:
                raise MapServiceError(
                    f"Routes API error: {e.response.status_code}{error_detail}"
                ) from e
        except httpx.HTTPError as e:
            raise MapServiceError(f"Failed to get directions: {str(e)}") from e

        try:
            return self._convert_routes_response(data)
        except (ValueError, AttributeError, TypeError, IndexError) as e:
            raise MapServiceError(f"Malformed Routes API response: {str(e)}") from e

    def _build_routes_request_body(self, origin: Coordinate, destination: Coordinate) -> Dict:
        """Build request body for Google Routes API using raw coordinates"""
        return {
            "origin": {"location": {"latLng": self._lat_lng(origin)}},
            "destination": {"location": {"latLng": self._lat_lng(destination)}},
            "travelMode": "WALK",  # Fixed to walking mode
        }

    @staticmethod
    def _lat_lng(coordinate: Coordinate) -> Dict[str, float]:
        return {"latitude": coordinate.latitude, "longitude": coordinate.longitude}

    def _convert_routes_response(self, data: Dict) -> Optional[WalkingDirections]:
        """Convert Routes API response to WalkingDirections, None if no route"""
        if not data.get("routes"):
            logger.info("🚫 Routes API returned no walking route")
            return None

        route = data["routes"][0]
        encoded = route.get("polyline", {}).get("encodedPolyline", "")
        if not encoded:
            return None

        points = [
            Coordinate(latitude=lat, longitude=lng) for lat, lng in polyline.decode(encoded)
        ]

        return WalkingDirections(
            points=points,
            distance_m=float(route.get("distanceMeters", 0)),
            travel_time_s=self._parse_duration(route.get("duration", "0s")),
        )

    @staticmethod
    def _parse_duration(duration: str) -> float:
        """Parse a protobuf duration string such as "3848s" into seconds"""
        try:
            return float(str(duration).rstrip("s") or 0)
        except ValueError:
            return 0.0
