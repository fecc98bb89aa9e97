from .map_service import MapService, MapServiceError
from .google_map_service import GoogleMapService

__all__ = ["MapService", "MapServiceError", "GoogleMapService"]
