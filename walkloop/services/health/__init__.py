from .health_service import HealthDataService, HealthMetricsService

__all__ = ["HealthDataService", "HealthMetricsService"]
