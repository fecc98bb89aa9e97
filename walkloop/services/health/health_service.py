"""
Health data access - abstract device health store and a daily metrics
aggregator. Unavailable data leaves the affected metric at zero.
"""
import logging
from abc import ABC, abstractmethod
from datetime import datetime, time
from typing import Awaitable, Callable, Iterable, Optional

from walkloop.models.health import AuthorizationStatus, HealthDataType, HealthMetrics

logger = logging.getLogger(__name__)

READ_TYPES = (
    HealthDataType.STEP_COUNT,
    HealthDataType.DISTANCE_WALKING,
    HealthDataType.WALKING_SPEED,
)


class HealthDataService(ABC):
    """Health data service abstract interface (read-only counters)"""

    @abstractmethod
    async def request_authorization(self, types: Iterable[HealthDataType]) -> bool:
        pass

    @abstractmethod
    def authorization_status(self, data_type: HealthDataType) -> AuthorizationStatus:
        pass

    @abstractmethod
    async def query_cumulative_sum(
        self, data_type: HealthDataType, start: datetime, end: datetime
    ) -> Optional[float]:
        pass

    @abstractmethod
    async def query_average(
        self, data_type: HealthDataType, start: datetime, end: datetime
    ) -> Optional[float]:
        pass

    @abstractmethod
    def observe(self, data_type: HealthDataType, on_change: Callable[[], None]) -> None:
        pass


class HealthMetricsService:
    """Fetch today's step count, walking distance and average walking speed"""

    def __init__(self, health_service: HealthDataService):
        self.health_service = health_service

    async def request_access(self) -> bool:
        try:
            granted = await self.health_service.request_authorization(READ_TYPES)
        except Exception as e:
            logger.warning("⚠️ Health data authorization failed: %s", e)
            return False
        return granted and self.is_authorized()

    def is_authorized(self) -> bool:
        return all(
            self.health_service.authorization_status(data_type) == AuthorizationStatus.GRANTED
            for data_type in READ_TYPES
        )

    async def fetch_today(self, now: Optional[datetime] = None) -> HealthMetrics:
        now = now or datetime.now()
        metrics = HealthMetrics(day=now.date())
        if not self.is_authorized():
            logger.info("💡 Health data not authorized, metrics left at zero")
            return metrics

        start_of_day = datetime.combine(now.date(), time.min, tzinfo=now.tzinfo)

        steps = await self._query(
            self.health_service.query_cumulative_sum,
            HealthDataType.STEP_COUNT,
            start_of_day,
            now,
        )
        distance = await self._query(
            self.health_service.query_cumulative_sum,
            HealthDataType.DISTANCE_WALKING,
            start_of_day,
            now,
        )
        speed = await self._query(
            self.health_service.query_average,
            HealthDataType.WALKING_SPEED,
            start_of_day,
            now,
        )

        return metrics.model_copy(
            update={
                "steps": int(steps) if steps is not None else 0,
                "distance_m": distance if distance is not None else 0.0,
                "average_speed_mps": speed if speed is not None else 0.0,
            }
        )

    @staticmethod
    async def _query(
        query: Callable[[HealthDataType, datetime, datetime], Awaitable[Optional[float]]],
        data_type: HealthDataType,
        start: datetime,
        end: datetime,
    ) -> Optional[float]:
        """One health store query; a failed query counts as no data"""
        try:
            return await query(data_type, start, end)
        except Exception as e:
            logger.warning("⚠️ Health query for %s failed: %s", data_type.value, e)
            return None

    def start_live_step_tracking(self, on_update: Callable[[], None]) -> None:
        """Invoke ``on_update`` whenever the step count changes"""
        self.health_service.observe(HealthDataType.STEP_COUNT, on_update)
