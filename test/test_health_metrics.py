import asyncio
from datetime import date, datetime

from walkloop.models.health import AuthorizationStatus, HealthDataType
from walkloop.services.health.health_service import HealthDataService, HealthMetricsService

NOW = datetime(2025, 3, 14, 18, 30)


class StubHealthService(HealthDataService):
    def __init__(self, *, status=AuthorizationStatus.GRANTED, sums=None, averages=None):
        self.status = status
        self.sums = sums or {}
        self.averages = averages or {}
        self.queries = []
        self.observers = []
        self.requested = []

    async def request_authorization(self, types):
        self.requested.append(list(types))
        self.status = AuthorizationStatus.GRANTED
        return True

    def authorization_status(self, data_type):
        return self.status

    async def query_cumulative_sum(self, data_type, start, end):
        self.queries.append((data_type, start, end))
        return self.sums.get(data_type)

    async def query_average(self, data_type, start, end):
        self.queries.append((data_type, start, end))
        return self.averages.get(data_type)

    def observe(self, data_type, on_change):
        self.observers.append((data_type, on_change))


def test_fetch_today_queries_from_start_of_day():
    stub = StubHealthService(
        sums={HealthDataType.STEP_COUNT: 8421.0, HealthDataType.DISTANCE_WALKING: 6120.5},
        averages={HealthDataType.WALKING_SPEED: 1.32},
    )
    metrics = asyncio.run(HealthMetricsService(stub).fetch_today(NOW))

    assert metrics.steps == 8421
    assert metrics.distance_m == 6120.5
    assert metrics.average_speed_mps == 1.32
    assert metrics.day == date(2025, 3, 14)
    assert {start for _, start, _ in stub.queries} == {datetime(2025, 3, 14)}
    assert {end for _, _, end in stub.queries} == {NOW}


def test_unavailable_metric_stays_zero():
    stub = StubHealthService(sums={HealthDataType.STEP_COUNT: 120.0})
    metrics = asyncio.run(HealthMetricsService(stub).fetch_today(NOW))

    assert metrics.steps == 120
    assert metrics.distance_m == 0.0
    assert metrics.average_speed_mps == 0.0


def test_unauthorized_service_is_not_queried():
    stub = StubHealthService(status=AuthorizationStatus.DENIED)
    metrics = asyncio.run(HealthMetricsService(stub).fetch_today(NOW))

    assert stub.queries == []
    assert (metrics.steps, metrics.distance_m, metrics.average_speed_mps) == (0, 0.0, 0.0)


def test_request_access_asks_for_all_read_types():
    stub = StubHealthService(status=AuthorizationStatus.UNDETERMINED)
    granted = asyncio.run(HealthMetricsService(stub).request_access())

    assert granted is True
    assert stub.requested == [
        [
            HealthDataType.STEP_COUNT,
            HealthDataType.DISTANCE_WALKING,
            HealthDataType.WALKING_SPEED,
        ]
    ]


def test_live_tracking_observes_step_count():
    stub = StubHealthService()
    HealthMetricsService(stub).start_live_step_tracking(lambda: None)
    assert stub.observers[0][0] == HealthDataType.STEP_COUNT


class FlakyHealthService(StubHealthService):
    """Step query fails; the other metrics answer normally"""

    async def query_cumulative_sum(self, data_type, start, end):
        if data_type == HealthDataType.STEP_COUNT:
            raise RuntimeError("health store unavailable")
        return await super().query_cumulative_sum(data_type, start, end)


def test_failed_query_leaves_only_that_metric_at_zero():
    stub = FlakyHealthService(
        sums={HealthDataType.STEP_COUNT: 8421.0, HealthDataType.DISTANCE_WALKING: 6120.5},
        averages={HealthDataType.WALKING_SPEED: 1.32},
    )
    metrics = asyncio.run(HealthMetricsService(stub).fetch_today(NOW))

    assert metrics.steps == 0
    assert metrics.distance_m == 6120.5
    assert metrics.average_speed_mps == 1.32
