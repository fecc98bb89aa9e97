import asyncio
import json

import httpx
import polyline
import pytest

from walkloop.models.route import Coordinate
from walkloop.services.map.api_counter import APICounter
from walkloop.services.map.google_map_service import GoogleMapService
from walkloop.services.map.map_service import MapServiceError
from walkloop.services.route.street_builder import StreetSnappedRouteBuilder

ORIGIN = Coordinate(latitude=51.6280, longitude=-0.1055)
DESTINATION = Coordinate(latitude=51.6323, longitude=-0.1055)
PATH = [(51.628, -0.1055), (51.63, -0.1052), (51.6323, -0.1055)]


def _service(handler, counter=None):
    return GoogleMapService(
        api_key="test-key",
        counter=counter or APICounter(max_calls_per_day=10),
        transport=httpx.MockTransport(handler),
    )


def test_requires_api_key():
    with pytest.raises(ValueError):
        GoogleMapService(api_key="")


def test_walking_directions_are_decoded():
    received = []

    def handler(request: httpx.Request) -> httpx.Response:
        received.append(request)
        return httpx.Response(
            200,
            json={
                "routes": [
                    {
                        "distanceMeters": 512,
                        "duration": "366s",
                        "polyline": {"encodedPolyline": polyline.encode(PATH)},
                    }
                ]
            },
        )

    counter = APICounter(max_calls_per_day=10)
    directions = asyncio.run(
        _service(handler, counter).get_walking_directions(ORIGIN, DESTINATION)
    )

    assert [(p.latitude, p.longitude) for p in directions.points] == PATH
    assert directions.distance_m == 512.0
    assert directions.travel_time_s == 366.0
    assert counter.get_remaining_calls() == 9

    request = received[0]
    body = json.loads(request.content)
    assert request.headers["X-Goog-Api-Key"] == "test-key"
    assert body["travelMode"] == "WALK"
    assert body["origin"]["location"]["latLng"] == {"latitude": 51.628, "longitude": -0.1055}
    assert body["destination"]["location"]["latLng"]["latitude"] == 51.6323


def test_no_route_found_returns_none():
    service = _service(lambda request: httpx.Response(200, json={}))
    assert asyncio.run(service.get_walking_directions(ORIGIN, DESTINATION)) is None


@pytest.mark.parametrize(
    "status, message",
    [(429, "quota"), (403, "API key invalid"), (400, "Bad request"), (500, "Routes API error")],
)
def test_http_errors_raise_map_service_error(status, message):
    service = _service(
        lambda request: httpx.Response(status, json={"error": {"message": "nope"}})
    )
    with pytest.raises(MapServiceError, match=message):
        asyncio.run(service.get_walking_directions(ORIGIN, DESTINATION))


def test_transport_errors_raise_map_service_error():
    def handler(request):
        raise httpx.ConnectError("offline", request=request)

    with pytest.raises(MapServiceError, match="Failed to get directions"):
        asyncio.run(_service(handler).get_walking_directions(ORIGIN, DESTINATION))


def test_daily_limit_blocks_call():
    calls = []
    service = _service(
        lambda request: calls.append(request) or httpx.Response(200, json={}),
        counter=APICounter(max_calls_per_day=0),
    )
    with pytest.raises(MapServiceError, match="limit exceeded"):
        asyncio.run(service.get_walking_directions(ORIGIN, DESTINATION))
    assert calls == []


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, content=b"<html>gateway hiccup</html>"),
        httpx.Response(200, json=["not", "a", "dict"]),
        httpx.Response(200, json={"routes": [{"polyline": {"encodedPolyline": "_"}}]}),
        httpx.Response(
            200,
            json={
                "routes": [
                    {"polyline": {"encodedPolyline": polyline.encode([(0.0, 0.0), (0.0, 400.0)])}}
                ]
            },
        ),
    ],
)
def test_malformed_success_body_raises_map_service_error(response):
    service = _service(lambda request: response)
    with pytest.raises(MapServiceError, match="Malformed"):
        asyncio.run(service.get_walking_directions(ORIGIN, DESTINATION))


def test_loop_survives_one_malformed_directions_response():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) == 3:
            return httpx.Response(200, content=b"<html>gateway hiccup</html>")
        return httpx.Response(
            200,
            json={
                "routes": [
                    {
                        "distanceMeters": 100,
                        "duration": "70s",
                        "polyline": {"encodedPolyline": polyline.encode(PATH)},
                    }
                ]
            },
        )

    builder = StreetSnappedRouteBuilder(_service(handler))
    route = asyncio.run(builder.loop(ORIGIN, 3000.0))

    assert len(calls) == 6
    assert len(route.points) == 5 * len(PATH)
    assert route.estimated_distance_m == pytest.approx(500.0)
    assert route.estimated_duration_s == pytest.approx(350.0)
