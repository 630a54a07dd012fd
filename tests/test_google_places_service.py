import json

import httpx
import pytest

from schemas.places import Coordinate, LocationBias
from services.google_places_service import GooglePlacesService


BASE_URL = "https://places.test/v1"


def _service(handler, api_key="test-key"):
    return GooglePlacesService(api_key=api_key, base_url=BASE_URL, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_search_posts_text_query_with_circle_bias():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["headers"] = request.headers
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"places": [{"id": "abc"}, {"id": "def"}, {}]})

    bias = LocationBias(center=Coordinate(latitude=40.7, longitude=-74.0), radius_meters=80000)
    ids = await _service(handler).search("food bank near me", bias)

    assert ids == ["abc", "def"]
    assert seen["url"] == f"{BASE_URL}/places:searchText"
    assert seen["headers"]["X-Goog-Api-Key"] == "test-key"
    assert seen["headers"]["X-Goog-FieldMask"] == "places.id"
    assert seen["body"]["textQuery"] == "food bank near me"
    circle = seen["body"]["locationBias"]["circle"]
    assert circle["center"] == {"latitude": 40.7, "longitude": -74.0}
    # capped at the provider maximum
    assert circle["radius"] == 50000.0


@pytest.mark.asyncio
async def test_search_without_bias_omits_location():
    bodies = []

    def handler(request):
        bodies.append(json.loads(request.content))
        return httpx.Response(200, json={})

    assert await _service(handler).search("charity near me") == []
    assert "locationBias" not in bodies[0]


@pytest.mark.asyncio
async def test_search_http_error_yields_empty_list():
    def handler(request):
        return httpx.Response(403, json={"error": {"message": "denied"}})

    assert await _service(handler).search("charity near me") == []


@pytest.mark.asyncio
async def test_disabled_without_api_key():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(200, json={})

    service = _service(handler, api_key="")
    assert await service.search("charity") == []
    assert await service.fetch_detail("abc") is None
    assert calls == []


@pytest.mark.asyncio
async def test_fetch_detail_maps_record():
    def handler(request):
        assert request.url.path == "/v1/places/abc"
        assert request.headers["X-Goog-FieldMask"] == "id,displayName,formattedAddress,location"
        return httpx.Response(200, json={
            "id": "abc-normalized",
            "displayName": {"text": "City Food Bank"},
            "formattedAddress": "1 Main St",
            "location": {"latitude": 40.71, "longitude": -74.01},
        })

    place = await _service(handler).fetch_detail("abc")

    assert place.id == "abc-normalized"
    assert place.name == "City Food Bank"
    assert place.formatted_address == "1 Main St"
    assert place.coordinate == Coordinate(latitude=40.71, longitude=-74.01)


@pytest.mark.asyncio
async def test_fetch_detail_defaults_id_and_name():
    def handler(request):
        return httpx.Response(200, json={"location": {"latitude": 1.0, "longitude": 2.0}})

    place = await _service(handler).fetch_detail("xyz")
    assert place.id == "xyz"
    assert place.name == "Unknown"
    assert place.formatted_address is None


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [
    httpx.Response(404, json={}),
    httpx.Response(200, json={"id": "abc", "displayName": {"text": "No location"}}),
    httpx.Response(200, text="not json"),
    httpx.Response(200, json={"location": {"latitude": 120.0, "longitude": 0.0}}),
])
async def test_fetch_detail_failures_yield_none(response):
    def handler(request):
        return response

    assert await _service(handler).fetch_detail("abc") is None


@pytest.mark.asyncio
async def test_transport_error_is_absorbed():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    service = _service(handler)
    assert await service.search("charity") == []
    assert await service.fetch_detail("abc") is None
