import asyncio

import httpx

from quiet_hours.core.photon_client import PhotonClient, feature_to_place

FEATURE = {
    "type": "Feature",
    "geometry": {"type": "Point", "coordinates": [-74.0059, 40.7127]},
    "properties": {
        "osm_id": 2712345,
        "osm_key": "amenity",
        "osm_value": "library",
        "name": "Jefferson Market Library",
        "street": "Avenue of the Americas",
        "housenumber": "425",
        "city": "New York",
        "state": "New York",
        "country": "United States",
    },
}


def make_client(handler):
    return PhotonClient(base_url="https://photon.test", timeout=1, transport=httpx.MockTransport(handler))


def test_feature_to_place():
    place = feature_to_place(FEATURE)
    assert place["external_id"] == "2712345"
    assert place["name"] == "Jefferson Market Library"
    assert place["address"] == "Avenue of the Americas, 425, New York, New York, United States"
    assert place["latitude"] == 40.7127
    assert place["longitude"] == -74.0059
    assert place["place_type"] == "amenity"
    assert place["amenities"] == "library"
    assert place["rating"] == 0


def test_feature_to_place_fallbacks():
    place = feature_to_place({"geometry": {"coordinates": [1.5, 2.5]}, "properties": {"street": "Quiet Lane"}})
    assert place["name"] == "Quiet Lane"
    assert place["place_type"] == "Place"
    assert place["external_id"] is None

    place = feature_to_place({"geometry": {"coordinates": [1.5, 2.5]}, "properties": {}})
    assert place["name"] == "Place"
    assert place["address"] == ""


def test_search_sends_query_and_bias():
    seen = {}

    def handler(request):
        seen["url"] = request.url
        return httpx.Response(200, json={"type": "FeatureCollection", "features": [FEATURE]})

    results = asyncio.run(make_client(handler).search("library", latitude=40.7, longitude=-74.0, limit=5))

    assert [r["name"] for r in results] == ["Jefferson Market Library"]
    assert seen["url"].path == "/api/"
    assert seen["url"].params["q"] == "library"
    assert seen["url"].params["limit"] == "5"
    assert seen["url"].params["lat"] == "40.7"
    assert seen["url"].params["lon"] == "-74.0"


def test_search_without_bias_omits_coordinates():
    seen = {}

    def handler(request):
        seen["params"] = request.url.params
        return httpx.Response(200, json={"features": []})

    assert asyncio.run(make_client(handler).search("library")) == []
    assert "lat" not in seen["params"]


def test_search_error_status_returns_none():
    client = make_client(lambda request: httpx.Response(503, text="busy"))
    assert asyncio.run(client.search("library")) is None


def test_search_network_error_returns_none():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    assert asyncio.run(make_client(handler).search("library")) is None


def test_search_bad_json_returns_none():
    client = make_client(lambda request: httpx.Response(200, text="<html>"))
    assert asyncio.run(client.search("library")) is None
