from urllib.parse import parse_qs, urlparse

import httpx
import pytest

from globetrotter.core.exceptions import UpstreamError
from globetrotter.utils.places import group_by_type, sort_by_rating

RESULTS = [
    {"place_id": "a", "name": "Cafe", "rating": 4.1, "types": ["cafe", "food"]},
    {"place_id": "b", "name": "Museum", "types": ["museum"]},
    {"place_id": "c", "name": "Park", "rating": 4.7, "types": []},
]


def test_sort_by_rating_treats_missing_as_zero():
    ordered = sort_by_rating(RESULTS)

    assert [p["place_id"] for p in ordered] == ["c", "a", "b"]


def test_group_by_first_type_or_other():
    grouped = group_by_type(RESULTS)

    assert {k: [p["place_id"] for p in v] for k, v in grouped.items()} == {
        "cafe": ["a"],
        "museum": ["b"],
        "other": ["c"],
    }


async def test_search_sends_query_and_key(fake_places):
    fake_places.responses["textsearch"] = {"status": "OK", "results": RESULTS}
    places = fake_places.client()

    results = await places.search_places("museums in paris", "museum")
    await places.aclose()

    assert results == RESULTS
    request = fake_places.requests[0]
    assert request.url.path.endswith("/textsearch/json")
    assert request.url.params["query"] == "museums in paris"
    assert request.url.params["type"] == "museum"
    assert request.url.params["key"] == "test-places-key"


async def test_zero_results_is_an_empty_list(fake_places):
    places = fake_places.client()

    assert await places.search_places("nothing here") == []
    assert "type" not in fake_places.requests[0].url.params
    await places.aclose()


@pytest.mark.parametrize("payload, provider_status", [
    ({"status": "REQUEST_DENIED"}, "REQUEST_DENIED"),
    ({"status": "OVER_QUERY_LIMIT"}, "OVER_QUERY_LIMIT"),
    (httpx.Response(503), "HTTP_503"),
    (httpx.ConnectError("boom"), "REQUEST_FAILED"),
])
async def test_provider_failures_raise_upstream_error(fake_places, payload, provider_status):
    fake_places.responses["textsearch"] = payload
    places = fake_places.client()

    with pytest.raises(UpstreamError) as excinfo:
        await places.search_places("paris")
    await places.aclose()

    assert excinfo.value.provider_status == provider_status
    assert excinfo.value.status_code == 502


async def test_details_require_ok_and_request_fixed_fields(fake_places):
    fake_places.responses["details"] = {"status": "OK", "result": {"name": "Louvre"}}
    places = fake_places.client()

    assert await places.get_place_details("abc") == {"name": "Louvre"}
    fields = fake_places.requests[0].url.params["fields"].split(",")
    assert "formatted_phone_number" in fields and "opening_hours" in fields

    fake_places.responses["details"] = {"status": "ZERO_RESULTS"}
    with pytest.raises(UpstreamError):
        await places.get_place_details("abc")
    await places.aclose()


async def test_nearby_radius_is_clamped(fake_places):
    fake_places.responses["nearbysearch"] = {"status": "OK", "results": RESULTS[:1]}
    places = fake_places.client()

    await places.get_nearby_places(48.85, 2.35, radius=80000, place_type="cafe")
    await places.aclose()

    params = fake_places.requests[0].url.params
    assert params["radius"] == "50000"
    assert params["location"] == "48.85,2.35"


def test_photo_url_needs_no_request(fake_places):
    url = fake_places.client().get_photo_url("ref-123", 800)

    parsed = urlparse(url)
    assert parsed.path.endswith("/photo")
    assert parse_qs(parsed.query) == {
        "maxwidth": ["800"],
        "photo_reference": ["ref-123"],
        "key": ["test-places-key"],
    }
    assert fake_places.requests == []


async def test_search_route_sorts_then_groups(client, fake_places):
    fake_places.responses["textsearch"] = {"status": "OK", "results": RESULTS}

    plain = await client.get("/trips/places/search", params={"query": "paris"})
    sorted_resp = await client.get("/trips/places/search", params={"query": "paris", "sortBy": "rating"})
    grouped = await client.get(
        "/trips/places/search",
        params={"query": "paris", "sortBy": "rating", "groupBy": "category"},
    )

    assert [p["place_id"] for p in plain.json()] == ["a", "b", "c"]
    assert [p["place_id"] for p in sorted_resp.json()] == ["c", "a", "b"]
    assert set(grouped.json()) == {"cafe", "museum", "other"}


async def test_search_route_requires_query(client):
    resp = await client.get("/trips/places/search")

    assert resp.status_code == 400
    assert resp.json() == {"message": "Query parameter is required"}


async def test_search_route_maps_provider_error_to_502(client, fake_places):
    fake_places.responses["textsearch"] = {"status": "INVALID_REQUEST"}

    resp = await client.get("/trips/places/search", params={"query": "paris"})

    assert resp.status_code == 502
    assert resp.json() == {"message": "Places provider error: INVALID_REQUEST"}


async def test_nearby_route_requires_coordinates(client, fake_places):
    fake_places.responses["nearbysearch"] = {"status": "OK", "results": []}

    missing = await client.get("/trips/places/nearby", params={"lat": 48.85})
    ok = await client.get("/trips/places/nearby", params={"lat": 48.85, "lng": 2.35})

    assert missing.status_code == 400
    assert ok.status_code == 200
    assert fake_places.requests[0].url.params["radius"] == "5000"


async def test_details_autocomplete_and_photo_routes(client, fake_places):
    fake_places.responses["details"] = {"status": "OK", "result": {"name": "Louvre"}}
    fake_places.responses["autocomplete"] = {"status": "OK", "predictions": [{"description": "Paris, France"}]}

    details = await client.get("/trips/places/details/abc")
    predictions = await client.get("/trips/places/autocomplete", params={"input": "Par"})
    no_input = await client.get("/trips/places/autocomplete")
    photo = await client.get("/trips/places/photo", params={"reference": "ref-1"})

    assert details.json() == {"name": "Louvre"}
    assert predictions.json() == [{"description": "Paris, France"}]
    assert no_input.status_code == 400
    assert "maxwidth=400" in photo.json()["url"]
