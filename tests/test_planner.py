from datetime import date

import httpx
import pytest

from globetrotter.main import app
from globetrotter.planner.address import UNKNOWN_COUNTRY, derive_city
from globetrotter.planner.api_client import ApiError, TripPlannerApi
from globetrotter.planner.orchestrator import PlanSelection, TripPlanner, TripPlanRequest
from globetrotter.planner.saga import CompensatingAction, PlanningError, SagaLog

LOUVRE = {
    "place_id": "louvre",
    "name": "Louvre",
    "formatted_address": "Louvre Museum, Paris, Ile-de-France, France",
    "rating": 4.7,
    "types": ["museum"],
}
EIFFEL = {
    "place_id": "eiffel",
    "name": "Eiffel Tower",
    "formatted_address": "Eiffel Tower, Paris, Ile-de-France, France",
}
COLOSSEUM = {
    "place_id": "colosseum",
    "name": "Colosseum",
    "formatted_address": "Colosseum, Rome, Lazio, Italy",
    "rating": 7,
}


@pytest.fixture
async def api(client, owner):
    planner_api = TripPlannerApi("http://test/api", transport=httpx.ASGITransport(app=app))
    await planner_api.login("ana@example.com", "correct-horse")
    yield planner_api
    await planner_api.aclose()


@pytest.fixture
def selection():
    picked = PlanSelection()
    picked.add(LOUVRE, day=2)
    picked.add(EIFFEL)
    picked.add(COLOSSEUM, day=1)
    return picked


@pytest.mark.parametrize("address, expected", [
    ("Colosseum, Rome, Lazio, Italy", ("Rome", "Italy")),
    ("Rome, Lazio, Italy", ("Rome", "Italy")),
    ("Trevi Fountain, Italy", ("Trevi Fountain", "Italy")),
    ("Somewhere", ("Spot", UNKNOWN_COUNTRY)),
    (None, ("Spot", UNKNOWN_COUNTRY)),
    (", , Italy", ("Spot", "Italy")),
])
def test_derive_city(address, expected):
    assert derive_city("Spot", address) == expected


def test_selection_deduplicates_and_orders_by_day():
    picked = PlanSelection()

    assert picked.add(LOUVRE, day=2) is True
    assert picked.add(LOUVRE, day=1) is False
    picked.add(EIFFEL)
    picked.add(COLOSSEUM, day=1)

    assert len(picked) == 3
    assert [p.place_id for p in picked.ordered()] == ["eiffel", "colosseum", "louvre"]
    assert picked.ordered()[2].day == 2


def test_selection_day_assignment():
    picked = PlanSelection()
    picked.add(LOUVRE, day=2)
    picked.add(EIFFEL, day=3)

    picked.assign_day("eiffel", 1)
    assert [p.place_id for p in picked.ordered()] == ["eiffel", "louvre"]

    picked.assign_day("louvre", 0)
    assert picked.ordered()[0].place_id == "louvre"
    assert picked.ordered()[0].day is None

    with pytest.raises(ValueError):
        picked.assign_day("louvre", -1)

    picked.remove("louvre")
    assert "louvre" not in picked


def test_selection_requires_place_id():
    with pytest.raises(ValueError):
        PlanSelection().add({"name": "Nameless"})


def test_build_stops_dates(selection):
    planner = TripPlanner(api=None, today=lambda: date(2026, 1, 15))
    city_ids = {"louvre": 1, "eiffel": 2, "colosseum": 3}

    with_start = planner.build_stops(
        selection.ordered(),
        TripPlanRequest(title="Europe", start_date=date(2026, 8, 1)),
        city_ids,
    )
    without_start = planner.build_stops(selection.ordered(), TripPlanRequest(title="Europe"), city_ids)

    assert with_start == [
        {"cityId": 2, "startDate": "2026-08-01", "endDate": "2026-08-01", "order": 1},
        {"cityId": 3, "startDate": "2026-08-01", "endDate": "2026-08-01", "order": 2},
        {"cityId": 1, "startDate": "2026-08-02", "endDate": "2026-08-02", "order": 3},
    ]
    assert {s["startDate"] for s in without_start} == {"2026-01-15"}


def test_plan_request_rejects_reversed_dates():
    with pytest.raises(ValueError):
        TripPlanRequest(title="Europe", start_date=date(2026, 8, 5), end_date=date(2026, 8, 1))


def test_saga_log_compensates_in_reverse():
    log = SagaLog()
    log.record("create_city:a", 1, CompensatingAction("delete city 1", "DELETE", "/trips/city/1"))
    log.record("create_trip", "t", CompensatingAction("delete trip t", "DELETE", "/trips/t"))
    log.record("add_stops", 2)

    assert [a.path for a in log.pending_compensations()] == ["/trips/t", "/trips/city/1"]


async def test_plan_creates_cities_trip_and_ordered_stops(api, client, selection):
    planner = TripPlanner(api)
    request = TripPlanRequest(
        title="Europe",
        description="Museums and ruins",
        start_date=date(2026, 8, 1),
        end_date=date(2026, 8, 5),
    )

    planned = await planner.plan(request, selection)

    assert planned.trip["title"] == "Europe"
    assert len(set(planned.city_ids.values())) == 3
    assert [s["order"] for s in planned.stops] == [1, 2, 3]
    assert [s["city"]["name"] for s in planned.stops] == ["Paris", "Rome", "Paris"]
    assert [s["startDate"] for s in planned.stops] == ["2026-08-01", "2026-08-01", "2026-08-02"]

    trip = await api.get_trip(planned.trip["id"])
    assert [s["cityId"] for s in trip["stops"]] == [
        planned.city_ids["eiffel"],
        planned.city_ids["colosseum"],
        planned.city_ids["louvre"],
    ]

    italy = await client.get("/trips/regions/top", params={"filter": "Italy"})
    rome = italy.json()[0]
    assert rome["popularityScore"] == 5
    assert rome["costIndex"] == 4
    paris = await client.get("/trips/regions/top", params={"filter": "France"})
    assert sorted(c["popularityScore"] for c in paris.json()) == [4.5, 4.7]


async def test_plan_with_empty_selection(api):
    with pytest.raises(ValueError):
        await TripPlanner(api).plan(TripPlanRequest(title="Nothing"), PlanSelection())


async def test_failed_stops_leave_trip_without_compensation(api, selection, monkeypatch):
    async def broken_add_stops(trip_id, stops):
        raise ApiError(500, "Internal server error")

    monkeypatch.setattr(api, "add_stops", broken_add_stops)

    with pytest.raises(PlanningError) as excinfo:
        await TripPlanner(api).plan(TripPlanRequest(title="Europe"), selection)

    error = excinfo.value
    assert error.failed_step == "add_stops"
    assert error.completed_steps == [
        "create_city:eiffel", "create_city:colosseum", "create_city:louvre", "create_trip",
    ]
    assert error.compensations[0].method == "DELETE"
    assert error.compensations[0].path.startswith("/trips/")
    assert [a.path.startswith("/trips/city/") for a in error.compensations] == [False, True, True, True]
    assert isinstance(error.cause, ApiError)

    trip_id = error.compensations[0].path.rsplit("/", 1)[-1]
    trip = await api.get_trip(trip_id)
    assert trip["stops"] == []


async def test_failed_stops_are_compensated_when_enabled(api, selection, monkeypatch):
    async def broken_add_stops(trip_id, stops):
        raise ApiError(500, "Internal server error")

    monkeypatch.setattr(api, "add_stops", broken_add_stops)

    with pytest.raises(PlanningError) as excinfo:
        await TripPlanner(api, compensate=True).plan(TripPlanRequest(title="Europe"), selection)

    error = excinfo.value
    assert error.compensation_failures == []

    trip_id = error.compensations[0].path.rsplit("/", 1)[-1]
    with pytest.raises(ApiError) as gone:
        await api.delete_trip(trip_id)
    assert gone.value.status_code == 404

    for action in error.compensations[1:]:
        with pytest.raises(ApiError) as gone:
            await api.delete_city(int(action.path.rsplit("/", 1)[-1]))
        assert gone.value.status_code == 404


async def test_city_failure_aborts_before_trip(api, client, owner, selection, monkeypatch):
    real_add_city = api.add_city
    calls = []

    async def flaky_add_city(*args, **kwargs):
        calls.append(args)
        if len(calls) == 2:
            raise ApiError(400, "City name and country are required")
        return await real_add_city(*args, **kwargs)

    monkeypatch.setattr(api, "add_city", flaky_add_city)

    with pytest.raises(PlanningError) as excinfo:
        await TripPlanner(api).plan(TripPlanRequest(title="Europe"), selection)

    assert excinfo.value.failed_step == "create_cities"
    assert excinfo.value.completed_steps == ["create_city:eiffel"]
    trips = await client.get(f"/trips/user/{owner[0]['id']}", headers=owner[1])
    assert trips.json() == []


async def test_compensation_failures_are_collected(api, selection, monkeypatch):
    real_request = api.request

    async def no_city_deletes(method, path, **kwargs):
        if method == "DELETE" and path.startswith("/trips/city/"):
            raise ApiError(409, "City is still referenced by trip stops")
        return await real_request(method, path, **kwargs)

    async def broken_add_stops(trip_id, stops):
        raise ApiError(500, "Internal server error")

    monkeypatch.setattr(api, "request", no_city_deletes)
    monkeypatch.setattr(api, "add_stops", broken_add_stops)

    with pytest.raises(PlanningError) as excinfo:
        await TripPlanner(api, compensate=True).plan(TripPlanRequest(title="Europe"), selection)

    failures = excinfo.value.compensation_failures
    assert len(failures) == 3
    assert all(a.path.startswith("/trips/city/") for a in failures)


async def test_api_client_surfaces_error_message(api):
    with pytest.raises(ApiError) as excinfo:
        await api.get_trip("missing")

    assert excinfo.value.status_code == 404
    assert excinfo.value.message == "Trip not found"


async def test_api_client_wraps_network_errors():
    def refuse(request):
        raise httpx.ConnectError("refused", request=request)

    async with TripPlannerApi("http://planner.invalid/api", transport=httpx.MockTransport(refuse)) as offline:
        with pytest.raises(ApiError) as excinfo:
            await offline.search_places("paris")

    assert excinfo.value.status_code == 0
