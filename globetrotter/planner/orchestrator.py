"""Client-side "plan a trip" workflow.

Turns a set of selected places into a persisted trip in three sequential API
calls: one city per place, the trip itself, then all stops in bulk. Nothing
wraps the calls in a transaction; every completed step records how to undo it
and the undo is only run when the planner is built with ``compensate=True``.
Cities left behind are harmless shared catalog entries.
"""
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Callable, Dict, List, Optional, Union

from pydantic import BaseModel, Field, model_validator

from globetrotter.core.logger import logger
from globetrotter.planner.address import derive_city
from globetrotter.planner.api_client import ApiError, TripPlannerApi
from globetrotter.planner.saga import CompensatingAction, PlanningError, SagaLog
from globetrotter.schemas.places.place import Place

DEFAULT_COST_INDEX = 4
DEFAULT_POPULARITY = 4.5


class SelectedPlace(Place):
    day: Optional[int] = Field(default=None, ge=1)


class TripPlanRequest(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_public: bool = False

    @model_validator(mode="after")
    def dates_in_order(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must not be before start_date")
        return self


class PlanSelection:
    """Places picked for a trip, each at most once, in selection order."""

    def __init__(self):
        self._places: Dict[str, SelectedPlace] = {}

    def __len__(self) -> int:
        return len(self._places)

    def __contains__(self, place_id: str) -> bool:
        return place_id in self._places

    def add(self, place: Union[Place, Dict[str, Any]], day: Optional[int] = None) -> bool:
        data = place.model_dump() if isinstance(place, BaseModel) else dict(place)
        place_id = data.get("place_id")
        if not place_id:
            raise ValueError("place_id is required")
        if place_id in self._places:
            return False

        data["day"] = day
        self._places[place_id] = SelectedPlace.model_validate(data)
        return True

    def remove(self, place_id: str) -> None:
        self._places.pop(place_id, None)

    def assign_day(self, place_id: str, day: Optional[int]) -> None:
        """Day 0 or None leaves the place unassigned."""
        if day is not None and day < 0:
            raise ValueError("day must be positive")
        place = self._places[place_id]
        self._places[place_id] = place.model_copy(update={"day": day or None})

    def ordered(self) -> List[SelectedPlace]:
        # stable: unassigned places count as day 0, ties keep selection order
        return sorted(self._places.values(), key=lambda p: p.day or 0)


@dataclass
class PlannedTrip:
    trip: Dict[str, Any]
    stops: List[Dict[str, Any]]
    city_ids: Dict[str, int] = field(default_factory=dict)


class TripPlanner:
    def __init__(
        self,
        api: TripPlannerApi,
        compensate: bool = False,
        today: Callable[[], date] = date.today,
    ):
        self.api = api
        self.compensate = compensate
        self.today = today

    def build_stops(
        self,
        places: List[SelectedPlace],
        request: TripPlanRequest,
        city_ids: Dict[str, int],
    ) -> List[Dict[str, Any]]:
        fallback = request.start_date or self.today()
        stops = []
        for order, place in enumerate(places, start=1):
            stop_date = fallback
            if place.day and request.start_date:
                stop_date = request.start_date + timedelta(days=place.day - 1)
            stops.append({
                "cityId": city_ids[place.place_id],
                "startDate": stop_date.isoformat(),
                "endDate": stop_date.isoformat(),
                "order": order,
            })
        return stops

    async def _create_cities(self, places: List[SelectedPlace], log: SagaLog) -> Dict[str, int]:
        city_ids: Dict[str, int] = {}
        for place in places:
            city, country = derive_city(place.name or place.place_id, place.formatted_address)
            rating = DEFAULT_POPULARITY if place.rating is None else min(max(place.rating, 0), 5)
            city_id = await self.api.add_city(
                city,
                country,
                cost_index=DEFAULT_COST_INDEX,
                popularity_score=rating,
            )
            city_ids[place.place_id] = city_id
            log.record(
                f"create_city:{place.place_id}",
                city_id,
                CompensatingAction(f"delete city {city_id}", "DELETE", f"/trips/city/{city_id}"),
            )
        return city_ids

    async def plan(self, request: TripPlanRequest, selection: PlanSelection) -> PlannedTrip:
        places = selection.ordered()
        if not places:
            raise ValueError("Select at least one place")

        log = SagaLog()
        step = "create_cities"
        try:
            city_ids = await self._create_cities(places, log)

            step = "create_trip"
            trip = await self.api.create_trip(
                title=request.title,
                description=request.description,
                startDate=request.start_date.isoformat() if request.start_date else None,
                endDate=request.end_date.isoformat() if request.end_date else None,
                isPublic=request.is_public,
            )
            log.record(
                "create_trip",
                trip["id"],
                CompensatingAction(f"delete trip {trip['id']}", "DELETE", f"/trips/{trip['id']}"),
            )

            step = "add_stops"
            stops = await self.api.add_stops(trip["id"], self.build_stops(places, request, city_ids))
            log.record("add_stops", len(stops))
        except ApiError as e:
            error = PlanningError(step, e, log)
            logger.error(f"Trip planning failed at {step} after {error.completed_steps}")
            if self.compensate:
                await self._run_compensations(error)
            raise error from e

        logger.info(f"Planned trip {trip['id']} with {len(stops)} stops")
        return PlannedTrip(trip=trip, stops=stops, city_ids=city_ids)

    async def _run_compensations(self, error: PlanningError) -> None:
        for action in error.compensations:
            try:
                await self.api.request(action.method, action.path)
            except ApiError as e:
                logger.warning(f"Compensation '{action.description}' failed: {e}")
                error.compensation_failures.append(action)
