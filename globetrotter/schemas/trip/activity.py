from datetime import date
from typing import Optional

from pydantic import Field, field_validator

from globetrotter.schemas.common import CamelModel, blank_to_none
from globetrotter.schemas.catalog.city import ActivityCatalogResponse


class TripActivityCreate(CamelModel):
    activity_id: int
    scheduled_date: Optional[date] = None
    custom_cost: Optional[float] = Field(default=None, ge=0)

    blank_date = field_validator("scheduled_date", mode="before")(blank_to_none)


class TripActivityUpdate(CamelModel):
    scheduled_date: Optional[date] = None
    custom_cost: Optional[float] = Field(default=None, ge=0)

    blank_date = field_validator("scheduled_date", mode="before")(blank_to_none)


class TripActivityResponse(CamelModel):
    id: str
    trip_stop_id: str
    activity_id: int
    scheduled_date: Optional[date] = None
    custom_cost: Optional[float] = None
    activity: Optional[ActivityCatalogResponse] = None
