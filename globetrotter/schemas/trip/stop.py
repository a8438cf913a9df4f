from datetime import date
from typing import Optional, List

from pydantic import Field, field_validator, model_validator

from globetrotter.schemas.common import CamelModel, blank_to_none
from globetrotter.schemas.catalog.city import CityResponse
from globetrotter.schemas.trip.activity import TripActivityResponse


def check_date_range(start: Optional[date], end: Optional[date]):
    if start and end and end < start:
        raise ValueError("endDate must not be before startDate")


class StopCreate(CamelModel):
    city_id: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    order: int = Field(..., ge=0)

    blank_dates = field_validator("start_date", "end_date", mode="before")(blank_to_none)

    @model_validator(mode="after")
    def dates_in_order(self):
        check_date_range(self.start_date, self.end_date)
        return self


class StopsBulkCreate(CamelModel):
    stops: List[StopCreate] = Field(..., min_length=1)


class StopUpdate(CamelModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    order: Optional[int] = Field(default=None, ge=0)

    blank_dates = field_validator("start_date", "end_date", mode="before")(blank_to_none)


class StopResponse(CamelModel):
    id: str
    trip_id: str
    city_id: int
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    order: int
    city: Optional[CityResponse] = None


class StopDetailResponse(StopResponse):
    activities: List[TripActivityResponse] = []
