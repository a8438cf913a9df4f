from datetime import date, datetime
from typing import Optional, List

from pydantic import Field, field_validator, model_validator

from globetrotter.schemas.common import CamelModel, blank_to_none
from globetrotter.schemas.trip.stop import StopResponse, StopDetailResponse, check_date_range
from globetrotter.schemas.trip.budget import BudgetResponse
from globetrotter.schemas.trip.share import ShareResponse


class TripCreate(CamelModel):
    # owner comes from the bearer token; when sent it must match
    user_id: Optional[str] = None
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_public: bool = False

    blank_dates = field_validator("start_date", "end_date", mode="before")(blank_to_none)

    @model_validator(mode="after")
    def dates_in_order(self):
        check_date_range(self.start_date, self.end_date)
        return self


class TripUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_public: Optional[bool] = None

    blank_dates = field_validator("start_date", "end_date", mode="before")(blank_to_none)


class TripResponse(CamelModel):
    id: str
    user_id: str
    title: str
    description: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_public: bool
    created_at: Optional[datetime] = None


class TripListItem(TripResponse):
    stops: List[StopResponse] = []
    budget: Optional[BudgetResponse] = None


class TripDetailResponse(TripResponse):
    stops: List[StopDetailResponse] = []
    budget: Optional[BudgetResponse] = None
    shares: List[ShareResponse] = []


class SharedTripResponse(TripResponse):
    stops: List[StopDetailResponse] = []
    budget: Optional[BudgetResponse] = None
