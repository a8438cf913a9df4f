from typing import Optional

from pydantic import Field

from globetrotter.schemas.common import CamelModel


class BudgetUpdate(CamelModel):
    transport_cost: Optional[float] = Field(default=None, ge=0)
    stay_cost: Optional[float] = Field(default=None, ge=0)
    food_cost: Optional[float] = Field(default=None, ge=0)
    activity_cost: Optional[float] = Field(default=None, ge=0)


class BudgetResponse(CamelModel):
    trip_id: str
    transport_cost: Optional[float] = None
    stay_cost: Optional[float] = None
    food_cost: Optional[float] = None
    activity_cost: Optional[float] = None
