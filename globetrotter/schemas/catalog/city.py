from typing import Optional

from pydantic import Field, field_validator

from globetrotter.schemas.common import CamelModel


class CityCreate(CamelModel):
    name: str = Field(..., min_length=1)
    country: str = Field(..., min_length=1)
    cost_index: Optional[float] = None
    popularity_score: Optional[float] = None

    @field_validator("name", "country")
    @classmethod
    def not_blank(cls, v: str):
        if not v.strip():
            raise ValueError("City name and country are required")
        return v.strip()

    @field_validator("popularity_score")
    @classmethod
    def score_in_range(cls, v: Optional[float]):
        if v is not None and not 0 <= v <= 5:
            raise ValueError("Popularity score must be between 0 and 5")
        return v


class CityResponse(CamelModel):
    id: int
    name: str
    country: str
    cost_index: Optional[float] = None
    popularity_score: Optional[float] = None


class CityCreated(CamelModel):
    message: str
    city_id: int


class ActivityCatalogResponse(CamelModel):
    id: int
    city_id: Optional[int] = None
    name: str
    type: str
    avg_cost: Optional[float] = None
    duration_hours: Optional[float] = None


class Banner(CamelModel):
    title: str
    subtitle: str
    image_url: str
