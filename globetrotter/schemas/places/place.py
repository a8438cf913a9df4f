from typing import Optional, List, Any, Dict

from pydantic import BaseModel, ConfigDict


class Place(BaseModel):
    """A provider result; unknown provider keys are passed through untouched."""
    model_config = ConfigDict(extra="allow")

    place_id: Optional[str] = None
    name: Optional[str] = None
    formatted_address: Optional[str] = None
    rating: Optional[float] = None
    user_ratings_total: Optional[int] = None
    types: List[str] = []
    geometry: Optional[Dict[str, Any]] = None
    photos: Optional[List[Dict[str, Any]]] = None


class PhotoUrlResponse(BaseModel):
    url: str
