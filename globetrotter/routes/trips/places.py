from typing import Optional

from fastapi import APIRouter, Depends, Query

from globetrotter.core.exceptions import ValidationError
from globetrotter.schemas.places.place import PhotoUrlResponse
from globetrotter.services.places.places_client import PlacesClient, get_places_client
from globetrotter.utils.places import group_by_type, sort_by_rating

router = APIRouter(prefix="/trips/places", tags=["Places"])


@router.get("/search")
async def search_places(
    query: Optional[str] = None,
    type: Optional[str] = None,
    groupBy: Optional[str] = None,
    sortBy: Optional[str] = None,
    places: PlacesClient = Depends(get_places_client),
):
    if not query:
        raise ValidationError("Query parameter is required")

    results = await places.search_places(query, type)

    if sortBy == "rating":
        results = sort_by_rating(results)
    if groupBy in ("category", "type"):
        return group_by_type(results)
    return results


@router.get("/details/{place_id}")
async def get_place_details(place_id: str, places: PlacesClient = Depends(get_places_client)):
    return await places.get_place_details(place_id)


@router.get("/nearby")
async def get_nearby_places(
    lat: Optional[float] = None,
    lng: Optional[float] = None,
    radius: int = Query(5000, ge=1),
    type: Optional[str] = None,
    places: PlacesClient = Depends(get_places_client),
):
    if lat is None or lng is None:
        raise ValidationError("Latitude and longitude are required")
    return await places.get_nearby_places(lat, lng, radius, type)


@router.get("/autocomplete")
async def autocomplete(
    input: Optional[str] = None,
    types: Optional[str] = None,
    places: PlacesClient = Depends(get_places_client),
):
    if not input:
        raise ValidationError("Input parameter is required")
    return await places.autocomplete(input, types)


@router.get("/photo", response_model=PhotoUrlResponse)
async def get_photo_url(
    reference: str,
    maxWidth: int = Query(400, ge=1, le=1600),
    places: PlacesClient = Depends(get_places_client),
):
    return PhotoUrlResponse(url=places.get_photo_url(reference, maxWidth))
