from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from globetrotter.core.database import get_db
from globetrotter.dependencies.auth import get_current_user
from globetrotter.models.user.user import User
from globetrotter.schemas.catalog.city import Banner, CityCreate, CityCreated, CityResponse
from globetrotter.schemas.common import MessageResponse
from globetrotter.services.catalog.city_service import CityService

router = APIRouter(prefix="/trips", tags=["Catalog"])


@router.get("/banner", response_model=Banner)
async def get_banner():
    return CityService.get_banner()


@router.get("/regions/top", response_model=List[CityResponse])
async def get_top_regions(
    limit: int = Query(5, ge=1, le=100),
    filter: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    return await CityService.get_top_regions(db, limit, filter)


@router.post("/city-add", response_model=CityCreated, status_code=status.HTTP_201_CREATED)
async def add_city(
    city: CityCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    new_city = await CityService.add_city(db, city)
    return {"message": "City added successfully", "city_id": new_city.id}


@router.delete("/city/{city_id}", response_model=MessageResponse)
async def delete_city(
    city_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return await CityService.delete_city_if_unused(db, city_id)
