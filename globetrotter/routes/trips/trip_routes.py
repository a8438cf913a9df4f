from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from globetrotter.core.database import get_db
from globetrotter.dependencies.auth import get_current_user
from globetrotter.models.user.user import User
from globetrotter.schemas.common import MessageResponse
from globetrotter.schemas.trip.activity import TripActivityCreate, TripActivityUpdate, TripActivityResponse
from globetrotter.schemas.trip.budget import BudgetUpdate, BudgetResponse
from globetrotter.schemas.trip.share import ShareCreate, ShareResponse
from globetrotter.schemas.trip.stop import StopsBulkCreate, StopUpdate, StopResponse
from globetrotter.schemas.trip.trip_schema import (
    TripCreate, TripUpdate, TripResponse, TripListItem, TripDetailResponse, SharedTripResponse,
)
from globetrotter.services.trips import budget_service, share_service
from globetrotter.services.trips.stop_service import StopService
from globetrotter.services.trips.trip_service import TripService

router = APIRouter(prefix="/trips", tags=["Trips"])


def get_trip_service() -> TripService:
    return TripService()


def get_stop_service() -> StopService:
    return StopService()


# Static paths first so they are not captured by /{trip_id}

@router.get("/user/{user_id}", response_model=List[TripListItem])
async def get_user_trips(
    user_id: str,
    sortBy: str = "createdAt",
    limit: Optional[int] = Query(None, ge=1),
    filter: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service),
):
    return await trip_service.list_user_trips(db, user_id, current_user, sortBy, limit, filter)


@router.get("/shared/{share_id}", response_model=SharedTripResponse)
async def get_shared_trip(
    share_id: str,
    db: AsyncSession = Depends(get_db),
    trip_service: TripService = Depends(get_trip_service),
):
    return await trip_service.get_shared_trip(db, share_id)


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip: TripCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service),
):
    return await trip_service.create_trip(db, trip, current_user)


@router.get("/{trip_id}", response_model=TripDetailResponse)
async def get_trip(
    trip_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service),
):
    return await trip_service.get_trip_details(db, trip_id, current_user)


@router.put("/{trip_id}", response_model=TripResponse)
async def update_trip(
    trip_id: str,
    trip_update: TripUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service),
):
    return await trip_service.update_trip(db, trip_id, trip_update, current_user)


@router.delete("/{trip_id}", response_model=MessageResponse)
async def delete_trip(
    trip_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    trip_service: TripService = Depends(get_trip_service),
):
    return await trip_service.delete_trip(db, trip_id, current_user)


# ========== Stops ==========

@router.post("/{trip_id}/stops", response_model=List[StopResponse], status_code=status.HTTP_201_CREATED)
async def add_stops(
    trip_id: str,
    payload: StopsBulkCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    stop_service: StopService = Depends(get_stop_service),
):
    return await stop_service.add_stops(db, trip_id, payload.stops, current_user)


@router.put("/{trip_id}/stops/{stop_id}", response_model=StopResponse)
async def update_stop(
    trip_id: str,
    stop_id: str,
    stop_update: StopUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    stop_service: StopService = Depends(get_stop_service),
):
    return await stop_service.update_stop(db, trip_id, stop_id, stop_update, current_user)


@router.delete("/{trip_id}/stops/{stop_id}", response_model=MessageResponse)
async def delete_stop(
    trip_id: str,
    stop_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    stop_service: StopService = Depends(get_stop_service),
):
    return await stop_service.delete_stop(db, trip_id, stop_id, current_user)


# ========== Activities ==========

@router.post(
    "/{trip_id}/stops/{stop_id}/activities",
    response_model=TripActivityResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_activity(
    trip_id: str,
    stop_id: str,
    activity: TripActivityCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    stop_service: StopService = Depends(get_stop_service),
):
    return await stop_service.add_activity(db, trip_id, stop_id, activity, current_user)


@router.put("/{trip_id}/stops/{stop_id}/activities/{activity_id}", response_model=TripActivityResponse)
async def update_activity(
    trip_id: str,
    stop_id: str,
    activity_id: str,
    activity: TripActivityUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    stop_service: StopService = Depends(get_stop_service),
):
    return await stop_service.update_activity(db, trip_id, stop_id, activity_id, activity, current_user)


@router.delete("/{trip_id}/stops/{stop_id}/activities/{activity_id}", response_model=MessageResponse)
async def delete_activity(
    trip_id: str,
    stop_id: str,
    activity_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
    stop_service: StopService = Depends(get_stop_service),
):
    return await stop_service.delete_activity(db, trip_id, stop_id, activity_id, current_user)


# ========== Budget ==========

@router.get("/{trip_id}/budget", response_model=BudgetResponse)
async def get_trip_budget(
    trip_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return await budget_service.get_trip_budget(db, trip_id, current_user)


@router.put("/{trip_id}/budget", response_model=BudgetResponse)
async def update_trip_budget(
    trip_id: str,
    budget: BudgetUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return await budget_service.upsert_trip_budget(db, trip_id, budget, current_user)


# ========== Sharing ==========

@router.post("/{trip_id}/share", response_model=ShareResponse, status_code=status.HTTP_201_CREATED)
async def share_trip(
    trip_id: str,
    share: ShareCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return await share_service.share_trip(db, trip_id, share, current_user)
