from datetime import date
from typing import Optional, List

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from globetrotter.core.exceptions import NotFound, PermissionDenied, ValidationError
from globetrotter.core.logger import logger
from globetrotter.models.trips.trip_model import Trip
from globetrotter.models.trips.stop_model import TripStop, TripActivity
from globetrotter.models.trips.share_model import TripShare
from globetrotter.models.user.user import User
from globetrotter.schemas.trip.trip_schema import TripCreate, TripUpdate
from globetrotter.schemas.trip.stop import check_date_range

SORT_FIELDS = {
    "createdAt": Trip.created_at,
    "created_at": Trip.created_at,
    "startDate": Trip.start_date,
    "start_date": Trip.start_date,
    "endDate": Trip.end_date,
    "end_date": Trip.end_date,
    "title": Trip.title,
}

TRIP_FILTERS = ("upcoming", "ongoing", "completed")


def trip_detail_options(with_shares: bool = True) -> list:
    options = [
        selectinload(Trip.stops).selectinload(TripStop.city),
        selectinload(Trip.stops)
        .selectinload(TripStop.activities)
        .selectinload(TripActivity.activity),
        selectinload(Trip.budget),
    ]
    if with_shares:
        options.append(selectinload(Trip.shares))
    return options


async def get_owned_trip(db: AsyncSession, trip_id: str, user_id: str, *options) -> Trip:
    """Load a trip the user owns; anything else is reported as not found."""
    result = await db.execute(select(Trip).options(*options).where(Trip.id == trip_id))
    trip = result.scalar_one_or_none()

    if not trip or trip.user_id != user_id:
        logger.warning(f"Trip not found or not owned: ID {trip_id}, user {user_id}")
        raise NotFound("Trip not found")
    return trip


def apply_trip_filter(stmt, trip_filter: str, today: date):
    if trip_filter == "upcoming":
        return stmt.where(Trip.start_date > today)
    if trip_filter == "ongoing":
        return stmt.where(
            Trip.start_date <= today,
            or_(Trip.end_date.is_(None), Trip.end_date >= today),
        )
    return stmt.where(Trip.end_date < today)


class TripService:
    async def create_trip(self, db: AsyncSession, trip_data: TripCreate, current_user: User) -> Trip:
        if trip_data.user_id and trip_data.user_id != current_user.id:
            raise PermissionDenied("Cannot create a trip for another user")

        new_trip = Trip(
            user_id=current_user.id,
            **trip_data.model_dump(exclude={"user_id"}),
        )
        db.add(new_trip)
        await db.commit()

        logger.info(f"Trip {new_trip.id} created by user {current_user.id}")
        return new_trip

    async def list_user_trips(
        self,
        db: AsyncSession,
        user_id: str,
        current_user: User,
        sort_by: str = "createdAt",
        limit: Optional[int] = None,
        trip_filter: Optional[str] = None,
    ) -> List[Trip]:
        if user_id != current_user.id:
            raise PermissionDenied("Cannot list another user's trips")

        column = SORT_FIELDS.get(sort_by)
        if column is None:
            raise ValidationError(f"Unsupported sortBy '{sort_by}'")
        if limit is not None and limit < 1:
            raise ValidationError("limit must be a positive integer")
        if trip_filter and trip_filter not in TRIP_FILTERS:
            raise ValidationError(f"Unsupported filter '{trip_filter}'")

        stmt = (
            select(Trip)
            .options(
                selectinload(Trip.stops).selectinload(TripStop.city),
                selectinload(Trip.budget),
            )
            .where(Trip.user_id == user_id)
            .order_by(column.desc().nulls_last(), Trip.created_at.desc())
        )
        if trip_filter:
            stmt = apply_trip_filter(stmt, trip_filter, date.today())
        if limit:
            stmt = stmt.limit(limit)

        result = await db.execute(stmt)
        trips = result.scalars().all()
        logger.info(f"Retrieved {len(trips)} trips for user {user_id}")
        return trips

    async def get_trip_details(self, db: AsyncSession, trip_id: str, current_user: User) -> Trip:
        result = await db.execute(
            select(Trip).options(*trip_detail_options()).where(Trip.id == trip_id)
        )
        trip = result.scalar_one_or_none()

        if not trip or (trip.user_id != current_user.id and not trip.is_public):
            logger.warning(f"Trip not found: ID {trip_id} for user {current_user.id}")
            raise NotFound("Trip not found")
        return trip

    async def update_trip(self, db: AsyncSession, trip_id: str, trip_data: TripUpdate, current_user: User) -> Trip:
        trip = await get_owned_trip(db, trip_id, current_user.id)

        update_data = trip_data.model_dump(exclude_unset=True)
        if "title" in update_data and update_data["title"] is None:
            raise ValidationError("title cannot be cleared")
        if "is_public" in update_data and update_data["is_public"] is None:
            raise ValidationError("isPublic cannot be cleared")

        start = update_data.get("start_date", trip.start_date)
        end = update_data.get("end_date", trip.end_date)
        try:
            check_date_range(start, end)
        except ValueError as e:
            raise ValidationError(str(e))

        for key, value in update_data.items():
            setattr(trip, key, value)

        await db.commit()
        logger.info(f"Trip ID {trip_id} updated by user {current_user.id}")
        return trip

    async def delete_trip(self, db: AsyncSession, trip_id: str, current_user: User) -> dict:
        # children must be loaded for the ORM cascade to remove them
        trip = await get_owned_trip(
            db, trip_id, current_user.id, *trip_detail_options()
        )

        await db.delete(trip)
        await db.commit()

        logger.info(f"Trip ID {trip_id} deleted by user {current_user.id}")
        return {"message": "Trip deleted successfully"}

    async def get_shared_trip(self, db: AsyncSession, share_id: str) -> Trip:
        """Resolve a share to its trip; shares are the access grant, so no owner check."""
        share = await db.get(TripShare, share_id)
        if not share:
            logger.warning(f"Share not found: {share_id}")
            raise NotFound("Shared trip not found")

        result = await db.execute(
            select(Trip)
            .options(*trip_detail_options(with_shares=False))
            .where(Trip.id == share.trip_id)
        )
        trip = result.scalar_one_or_none()
        if not trip:
            raise NotFound("Shared trip not found")
        return trip
