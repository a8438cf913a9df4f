from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.orm import selectinload

from globetrotter.core.exceptions import NotFound, ValidationError
from globetrotter.core.logger import logger
from globetrotter.models.catalog.activity import Activity
from globetrotter.models.catalog.city import City
from globetrotter.models.trips.stop_model import TripStop, TripActivity
from globetrotter.models.user.user import User
from globetrotter.schemas.trip.activity import TripActivityCreate, TripActivityUpdate
from globetrotter.schemas.trip.stop import StopCreate, StopUpdate, check_date_range
from globetrotter.services.trips.trip_service import get_owned_trip


async def _get_stop(db: AsyncSession, trip_id: str, stop_id: str, user_id: str, *options) -> TripStop:
    await get_owned_trip(db, trip_id, user_id)

    result = await db.execute(
        select(TripStop)
        .options(*options)
        .where(TripStop.id == stop_id, TripStop.trip_id == trip_id)
    )
    stop = result.scalar_one_or_none()
    if not stop:
        logger.warning(f"Stop {stop_id} not found in trip {trip_id}")
        raise NotFound("Stop not found")
    return stop


async def _fetch_stop_with_city(db: AsyncSession, stop_id: str) -> TripStop:
    result = await db.execute(
        select(TripStop).options(selectinload(TripStop.city)).where(TripStop.id == stop_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


async def _fetch_trip_activity(db: AsyncSession, trip_activity_id: str) -> TripActivity:
    result = await db.execute(
        select(TripActivity)
        .options(selectinload(TripActivity.activity))
        .where(TripActivity.id == trip_activity_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one()


class StopService:
    async def add_stops(
        self,
        db: AsyncSession,
        trip_id: str,
        stops: List[StopCreate],
        current_user: User,
    ) -> List[TripStop]:
        if not isinstance(stops, list) or not stops:
            raise ValidationError("stops must be a non-empty array")

        await get_owned_trip(db, trip_id, current_user.id)

        city_ids = {stop.city_id for stop in stops}
        result = await db.execute(select(City.id).where(City.id.in_(city_ids)))
        missing = city_ids - set(result.scalars().all())
        if missing:
            raise ValidationError(f"Unknown cityId: {', '.join(str(c) for c in sorted(missing))}")

        db.add_all([
            TripStop(trip_id=trip_id, **stop.model_dump())
            for stop in stops
        ])
        await db.commit()

        # bulk insert returns no relations, read the stops back with their cities
        result = await db.execute(
            select(TripStop)
            .options(selectinload(TripStop.city))
            .where(TripStop.trip_id == trip_id)
            .order_by(TripStop.order)
            .execution_options(populate_existing=True)
        )
        created = result.scalars().all()
        logger.info(f"Added {len(stops)} stops to trip {trip_id}")
        return created

    async def update_stop(
        self,
        db: AsyncSession,
        trip_id: str,
        stop_id: str,
        stop_data: StopUpdate,
        current_user: User,
    ) -> TripStop:
        stop = await _get_stop(db, trip_id, stop_id, current_user.id)

        update_data = stop_data.model_dump(exclude_unset=True)
        if "order" in update_data and update_data["order"] is None:
            raise ValidationError("order cannot be cleared")

        try:
            check_date_range(
                update_data.get("start_date", stop.start_date),
                update_data.get("end_date", stop.end_date),
            )
        except ValueError as e:
            raise ValidationError(str(e))

        for key, value in update_data.items():
            setattr(stop, key, value)

        await db.commit()
        logger.info(f"Stop {stop_id} of trip {trip_id} updated")
        return await _fetch_stop_with_city(db, stop_id)

    async def delete_stop(self, db: AsyncSession, trip_id: str, stop_id: str, current_user: User) -> dict:
        stop = await _get_stop(
            db, trip_id, stop_id, current_user.id, selectinload(TripStop.activities)
        )

        await db.delete(stop)
        await db.commit()

        logger.info(f"Stop {stop_id} deleted from trip {trip_id}")
        return {"message": "Stop deleted successfully"}

    async def add_activity(
        self,
        db: AsyncSession,
        trip_id: str,
        stop_id: str,
        activity_data: TripActivityCreate,
        current_user: User,
    ) -> TripActivity:
        await _get_stop(db, trip_id, stop_id, current_user.id)

        if not await db.get(Activity, activity_data.activity_id):
            raise NotFound("Activity not found")

        trip_activity = TripActivity(trip_stop_id=stop_id, **activity_data.model_dump())
        db.add(trip_activity)
        await db.commit()

        logger.info(f"Activity {activity_data.activity_id} added to stop {stop_id}")
        return await _fetch_trip_activity(db, trip_activity.id)

    async def _get_trip_activity(
        self, db: AsyncSession, trip_id: str, stop_id: str, trip_activity_id: str, user_id: str
    ) -> TripActivity:
        await _get_stop(db, trip_id, stop_id, user_id)

        result = await db.execute(
            select(TripActivity).where(
                TripActivity.id == trip_activity_id,
                TripActivity.trip_stop_id == stop_id,
            )
        )
        trip_activity = result.scalar_one_or_none()
        if not trip_activity:
            raise NotFound("Trip activity not found")
        return trip_activity

    async def update_activity(
        self,
        db: AsyncSession,
        trip_id: str,
        stop_id: str,
        trip_activity_id: str,
        activity_data: TripActivityUpdate,
        current_user: User,
    ) -> TripActivity:
        trip_activity = await self._get_trip_activity(db, trip_id, stop_id, trip_activity_id, current_user.id)

        for key, value in activity_data.model_dump(exclude_unset=True).items():
            setattr(trip_activity, key, value)

        await db.commit()
        return await _fetch_trip_activity(db, trip_activity_id)

    async def delete_activity(
        self,
        db: AsyncSession,
        trip_id: str,
        stop_id: str,
        trip_activity_id: str,
        current_user: User,
    ) -> dict:
        trip_activity = await self._get_trip_activity(db, trip_id, stop_id, trip_activity_id, current_user.id)

        await db.delete(trip_activity)
        await db.commit()

        logger.info(f"Trip activity {trip_activity_id} deleted from stop {stop_id}")
        return {"message": "Activity deleted successfully"}
