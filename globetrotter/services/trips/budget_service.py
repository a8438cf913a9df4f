from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from globetrotter.core.exceptions import NotFound
from globetrotter.core.logger import logger
from globetrotter.models.trips.budget_model import TripBudget
from globetrotter.models.trips.trip_model import Trip
from globetrotter.models.user.user import User
from globetrotter.schemas.trip.budget import BudgetUpdate
from globetrotter.services.trips.trip_service import get_owned_trip


async def get_trip_budget(db: AsyncSession, trip_id: str, current_user: User) -> TripBudget:
    trip = await db.get(Trip, trip_id)
    if not trip or (trip.user_id != current_user.id and not trip.is_public):
        raise NotFound("Trip not found")

    budget = await db.get(TripBudget, trip_id)
    if not budget:
        raise NotFound("Budget not found")
    return budget


async def upsert_trip_budget(
    db: AsyncSession,
    trip_id: str,
    budget_data: BudgetUpdate,
    current_user: User,
) -> TripBudget:
    """Budget is a singleton per trip: created on first write, updated after."""
    await get_owned_trip(db, trip_id, current_user.id)

    fields = budget_data.model_dump(exclude_unset=True)
    result = await db.execute(select(TripBudget).where(TripBudget.trip_id == trip_id))
    budget = result.scalar_one_or_none()

    if budget is None:
        budget = TripBudget(trip_id=trip_id, **fields)
        db.add(budget)
        logger.info(f"Budget created for trip {trip_id}")
    else:
        for key, value in fields.items():
            setattr(budget, key, value)

    await db.commit()
    return budget
