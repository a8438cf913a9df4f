from sqlalchemy.ext.asyncio import AsyncSession

from globetrotter.core.logger import logger
from globetrotter.models.trips.share_model import TripShare
from globetrotter.models.user.user import User
from globetrotter.schemas.trip.share import ShareCreate
from globetrotter.services.trips.trip_service import get_owned_trip


async def share_trip(
    db: AsyncSession,
    trip_id: str,
    share_data: ShareCreate,
    current_user: User,
) -> TripShare:
    # recipient is not checked against registered users
    await get_owned_trip(db, trip_id, current_user.id)

    share = TripShare(
        trip_id=trip_id,
        email=share_data.email,
        permission=share_data.permission,
    )
    db.add(share)
    await db.commit()

    logger.info(f"Trip {trip_id} shared as {share.id} ({share.permission})")
    return share
