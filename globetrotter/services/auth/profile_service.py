from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from globetrotter.core.exceptions import NotFound
from globetrotter.models.user.user import User
from globetrotter.models.trips.trip_model import Trip


class ProfileService:
    @staticmethod
    async def get_user_by_id(user_id: str, db: AsyncSession) -> User:
        result = await db.execute(select(User).where(User.id == user_id))
        user = result.scalar_one_or_none()
        if not user:
            raise NotFound("User not found")
        return user

    @staticmethod
    async def get_profile(user_id: str, db: AsyncSession) -> dict:
        """Public fields plus the user's trips, newest first, without stops."""
        user = await ProfileService.get_user_by_id(user_id, db)
        result = await db.execute(
            select(Trip)
            .where(Trip.user_id == user.id)
            .order_by(Trip.created_at.desc())
        )
        return {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "phone_number": user.phone_number,
            "city": user.city,
            "created_at": user.created_at,
            "trips": result.scalars().all(),
        }
