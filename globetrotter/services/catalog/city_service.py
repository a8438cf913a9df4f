from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from globetrotter.core.exceptions import ConflictError, NotFound
from globetrotter.core.logger import logger
from globetrotter.models.catalog.activity import Activity
from globetrotter.models.catalog.city import City
from globetrotter.models.trips.stop_model import TripStop
from globetrotter.schemas.catalog.city import CityCreate

BANNER = {
    "title": "Explore the World",
    "subtitle": "Plan your next adventure with GlobeTrotter",
    "image_url": "/images/banner.jpg",
}


class CityService:
    @staticmethod
    def get_banner() -> dict:
        return dict(BANNER)

    @staticmethod
    async def get_top_regions(db: AsyncSession, limit: int = 5, country_filter: Optional[str] = None) -> List[City]:
        stmt = (
            select(City)
            .order_by(City.popularity_score.desc().nulls_last(), City.id)
            .limit(limit)
        )
        if country_filter:
            stmt = stmt.where(City.country.ilike(f"%{country_filter}%"))

        result = await db.execute(stmt)
        return result.scalars().all()

    @staticmethod
    async def add_city(db: AsyncSession, city_data: CityCreate) -> City:
        city = City(**city_data.model_dump())
        db.add(city)
        await db.commit()

        logger.info(f"City {city.id} added: {city.name}, {city.country}")
        return city

    @staticmethod
    async def delete_city_if_unused(db: AsyncSession, city_id: int) -> dict:
        city = await db.get(City, city_id)
        if not city:
            raise NotFound("City not found")

        stop_refs = await db.scalar(
            select(func.count()).select_from(TripStop).where(TripStop.city_id == city_id)
        )
        if stop_refs:
            logger.warning(f"Refusing to delete city {city_id}: {stop_refs} stops reference it")
            raise ConflictError("City is still referenced by trip stops")

        activity_refs = await db.scalar(
            select(func.count()).select_from(Activity).where(Activity.city_id == city_id)
        )
        if activity_refs:
            logger.warning(f"Refusing to delete city {city_id}: {activity_refs} catalog activities reference it")
            raise ConflictError("City is still referenced by catalog activities")

        await db.delete(city)
        await db.commit()

        logger.info(f"City {city_id} deleted")
        return {"message": "City deleted successfully"}
