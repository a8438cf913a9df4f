from sqlalchemy import Column, Integer, String, Float, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from globetrotter.core.database import Base


class Activity(Base):
    """Catalog entry a TripActivity points at."""
    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    city_id = Column(Integer, ForeignKey("cities.id"), nullable=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=False, default="sightseeing")
    avg_cost = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    duration_hours = Column(Float, nullable=True)

    city = relationship("City", back_populates="activities")
