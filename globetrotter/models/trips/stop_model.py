from sqlalchemy import Column, Integer, String, Date, ForeignKey, Numeric
from sqlalchemy.orm import relationship
from globetrotter.core.database import Base
import uuid


class TripStop(Base):
    __tablename__ = "trip_stops"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    trip_id = Column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    city_id = Column(Integer, ForeignKey("cities.id"), nullable=False, index=True)
    start_date = Column(Date, nullable=True)
    end_date = Column(Date, nullable=True)
    order = Column(Integer, nullable=False)

    trip = relationship("Trip", back_populates="stops")
    city = relationship("City", back_populates="stops")
    activities = relationship("TripActivity", back_populates="stop", cascade="all, delete-orphan")


class TripActivity(Base):
    __tablename__ = "trip_activities"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    trip_stop_id = Column(String(36), ForeignKey("trip_stops.id", ondelete="CASCADE"), nullable=False, index=True)
    activity_id = Column(Integer, ForeignKey("activities.id"), nullable=False)
    scheduled_date = Column(Date, nullable=True)
    # overrides Activity.avg_cost when set
    custom_cost = Column(Numeric(10, 2, asdecimal=False), nullable=True)

    stop = relationship("TripStop", back_populates="activities")
    activity = relationship("Activity")
