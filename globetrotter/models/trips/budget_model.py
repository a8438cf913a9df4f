from sqlalchemy import Column, String, ForeignKey, Numeric
from sqlalchemy.orm import relationship
from globetrotter.core.database import Base


class TripBudget(Base):
    __tablename__ = "trip_budgets"

    trip_id = Column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), primary_key=True)
    transport_cost = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    stay_cost = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    food_cost = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    activity_cost = Column(Numeric(10, 2, asdecimal=False), nullable=True)

    trip = relationship("Trip", back_populates="budget")
