from sqlalchemy import Column, Integer, String, Float, Numeric
from sqlalchemy.orm import relationship
from globetrotter.core.database import Base


class City(Base):
    __tablename__ = "cities"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String, nullable=False)
    country = Column(String, nullable=False, index=True)
    cost_index = Column(Numeric(10, 2, asdecimal=False), nullable=True)
    popularity_score = Column(Float, nullable=True)

    # no cascade: a city only goes away through delete_city_if_unused
    stops = relationship("TripStop", back_populates="city", passive_deletes=True)
    activities = relationship("Activity", back_populates="city", passive_deletes=True)
