from sqlalchemy import Column, String, DateTime, ForeignKey
from datetime import datetime, timezone
from sqlalchemy.orm import relationship
from globetrotter.core.database import Base
import uuid


class TripShare(Base):
    __tablename__ = "trip_shares"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    trip_id = Column(String(36), ForeignKey("trips.id", ondelete="CASCADE"), nullable=False, index=True)
    email = Column(String, nullable=False)
    permission = Column(String, nullable=False, default="view")
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    trip = relationship("Trip", back_populates="shares")
