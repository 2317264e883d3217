"""
Booking model for SpotBnB.

A booking reserves the half-open date range [start_date, end_date) on a spot:
the checkout day is free for the next guest. Overlap prevention lives in the
booking service, which checks and writes under a per-spot lock.
"""

from sqlalchemy import CheckConstraint, Column, Date, DateTime, ForeignKey, Index, String
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base


class Booking(Base):
    """Reserved date range on a spot by a user."""

    __tablename__ = "bookings"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    spot_id = Column(String(26), ForeignKey("spots.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    spot = relationship("Spot", back_populates="bookings")
    user = relationship("User", foreign_keys=[user_id])

    __table_args__ = (
        CheckConstraint("start_date < end_date", name="ck_bookings_date_order"),
        Index("idx_bookings_spot_dates", "spot_id", "start_date", "end_date"),
    )

    def __repr__(self) -> str:
        return f"<Booking {self.id} spot={self.spot_id} {self.start_date}..{self.end_date}>"
