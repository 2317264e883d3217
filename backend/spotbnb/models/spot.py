"""
Spot models for SpotBnB.

A Spot is a bookable listing owned by exactly one user. Images, reviews and
bookings hang off it and are removed with it (ON DELETE CASCADE).
"""

from typing import Optional

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, Float, ForeignKey, Index, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base


class Spot(Base):
    """Bookable listing."""

    __tablename__ = "spots"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    owner_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    address = Column(String(255), nullable=False)
    city = Column(String(100), nullable=False)
    state = Column(String(100), nullable=False)
    country = Column(String(100), nullable=False)
    lat = Column(Float, nullable=False)
    lng = Column(Float, nullable=False)
    name = Column(String(50), nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Float, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    owner = relationship("User", foreign_keys=[owner_id])
    images = relationship(
        "SpotImage",
        back_populates="spot",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="SpotImage.created_at",
    )
    reviews = relationship("Review", back_populates="spot", cascade="all, delete-orphan", passive_deletes=True)
    bookings = relationship("Booking", back_populates="spot", cascade="all, delete-orphan", passive_deletes=True)

    __table_args__ = (
        CheckConstraint("lat >= -90 AND lat <= 90", name="ck_spots_lat_range"),
        CheckConstraint("lng >= -180 AND lng <= 180", name="ck_spots_lng_range"),
        CheckConstraint("price > 0", name="ck_spots_price_positive"),
        Index("idx_spots_lat_lng", "lat", "lng"),
        Index("idx_spots_price", "price"),
    )

    @property
    def preview_image(self) -> Optional[str]:
        """URL of the first image flagged as preview, if the images are loaded."""
        for image in self.images:
            if image.preview:
                return image.url
        return None

    def __repr__(self) -> str:
        return f"<Spot {self.id} {self.name!r}>"


class SpotImage(Base):
    """Image attached to a spot; ``preview`` marks listing thumbnails."""

    __tablename__ = "spot_images"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    spot_id = Column(String(26), ForeignKey("spots.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String(2048), nullable=False)
    preview = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    spot = relationship("Spot", back_populates="images")
