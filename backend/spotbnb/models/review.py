"""
Review models for SpotBnB.

Design notes:
- One review per (user, spot), enforced by a unique constraint
- Stars are integers 1..5
- Review images are capped per review by the service layer
"""

from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import ulid

from ..database import Base


class Review(Base):
    """Review of a spot written by a user."""

    __tablename__ = "reviews"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    spot_id = Column(String(26), ForeignKey("spots.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(26), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    review = Column(Text, nullable=False)
    stars = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    spot = relationship("Spot", back_populates="reviews")
    user = relationship("User", foreign_keys=[user_id])
    images = relationship(
        "ReviewImage",
        back_populates="review",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="ReviewImage.created_at",
    )

    __table_args__ = (
        UniqueConstraint("user_id", "spot_id", name="uq_reviews_user_spot"),
        CheckConstraint("stars >= 1 AND stars <= 5", name="ck_reviews_stars_range"),
    )


class ReviewImage(Base):
    """Image attached to a review."""

    __tablename__ = "review_images"

    id = Column(String(26), primary_key=True, default=lambda: str(ulid.ULID()))
    review_id = Column(String(26), ForeignKey("reviews.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String(2048), nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    review = relationship("Review", back_populates="images")
