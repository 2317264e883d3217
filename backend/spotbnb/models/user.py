"""
User model for SpotBnB.

Users own spots, write reviews and make bookings. Credentials are stored as
a bcrypt hash; the plain password never reaches this layer.
"""

from sqlalchemy import Column, DateTime, String
from sqlalchemy.sql import func
import ulid

from ..database import Base


class User(Base):
    """Account used for authentication and resource ownership."""

    __tablename__ = "users"

    id = Column(String(26), primary_key=True, index=True, default=lambda: str(ulid.ULID()))
    first_name = Column(String(50), nullable=False)
    last_name = Column(String(50), nullable=False)
    email = Column(String(256), unique=True, index=True, nullable=False)
    username = Column(String(30), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<User {self.username}>"
