"""User model for public accounts."""

from sqlalchemy import Column, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from tawjih.models.base import Base, TimestampMixin, UUIDMixin

DEFAULT_PREFERENCES = {
    "theme": "light",
    "notifications": True,
    "emailUpdates": True,
    "savedJobs": [],
    "favoriteRegions": [],
    "favoriteSectors": [],
}


class User(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "users"

    name = Column(String(50), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), default="user", nullable=False)  # user, admin
    preferences = Column(JSONB, default=lambda: dict(DEFAULT_PREFERENCES), nullable=False)

    # Relationships
    saved_jobs = relationship("SavedJob", back_populates="user", cascade="all, delete-orphan")
    bookmarks = relationship("Bookmark", back_populates="user", cascade="all, delete-orphan")
