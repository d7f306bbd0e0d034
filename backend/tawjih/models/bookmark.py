"""Bookmark model: a user's marker on any content type.

target_id is not a foreign key: it points into one of three tables depending
on target_type.
"""

from sqlalchemy import Column, String, ForeignKey, UniqueConstraint, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from tawjih.models.base import Base, TimestampMixin, UUIDMixin


class Bookmark(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "bookmarks"

    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    target_type = Column(String(20), nullable=False)  # job, guidance, exam
    target_id = Column(UUID(as_uuid=True), nullable=False)

    # Relationships
    user = relationship("User", back_populates="bookmarks")

    __table_args__ = (
        UniqueConstraint("user_id", "target_type", "target_id", name="uq_bookmarks_user_target"),
        Index("idx_bookmarks_target", "target_id"),
    )
