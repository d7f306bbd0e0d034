"""Saved job model: a user's shortlist of job competitions."""

from sqlalchemy import Column, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from tawjih.models.base import Base, TimestampMixin, UUIDMixin


class SavedJob(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "saved_jobs"

    user_id = Column(UUID(as_uuid=True), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    job_id = Column(UUID(as_uuid=True), ForeignKey("job_competitions.id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    user = relationship("User", back_populates="saved_jobs")
    job = relationship("JobCompetition", lazy="selectin")

    __table_args__ = (
        UniqueConstraint("user_id", "job_id", name="uq_saved_jobs_user_job"),
    )
