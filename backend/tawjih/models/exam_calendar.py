"""Exam calendar model: dated exam entries per subject and school level."""

from sqlalchemy import Column, DateTime, String, Index
from sqlalchemy.orm import relationship

from tawjih.models.base import Base, ContentMixin


class ExamCalendar(ContentMixin, Base):
    __tablename__ = "exam_calendars"

    exam_date = Column(DateTime(timezone=True), nullable=False, index=True)
    subject = Column(String(100), nullable=False)
    school_level = Column(String(50), nullable=False, index=True)

    seo_meta = relationship("SeoMeta", uselist=False, lazy="selectin", cascade="all, delete-orphan")
    hero_image = relationship("HeroImage", uselist=False, lazy="selectin", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_exam_published_featured", "published", "featured", "exam_date"),
    )
