"""Job competition model: public job postings ("مباريات")."""

from sqlalchemy import Column, DateTime, Index
from sqlalchemy.orm import relationship

from tawjih.models.base import Base, ContentMixin


class JobCompetition(ContentMixin, Base):
    __tablename__ = "job_competitions"

    closing_date = Column(DateTime(timezone=True))

    seo_meta = relationship("SeoMeta", uselist=False, lazy="selectin", cascade="all, delete-orphan")
    hero_image = relationship("HeroImage", uselist=False, lazy="selectin", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_job_published_featured", "published", "featured", "created_at"),
    )
