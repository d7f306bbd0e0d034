"""SEO metadata and hero images: one-to-one attachments of a content row.

Each row points at exactly one of the three content tables; the other two
foreign keys stay NULL.
"""

from sqlalchemy import Column, String, Text, ForeignKey
from sqlalchemy.dialects.postgresql import UUID

from tawjih.models.base import Base, UUIDMixin


class SeoMeta(UUIDMixin, Base):
    __tablename__ = "seo_meta"

    title = Column(String(60))
    description = Column(String(160))

    job_id = Column(UUID(as_uuid=True), ForeignKey("job_competitions.id", ondelete="CASCADE"), unique=True)
    guidance_id = Column(UUID(as_uuid=True), ForeignKey("school_guidance.id", ondelete="CASCADE"), unique=True)
    exam_id = Column(UUID(as_uuid=True), ForeignKey("exam_calendars.id", ondelete="CASCADE"), unique=True)


class HeroImage(UUIDMixin, Base):
    __tablename__ = "hero_images"

    url = Column(Text, nullable=False)
    alt_text = Column(String(100), nullable=False)

    job_id = Column(UUID(as_uuid=True), ForeignKey("job_competitions.id", ondelete="CASCADE"), unique=True)
    guidance_id = Column(UUID(as_uuid=True), ForeignKey("school_guidance.id", ondelete="CASCADE"), unique=True)
    exam_id = Column(UUID(as_uuid=True), ForeignKey("exam_calendars.id", ondelete="CASCADE"), unique=True)
