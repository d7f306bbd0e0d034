"""School guidance model: orientation articles for schools and universities."""

from sqlalchemy import Index
from sqlalchemy.orm import relationship

from tawjih.models.base import Base, ContentMixin


class SchoolGuidance(ContentMixin, Base):
    __tablename__ = "school_guidance"

    seo_meta = relationship("SeoMeta", uselist=False, lazy="selectin", cascade="all, delete-orphan")
    hero_image = relationship("HeroImage", uselist=False, lazy="selectin", cascade="all, delete-orphan")

    __table_args__ = (
        Index("idx_guidance_published_featured", "published", "featured", "created_at"),
    )
