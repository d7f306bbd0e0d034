"""Pydantic schemas for job competitions, guidance articles and exam calendars."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from tawjih.services.content_types import ContentKind


class SeoMetaIn(BaseModel):
    title: str | None = Field(default=None, max_length=60)
    description: str | None = Field(default=None, max_length=160)


class HeroImageIn(BaseModel):
    url: str
    alt_text: str = Field(min_length=1, max_length=100)


class SeoMetaRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str | None = None
    description: str | None = None


class HeroImageRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    url: str
    alt_text: str


class ContentBase(BaseModel):
    """Fields shared by every content type on create."""

    title_ar: str = Field(min_length=5, max_length=200)
    slug_ar: str = Field(min_length=5, max_length=100)
    body_ar: str = Field(min_length=10)
    sector: str = Field(min_length=2)
    region: str = Field(min_length=2)
    pdf_url: str | None = None
    featured: bool = False
    published: bool = False
    seo_meta: SeoMetaIn | None = None
    hero_image: HeroImageIn | None = None


class JobCreate(ContentBase):
    closing_date: datetime | None = None


class GuidanceCreate(ContentBase):
    pass


class ExamCreate(ContentBase):
    exam_date: datetime
    subject: str = Field(min_length=2)
    school_level: str = Field(min_length=2)


class ContentUpdate(BaseModel):
    """Partial edit by slug; fields that do not apply to the type are ignored."""

    title_ar: str | None = Field(default=None, min_length=5, max_length=200)
    slug_ar: str | None = Field(default=None, min_length=5, max_length=100)
    body_ar: str | None = Field(default=None, min_length=10)
    sector: str | None = Field(default=None, min_length=2)
    region: str | None = Field(default=None, min_length=2)
    pdf_url: str | None = None
    featured: bool | None = None
    published: bool | None = None
    closing_date: datetime | None = None
    exam_date: datetime | None = None
    subject: str | None = Field(default=None, min_length=2)
    school_level: str | None = Field(default=None, min_length=2)
    seo_meta: SeoMetaIn | None = None
    hero_image: HeroImageIn | None = None


class ContentRead(BaseModel):
    """Full content output."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title_ar: str
    slug_ar: str
    body_ar: str
    sector: str
    region: str
    pdf_url: str | None = None
    featured: bool
    published: bool
    created_at: datetime
    updated_at: datetime
    seo_meta: SeoMetaRead | None = None
    hero_image: HeroImageRead | None = None


class JobRead(ContentRead):
    closing_date: datetime | None = None


class GuidanceRead(ContentRead):
    pass


class ExamRead(ContentRead):
    exam_date: datetime
    subject: str
    school_level: str


class ContentSummary(BaseModel):
    """Type-independent row shape used by the admin list and the content router."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    type: ContentKind
    title_ar: str
    slug_ar: str
    sector: str
    region: str
    featured: bool
    published: bool
    created_at: datetime
    updated_at: datetime


class AdminContentCreate(BaseModel):
    """Flat admin form payload; ``type`` picks the target collection."""

    type: ContentKind | None = None
    title_ar: str = ""
    slug_ar: str = ""
    body_ar: str = ""
    sector: str = ""
    region: str = ""
    featured: bool = False
    published: bool = False
    pdf_url: str | None = None
    closing_date: str | None = None
    exam_date: str | None = None
    subject: str = ""
    school_level: str = ""
    seo_title: str | None = None
    seo_description: str | None = None
    hero_image_url: str | None = None
    hero_image_alt: str | None = None


READ_SCHEMAS: dict[ContentKind, type[ContentRead]] = {
    ContentKind.JOB: JobRead,
    ContentKind.GUIDANCE: GuidanceRead,
    ContentKind.EXAM: ExamRead,
}

CREATE_SCHEMAS: dict[ContentKind, type[ContentBase]] = {
    ContentKind.JOB: JobCreate,
    ContentKind.GUIDANCE: GuidanceCreate,
    ContentKind.EXAM: ExamCreate,
}
