"""Content helpers shared by the admin and public routes.

Turns admin payloads into column values, checks slug uniqueness and renders
rows from any of the three content collections.
"""

import logging
from datetime import datetime, timezone
from typing import Any

from tawjih.schemas.content import READ_SCHEMAS, AdminContentCreate, ContentBase, ContentSummary, ContentUpdate
from tawjih.services.content_types import ContentKind
from tawjih.services.gateway import Gateway
from tawjih.services.sanitize import sanitize_html, sanitize_string, sanitize_url

logger = logging.getLogger(__name__)

PLACEHOLDER_IMAGE = "https://via.placeholder.com/800x400"
DEFAULT_ALT_TEXT = "صورة"

# Columns that only exist on one content type
TYPE_ONLY_FIELDS: dict[ContentKind, tuple[str, ...]] = {
    ContentKind.JOB: ("closing_date",),
    ContentKind.GUIDANCE: (),
    ContentKind.EXAM: ("exam_date", "subject", "school_level"),
}
TYPED_FIELDS = ("closing_date", "exam_date", "subject", "school_level")


class ContentValidationError(ValueError):
    """Admin payload is missing or has malformed fields."""


def parse_date(value: str | None) -> datetime | None:
    """Parse ``YYYY-MM-DD`` as midnight UTC, or any ISO-8601 timestamp. Bad input gives None."""
    if not value:
        return None
    text = value.strip()
    try:
        if len(text) == 10:
            return datetime.strptime(text, "%Y-%m-%d").replace(tzinfo=timezone.utc)
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def _seo_and_hero(
    seo_title: str | None,
    seo_description: str | None,
    hero_url: str | None,
    hero_alt: str | None,
) -> dict[str, Any]:
    values: dict[str, Any] = {}
    if seo_title or seo_description:
        values["seo_meta"] = {
            "title": sanitize_string(seo_title, 60) if seo_title else None,
            "description": sanitize_string(seo_description, 160) if seo_description else None,
        }
    if hero_url or hero_alt:
        values["hero_image"] = {
            "url": sanitize_url(hero_url) if hero_url else PLACEHOLDER_IMAGE,
            "alt_text": sanitize_string(hero_alt or DEFAULT_ALT_TEXT, 100),
        }
    return values


def admin_payload_values(payload: AdminContentCreate) -> tuple[ContentKind, dict[str, Any]]:
    """Sanitize the flat admin form into ``(kind, values)`` ready for ``Collection.create``."""
    if payload.type is None:
        raise ContentValidationError("Content type is required")

    values: dict[str, Any] = {
        "title_ar": sanitize_string(payload.title_ar, 200),
        "slug_ar": sanitize_string(payload.slug_ar, 120),
        "body_ar": sanitize_html(payload.body_ar),
        "sector": sanitize_string(payload.sector, 100),
        "region": sanitize_string(payload.region, 100),
        "featured": payload.featured,
        "published": payload.published,
    }
    if not all(values[name] for name in ("title_ar", "slug_ar", "body_ar", "sector", "region")):
        raise ContentValidationError("Missing required fields")

    kind = payload.type
    if kind in (ContentKind.JOB, ContentKind.GUIDANCE) and payload.pdf_url:
        values["pdf_url"] = sanitize_url(payload.pdf_url)
    if kind is ContentKind.JOB:
        values["closing_date"] = parse_date(payload.closing_date)
    elif kind is ContentKind.EXAM:
        values["exam_date"] = parse_date(payload.exam_date)
        values["subject"] = sanitize_string(payload.subject, 100)
        values["school_level"] = sanitize_string(payload.school_level, 50)
        if not (values["exam_date"] and values["subject"] and values["school_level"]):
            raise ContentValidationError("Missing exam fields")

    values.update(
        _seo_and_hero(payload.seo_title, payload.seo_description, payload.hero_image_url, payload.hero_image_alt)
    )
    return kind, values


def create_values(kind: ContentKind, payload: ContentBase) -> dict[str, Any]:
    """Column values from a validated per-type create schema."""
    values = payload.model_dump(exclude_none=True)
    values["body_ar"] = sanitize_html(values["body_ar"])
    if payload.hero_image is not None:
        values["hero_image"]["url"] = sanitize_url(payload.hero_image.url)
    return {k: v for k, v in values.items() if k not in TYPED_FIELDS or k in TYPE_ONLY_FIELDS[kind]}


def update_values(kind: ContentKind, payload: ContentUpdate) -> dict[str, Any]:
    """Column values from a partial edit; fields foreign to ``kind`` are dropped."""
    values = payload.model_dump(exclude_unset=True, exclude_none=True)
    if "body_ar" in values:
        values["body_ar"] = sanitize_html(values["body_ar"])
    if "hero_image" in values:
        values["hero_image"]["url"] = sanitize_url(values["hero_image"]["url"])
    return {k: v for k, v in values.items() if k not in TYPED_FIELDS or k in TYPE_ONLY_FIELDS[kind]}


async def slug_taken(gateway: Gateway, kind: ContentKind, slug: str) -> bool:
    return await gateway.content(kind).find_first(slug_ar=slug) is not None


async def find_published(gateway: Gateway, kind: ContentKind, record_id) -> Any | None:
    record = await gateway.content(kind).get(record_id)
    if record is None or not record.published:
        return None
    return record


def serialize(kind: ContentKind, record) -> dict[str, Any]:
    return READ_SCHEMAS[kind].model_validate(record).model_dump(mode="json")


def summarize(kind: ContentKind, record) -> dict[str, Any]:
    return ContentSummary(
        id=record.id,
        type=kind,
        title_ar=record.title_ar,
        slug_ar=record.slug_ar,
        sector=record.sector,
        region=record.region,
        featured=record.featured,
        published=record.published,
        created_at=record.created_at,
        updated_at=record.updated_at,
    ).model_dump(mode="json")
