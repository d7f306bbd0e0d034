"""Persistence gateway: typed collections over the async SQLAlchemy session.

Routes and services never build queries themselves; they talk to a
``Gateway`` and its named collections (``jobCompetition``, ``schoolGuidance``,
``examCalendar``, ``admin``, ``user``, ``bookmark``, ``savedJob``). Tests swap
the gateway for an in-memory one through ``get_gateway``.
"""

import logging
from dataclasses import dataclass
from typing import Any, Iterable
from uuid import UUID

from fastapi import Depends
from sqlalchemy import delete, func, inspect, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tawjih.models import (
    Admin,
    Bookmark,
    ExamCalendar,
    JobCompetition,
    SavedJob,
    SchoolGuidance,
    User,
)
from tawjih.models.base import get_db
from tawjih.services.content_types import CONTENT_TYPES, ContentKind

logger = logging.getLogger(__name__)

COLLECTIONS: dict[str, type] = {
    "jobCompetition": JobCompetition,
    "schoolGuidance": SchoolGuidance,
    "examCalendar": ExamCalendar,
    "admin": Admin,
    "user": User,
    "bookmark": Bookmark,
    "savedJob": SavedJob,
}

Order = tuple[str, str]  # (field, "asc" | "desc")


class GatewayError(Exception):
    """Base class for persistence gateway failures."""


class RecordNotFoundError(GatewayError):
    """The addressed record does not exist in this collection."""


@dataclass(slots=True)
class ContentFilter:
    """Filter for content collections. Exact fields match as-is, *_contains case-insensitively."""

    published: bool | None = None
    featured: bool | None = None
    sector: str | None = None
    region: str | None = None
    school_level: str | None = None
    sector_contains: str | None = None
    region_contains: str | None = None
    title_contains: str | None = None


def _escape_ilike(value: str) -> str:
    """Escape % and _ characters for use in ILIKE patterns."""
    return value.replace("\\", "\\\\").replace("%", r"\%").replace("_", r"\_")


class Collection:
    """CRUD and filtered queries over one mapped model."""

    def __init__(self, session: AsyncSession, model: type, name: str):
        self.session = session
        self.model = model
        self.name = name

    def _column(self, field: str):
        return getattr(self.model, field)

    def _apply_filters(self, query, filters: ContentFilter | None, criteria: dict[str, Any]):
        for field, value in criteria.items():
            query = query.where(self._column(field) == value)
        if filters is None:
            return query

        for field in ("published", "featured", "sector", "region", "school_level"):
            value = getattr(filters, field)
            if value is not None:
                query = query.where(self._column(field) == value)

        for field, value in (
            ("sector", filters.sector_contains),
            ("region", filters.region_contains),
            ("title_ar", filters.title_contains),
        ):
            if value:
                query = query.where(self._column(field).ilike(f"%{_escape_ilike(value)}%", escape="\\"))
        return query

    def _apply_order(self, query, order_by: Iterable[Order]):
        for field, direction in order_by:
            column = self._column(field)
            query = query.order_by(column.desc() if direction == "desc" else column.asc())
        return query

    async def get(self, record_id: UUID):
        return await self.session.get(self.model, record_id)

    async def find_first(self, **criteria):
        query = self._apply_filters(select(self.model), None, criteria).limit(1)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def find_many(
        self,
        filters: ContentFilter | None = None,
        *,
        order_by: Iterable[Order] = (),
        skip: int = 0,
        take: int | None = None,
        **criteria,
    ) -> list:
        query = self._apply_filters(select(self.model), filters, criteria)
        query = self._apply_order(query, order_by).offset(skip)
        if take is not None:
            query = query.limit(take)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count(self, filters: ContentFilter | None = None, **criteria) -> int:
        query = self._apply_filters(select(func.count()).select_from(self.model), filters, criteria)
        return (await self.session.execute(query)).scalar() or 0

    def _assign(self, record, values: dict[str, Any]) -> None:
        relationships = inspect(self.model).relationships
        for field, value in values.items():
            if field in relationships and isinstance(value, dict):
                related = getattr(record, field)
                if related is None:
                    setattr(record, field, relationships[field].mapper.class_(**value))
                else:
                    for key, item in value.items():
                        setattr(related, key, item)
            else:
                setattr(record, field, value)

    async def create(self, values: dict[str, Any]):
        record = self.model()
        self._assign(record, values)
        self.session.add(record)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    async def update(self, record_id: UUID, values: dict[str, Any]):
        record = await self.get(record_id)
        if record is None:
            raise RecordNotFoundError(f"{self.name} {record_id} not found")
        self._assign(record, values)
        await self.session.flush()
        await self.session.refresh(record)
        return record

    async def delete(self, record_id: UUID):
        record = await self.get(record_id)
        if record is None:
            raise RecordNotFoundError(f"{self.name} {record_id} not found")
        await self.session.delete(record)
        await self.session.flush()
        return record

    async def delete_where(self, **criteria) -> int:
        stmt = delete(self.model)
        for field, value in criteria.items():
            stmt = stmt.where(self._column(field) == value)
        result = await self.session.execute(stmt)
        return result.rowcount or 0


class Gateway:
    """Named collections bound to one request session."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self._collections: dict[str, Collection] = {}

    def collection(self, name: str) -> Collection:
        if name not in self._collections:
            self._collections[name] = Collection(self.session, COLLECTIONS[name], name)
        return self._collections[name]

    def content(self, kind: ContentKind) -> Collection:
        return self.collection(CONTENT_TYPES[kind].collection)

    @property
    def admins(self) -> Collection:
        return self.collection("admin")

    @property
    def users(self) -> Collection:
        return self.collection("user")

    @property
    def bookmarks(self) -> Collection:
        return self.collection("bookmark")

    @property
    def saved_jobs(self) -> Collection:
        return self.collection("savedJob")

    async def discard(self, name: str, **criteria) -> int:
        """Delete matching rows inside a savepoint; failures are logged and ignored."""
        try:
            async with self.session.begin_nested():
                return await self.collection(name).delete_where(**criteria)
        except SQLAlchemyError as exc:
            logger.warning("Best-effort cleanup of %s %s failed: %s", name, criteria, exc)
            return 0

    async def ping(self) -> None:
        """Round-trip to the database; the session stays usable after a failure."""
        try:
            await self.session.execute(select(1))
        except SQLAlchemyError:
            await self.session.rollback()
            raise


async def get_gateway(db: AsyncSession = Depends(get_db)) -> Gateway:
    return Gateway(db)
