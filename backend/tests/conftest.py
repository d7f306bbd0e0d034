"""Shared fixtures: an in-memory gateway injected in place of the database."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Any

import pytest
from fastapi.testclient import TestClient

from tawjih.main import app
from tawjih.models.user import DEFAULT_PREFERENCES
from tawjih.services.auth_service import create_token
from tawjih.services.cache import TTLCache
from tawjih.services.content_types import ContentKind
from tawjih.services.gateway import ContentFilter, Gateway, GatewayError, RecordNotFoundError, get_gateway
from tawjih.services.rate_limit import RateLimiter

CONTENT_COLLECTIONS = ("jobCompetition", "schoolGuidance", "examCalendar")
RELATIONSHIPS = ("seo_meta", "hero_image")


def _defaults(name: str) -> dict[str, Any]:
    now = datetime.now(timezone.utc)
    values: dict[str, Any] = {"id": uuid.uuid4(), "created_at": now, "updated_at": now}
    if name in CONTENT_COLLECTIONS:
        values.update(
            title_ar="عنوان افتراضي للمحتوى",
            slug_ar=f"slug-{uuid.uuid4().hex[:8]}",
            body_ar="نص افتراضي للمحتوى المنشور",
            sector="التعليم",
            region="وطني",
            pdf_url=None,
            featured=False,
            published=True,
            seo_meta=None,
            hero_image=None,
        )
    if name == "jobCompetition":
        values["closing_date"] = None
    if name == "examCalendar":
        values.update(exam_date=now, subject="الرياضيات", school_level="الثانية باكالوريا")
    if name == "user":
        values.update(role="user", preferences=dict(DEFAULT_PREFERENCES))
    if name == "savedJob":
        values["job"] = None
    return values


def _matches(record, filters: ContentFilter | None, criteria: dict[str, Any]) -> bool:
    for field, value in criteria.items():
        if getattr(record, field, None) != value:
            return False
    if filters is None:
        return True
    for field in ("published", "featured", "sector", "region", "school_level"):
        value = getattr(filters, field)
        if value is not None and getattr(record, field, None) != value:
            return False
    for field, value in (
        ("sector", filters.sector_contains),
        ("region", filters.region_contains),
        ("title_ar", filters.title_contains),
    ):
        if value and value.lower() not in (getattr(record, field, None) or "").lower():
            return False
    return True


class FakeCollection:
    """List-backed stand-in for ``Collection``; every public call is recorded on the gateway."""

    def __init__(self, gateway: "InMemoryGateway", name: str):
        self.gateway = gateway
        self.name = name
        self.rows: list[SimpleNamespace] = []

    def _record(self, operation: str) -> None:
        self.gateway.calls.append((self.name, operation))
        error = self.gateway.failures.get((self.name, operation))
        if error is not None:
            raise error

    def _assign(self, record, values: dict[str, Any]) -> None:
        for field, value in values.items():
            if field in RELATIONSHIPS and isinstance(value, dict):
                current = getattr(record, field, None)
                if current is None:
                    setattr(record, field, SimpleNamespace(**value))
                else:
                    for key, item in value.items():
                        setattr(current, key, item)
            else:
                setattr(record, field, value)

    def _find(self, record_id):
        return next((row for row in self.rows if row.id == record_id), None)

    def add(self, **values) -> SimpleNamespace:
        """Insert directly, without recording a call."""
        record = SimpleNamespace(**_defaults(self.name))
        self._assign(record, values)
        if self.name == "savedJob":
            record.job = self.gateway.collection("jobCompetition")._find(record.job_id)
        self.rows.append(record)
        return record

    async def get(self, record_id):
        self._record("get")
        return self._find(record_id)

    async def find_first(self, **criteria):
        self._record("find_first")
        return next((row for row in self.rows if _matches(row, None, criteria)), None)

    async def find_many(self, filters=None, *, order_by=(), skip=0, take=None, **criteria):
        self._record("find_many")
        rows = [row for row in self.rows if _matches(row, filters, criteria)]
        for field, direction in reversed(tuple(order_by)):
            rows.sort(key=lambda row: getattr(row, field), reverse=direction == "desc")
        rows = rows[skip:]
        return rows if take is None else rows[:take]

    async def count(self, filters=None, **criteria) -> int:
        self._record("count")
        return sum(1 for row in self.rows if _matches(row, filters, criteria))

    async def create(self, values: dict[str, Any]):
        self._record("create")
        return self.add(**values)

    async def update(self, record_id, values: dict[str, Any]):
        self._record("update")
        record = self._find(record_id)
        if record is None:
            raise RecordNotFoundError(f"{self.name} {record_id} not found")
        self._assign(record, values)
        record.updated_at = datetime.now(timezone.utc)
        return record

    async def delete(self, record_id):
        self._record("delete")
        record = self._find(record_id)
        if record is None:
            raise RecordNotFoundError(f"{self.name} {record_id} not found")
        self.rows.remove(record)
        return record

    async def delete_where(self, **criteria) -> int:
        self._record("delete_where")
        doomed = [row for row in self.rows if _matches(row, None, criteria)]
        for row in doomed:
            self.rows.remove(row)
        return len(doomed)


class InMemoryGateway(Gateway):
    def __init__(self):
        self._collections: dict[str, FakeCollection] = {}
        self.calls: list[tuple[str, str]] = []
        self.failures: dict[tuple[str, str], Exception] = {}

    def collection(self, name: str) -> FakeCollection:
        if name not in self._collections:
            self._collections[name] = FakeCollection(self, name)
        return self._collections[name]

    async def discard(self, name: str, **criteria) -> int:
        try:
            return await self.collection(name).delete_where(**criteria)
        except GatewayError:
            return 0

    async def ping(self) -> None:
        self.calls.append(("gateway", "ping"))
        error = self.failures.get(("gateway", "ping"))
        if error is not None:
            raise error

    def fail(self, name: str, operation: str, error: Exception | None = None) -> None:
        self.failures[(name, operation)] = error or GatewayError(f"{name}.{operation} failed")

    def mutations(self) -> list[tuple[str, str]]:
        return [call for call in self.calls if call[1] in ("create", "update", "delete", "delete_where")]

    def add_content(self, kind: ContentKind, **values) -> SimpleNamespace:
        return self.content(kind).add(**values)


@pytest.fixture
def gateway() -> InMemoryGateway:
    return InMemoryGateway()


@pytest.fixture
def client(gateway: InMemoryGateway):
    app.dependency_overrides[get_gateway] = lambda: gateway
    app.state.rate_limiter = RateLimiter(max_requests=100, window_seconds=900)
    app.state.response_cache = TTLCache(max_entries=50, default_ttl=300)

    yield TestClient(app, raise_server_exceptions=False)

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    token = create_token(str(uuid.uuid4()), "admin@tawjih.local", "admin")
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def user(gateway: InMemoryGateway) -> SimpleNamespace:
    return gateway.users.add(name="سارة", email="sara@example.com", password_hash="$2b$12$notarealhash")


@pytest.fixture
def user_headers(user: SimpleNamespace) -> dict[str, str]:
    token = create_token(str(user.id), user.email, "user")
    return {"Authorization": f"Bearer {token}"}
