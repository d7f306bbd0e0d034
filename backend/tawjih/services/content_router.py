"""Content router: apply admin patches and deletes to whichever collection owns an id.

Content ids are not namespaced by type, and the admin list only carries the
bare id. When the caller supplies the content type the router dispatches
directly; otherwise it tries job -> guidance -> exam, one attempt at a time,
and the first collection that owns the id wins.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable
from uuid import UUID

from tawjih.services.content_types import LOOKUP_ORDER, ContentKind
from tawjih.services.gateway import Collection, Gateway, RecordNotFoundError
from tawjih.services.sanitize import parse_flag, sanitize_string

logger = logging.getLogger(__name__)

TITLE_MAX_LENGTH = 200


@dataclass(slots=True)
class RoutedResult:
    kind: ContentKind
    record: Any


def build_patch(fields: dict[str, Any]) -> dict[str, Any]:
    """Copy only the recognised fields from a loosely-typed bag.

    ``published``/``featured`` accept booleans or "true"/"false"; ``title`` (or
    ``title_ar``) is sanitized and truncated. Everything else is dropped.
    """
    patch: dict[str, Any] = {}
    for flag in ("published", "featured"):
        value = parse_flag(fields.get(flag))
        if value is not None:
            patch[flag] = value

    for key in ("title_ar", "title"):
        title = fields.get(key)
        if isinstance(title, str):
            patch["title_ar"] = sanitize_string(title, TITLE_MAX_LENGTH)
            break
    return patch


class ContentRouter:
    def __init__(self, gateway: Gateway):
        self.gateway = gateway

    async def apply_update(
        self,
        record_id: UUID,
        fields: dict[str, Any],
        kind: ContentKind | None = None,
    ) -> RoutedResult | None:
        """Patch the owning row; None when no collection owns ``record_id``."""
        patch = build_patch(fields)
        return await self._route(record_id, kind, lambda collection: collection.update(record_id, patch))

    async def apply_delete(self, record_id: UUID, kind: ContentKind | None = None) -> RoutedResult | None:
        """Delete the owning row after clearing saved jobs and bookmarks that point at it."""
        if kind is None:
            await self.gateway.discard("savedJob", job_id=record_id)
            await self.gateway.discard("bookmark", target_id=record_id)
        else:
            if kind is ContentKind.JOB:
                await self.gateway.discard("savedJob", job_id=record_id)
            await self.gateway.discard("bookmark", target_id=record_id, target_type=kind.value)

        return await self._route(record_id, kind, lambda collection: collection.delete(record_id))

    async def _route(
        self,
        record_id: UUID,
        kind: ContentKind | None,
        operation: Callable[[Collection], Awaitable[Any]],
    ) -> RoutedResult | None:
        kinds = (kind,) if kind is not None else LOOKUP_ORDER
        for candidate in kinds:
            try:
                record = await operation(self.gateway.content(candidate))
            except RecordNotFoundError:
                logger.debug("Content %s not in %s collection", record_id, candidate.value)
                continue
            return RoutedResult(kind=candidate, record=record)

        logger.info("Content %s not found in %s", record_id, [k.value for k in kinds])
        return None
