"""
ArticleResolver - published article lookup.

Slugs are the public address; some embedded and legacy links carry the raw
primary key instead. Lookup is therefore two-phase:

1. slug = identifier, status = published
2. only if (1) is empty and the identifier looks like a UUID:
   id = identifier, status = published

A store failure counts as a miss. No caching and no retries: each request
re-resolves, and the CDN in front absorbs repeat traffic.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from pydantic import ValidationError

from ogmeta.core.entities import Article
from ogmeta.core.errors import ContentStoreError

from .models import LookupKind
from .ports import ArticleStorePort

logger = logging.getLogger(__name__)

UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


def is_uuid(value: str) -> bool:
    """Check the 8-4-4-4-12 hex textual form."""
    return bool(UUID_PATTERN.match(value))


def normalize_identifier(identifier: str) -> str:
    """Strip surrounding whitespace. Callers pass already-decoded values."""
    return identifier.strip()


class ArticleResolver:
    """Resolves slugs or ids to published articles."""

    def __init__(self, store: ArticleStorePort) -> None:
        self._store = store

    async def _lookup(self, column: str, value: str) -> Article | None:
        try:
            row = await self._store.fetch_published_article(column, value)
        except ContentStoreError as e:
            logger.warning("Article lookup by %s=%r failed: %s", column, value, e)
            return None

        if row is None:
            return None
        return self._to_article(row)

    def _to_article(self, row: Any) -> Article | None:
        if not isinstance(row, dict):
            logger.warning("Discarding non-object article row of type %s", type(row).__name__)
            return None
        try:
            article = Article.model_validate(row)
        except ValidationError as e:
            logger.warning("Discarding malformed article row %r: %s", row.get("id"), e)
            return None

        # The status filter is applied server-side too; never trust it alone.
        if not article.is_published:
            return None
        return article

    async def resolve(self, identifier: str) -> Article | None:
        """Resolve by slug, falling back to id for UUID-shaped identifiers."""
        article, _ = await self.resolve_with_kind(identifier)
        return article

    async def resolve_with_kind(
        self, identifier: str
    ) -> tuple[Article | None, LookupKind | None]:
        """Resolve and report which lookup matched ("slug" or "id")."""
        value = normalize_identifier(identifier)
        if not value:
            return None, None

        article = await self._lookup("slug", value)
        if article is not None:
            return article, "slug"

        if is_uuid(value):
            article = await self._lookup("id", value)
            if article is not None:
                return article, "id"

        return None, None

    async def resolve_by_id(self, article_id: str) -> Article | None:
        """Resolve by primary key only."""
        value = normalize_identifier(article_id)
        if not value:
            return None
        return await self._lookup("id", value)
