"""
Articles component port definitions.
"""

from __future__ import annotations

from typing import Any, Protocol


class ArticleStorePort(Protocol):
    """Read-only access to published article rows."""

    async def fetch_published_article(self, column: str, value: str) -> dict[str, Any] | None:
        """
        Fetch the first row with `column = value` and status published.

        Raises ContentStoreError when the store cannot answer.
        """
        ...
