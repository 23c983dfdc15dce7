"""
Supabase REST (PostgREST) adapter for the content store.

Read-only. Queries are anonymous-key reads against row-level-secured
tables; the key travels both as `apikey` and as a bearer token.

Raises ContentStoreError on transport failures and non-2xx answers;
callers decide what a failed read means for the request.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ogmeta.core.errors import ContentStoreError

logger = logging.getLogger(__name__)

ARTICLES_TABLE = "articles"
SETTINGS_TABLE = "settings"
SETTINGS_COLUMNS = "site_name,site_description,logo,favicon"


class SupabaseRestClient:
    """Thin PostgREST reader bound to one project URL and key."""

    def __init__(self, base_url: str, api_key: str, client: httpx.AsyncClient) -> None:
        self._rest_url = f"{base_url.rstrip('/')}/rest/v1"
        self._api_key = api_key
        self._client = client

    @property
    def headers(self) -> dict[str, str]:
        return {
            "apikey": self._api_key,
            "Authorization": f"Bearer {self._api_key}",
        }

    async def _select(self, table: str, params: dict[str, str]) -> list[dict[str, Any]]:
        url = f"{self._rest_url}/{table}"
        try:
            response = await self._client.get(url, params=params, headers=self.headers)
        except httpx.HTTPError as e:
            raise ContentStoreError(f"Request to {table} failed: {e}") from e

        if not response.is_success:
            logger.warning(
                "Supabase %s query returned %s: %s",
                table,
                response.status_code,
                response.text[:200],
            )
            raise ContentStoreError(
                f"Supabase {table} query returned {response.status_code}",
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise ContentStoreError(f"Supabase {table} returned invalid JSON") from e

        if not isinstance(data, list):
            raise ContentStoreError(f"Supabase {table} returned a non-list payload")
        return data

    async def fetch_published_article(self, column: str, value: str) -> dict[str, Any] | None:
        """Fetch the first published article where `column` equals `value`."""
        rows = await self._select(
            ARTICLES_TABLE,
            {
                column: f"eq.{value}",
                "status": "eq.published",
                "select": "*",
                "limit": "1",
            },
        )
        return rows[0] if rows else None

    async def fetch_site_settings(self) -> dict[str, Any] | None:
        """Fetch the singleton settings row."""
        rows = await self._select(
            SETTINGS_TABLE,
            {
                "select": SETTINGS_COLUMNS,
                "order": "id.asc",
                "limit": "1",
            },
        )
        return rows[0] if rows else None
