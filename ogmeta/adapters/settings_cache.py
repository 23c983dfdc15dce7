"""
In-memory TTL cache for the site settings row.

Holds one (value, expiry) pair. Lifetime is process start until either the
TTL elapses or `invalidate()` is called. The cache is an explicit object
handed to SiteSettingsService, never a module-level variable.
"""

from __future__ import annotations

from datetime import datetime, timedelta

from ogmeta.core.entities import SiteSettings
from ogmeta.ports.clock import ClockPort


class TTLSettingsCache:
    """Single-slot settings cache with a fixed TTL."""

    def __init__(self, ttl_seconds: float, clock: ClockPort) -> None:
        self._ttl = timedelta(seconds=ttl_seconds)
        self._clock = clock
        self._value: SiteSettings | None = None
        self._expires_at: datetime | None = None

    def get(self) -> SiteSettings | None:
        if self._value is None or self._expires_at is None:
            return None
        if self._clock.now_utc() >= self._expires_at:
            self.invalidate()
            return None
        return self._value

    def put(self, settings: SiteSettings) -> None:
        if self._ttl <= timedelta(0):
            return
        self._value = settings
        self._expires_at = self._clock.now_utc() + self._ttl

    def invalidate(self) -> None:
        self._value = None
        self._expires_at = None


class NoOpSettingsCache:
    """Cache that never holds anything; every request re-fetches."""

    def get(self) -> SiteSettings | None:
        return None

    def put(self, settings: SiteSettings) -> None:
        pass

    def invalidate(self) -> None:
        pass
