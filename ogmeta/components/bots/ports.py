"""
Bots component port definitions.
"""

from __future__ import annotations

from typing import Protocol


class BotRulesPort(Protocol):
    """Port for the configured bot signature list."""

    def get_bot_signatures(self) -> list[str]:
        """Get User-Agent signatures that identify crawlers."""
        ...
