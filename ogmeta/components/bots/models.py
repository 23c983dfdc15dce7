"""
Bots component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ClassifyInput:
    """Input for classifying a request."""

    user_agent: str | None
    forced: bool = False


@dataclass(frozen=True)
class ClassifyOutput:
    """Classification result."""

    is_bot: bool
    forced: bool = False
    signature: str | None = None

    @property
    def wants_meta(self) -> bool:
        """True when the meta document should be served."""
        return self.is_bot or self.forced
