"""
Plain-data request/outcome types shared by every hosting adapter.

Adapters translate their native request into an EdgeRequest, hand it to the
dispatcher, and translate the EdgeOutcome back into a native response.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class OutcomeKind(str, Enum):
    """Terminal states of one dispatch."""

    PASS_THROUGH = "pass_through"
    SERVED = "served"


class PassReason(str, Enum):
    """Why a request was passed through."""

    NOT_ARTICLE_PATH = "not_article_path"
    NOT_BOT = "not_bot"
    NO_IDENTIFIER = "no_identifier"
    NOT_CONFIGURED = "not_configured"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class EdgeRequest:
    """Inbound request, reduced to what the dispatcher reads."""

    path: str
    origin: str
    url: str
    user_agent: str | None = None
    query: dict[str, str] = field(default_factory=dict)
    method: str = "GET"


@dataclass(frozen=True)
class EdgeOutcome:
    """Dispatcher decision for one request."""

    kind: OutcomeKind
    html: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    reason: PassReason | None = None
    identifier: str | None = None

    @property
    def served(self) -> bool:
        return self.kind is OutcomeKind.SERVED

    @classmethod
    def pass_through(cls, reason: PassReason, identifier: str | None = None) -> EdgeOutcome:
        return cls(kind=OutcomeKind.PASS_THROUGH, reason=reason, identifier=identifier)
