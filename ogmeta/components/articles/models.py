"""
Articles component input/output models.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from ogmeta.core.entities import Article

LookupKind = Literal["slug", "id"]


@dataclass(frozen=True)
class ResolveError:
    """Why a resolution produced no article."""

    code: str
    message: str


@dataclass(frozen=True)
class ResolveInput:
    """Input for resolving an article.

    `identifier` is a raw path segment (slug or UUID, possibly
    already percent-decoded). Set `kind="id"` to skip the slug phase.
    """

    identifier: str
    kind: LookupKind | None = None


@dataclass(frozen=True)
class ResolveOutput:
    """Output containing the resolved article, if any."""

    article: Article | None
    matched_by: LookupKind | None = None
    errors: list[ResolveError] = field(default_factory=list)
    success: bool = True
