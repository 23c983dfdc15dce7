"""
EdgeDispatcher - per-request state machine shared by all hosting adapters.

    inspect path -> classify -> extract identifier -> resolve -> render

Every early exit is a pass-through: a broken preview path must never block
a reader, or a crawler, from reaching the real page.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from ogmeta.components.articles import normalize_identifier
from ogmeta.components.bots import DEFAULT_BOT_SIGNATURES, ClassifyInput
from ogmeta.components.bots import run as run_classify

from .models import EdgeOutcome, EdgeRequest, OutcomeKind, PassReason
from .sources import MetaSource

logger = logging.getLogger(__name__)

HTML_CONTENT_TYPE = "text/html;charset=UTF-8"
DEFAULT_CACHE_CONTROL = "public, max-age=3600, s-maxage=3600"
DEFAULT_ARTICLE_PREFIX = "/article/"


def extract_article_identifier(path: str, prefix: str = DEFAULT_ARTICLE_PREFIX) -> str | None:
    """Pull the slug or id segment after the article prefix.

    `path` is the already-decoded request path; the segment is not decoded again.
    """
    match = re.search(re.escape(prefix) + r"([^/?]+)", path)
    if not match:
        return None
    identifier = normalize_identifier(match.group(1))
    return identifier or None


class _SignatureRules:
    def __init__(self, signatures: Iterable[str]) -> None:
        self._signatures = list(signatures)

    def get_bot_signatures(self) -> list[str]:
        return self._signatures


class EdgeDispatcher:
    def __init__(
        self,
        source: MetaSource | None,
        signatures: Iterable[str] = DEFAULT_BOT_SIGNATURES,
        article_prefix: str = DEFAULT_ARTICLE_PREFIX,
        cache_control: str = DEFAULT_CACHE_CONTROL,
        allow_force: bool = False,
        force_param: str = "force",
    ) -> None:
        """
        Args:
            source: Meta source; None when the store is not configured
            signatures: Bot User-Agent signatures
            article_prefix: Path prefix of article detail routes
            cache_control: Cache-Control value for served documents
            allow_force: Honour the force query parameter
            force_param: Name of the force query parameter
        """
        self._source = source
        self._rules = _SignatureRules(signatures)
        self._prefix = article_prefix
        self._cache_control = cache_control
        self._allow_force = allow_force
        self._force_param = force_param

    @property
    def article_prefix(self) -> str:
        return self._prefix

    def is_article_path(self, path: str) -> bool:
        return path.startswith(self._prefix)

    async def dispatch(self, request: EdgeRequest) -> EdgeOutcome:
        if not self.is_article_path(request.path):
            return EdgeOutcome.pass_through(PassReason.NOT_ARTICLE_PATH)

        forced = self._allow_force and self._force_param in request.query
        classification = run_classify(
            ClassifyInput(user_agent=request.user_agent, forced=forced),
            rules=self._rules,
        )
        if not classification.wants_meta:
            return EdgeOutcome.pass_through(PassReason.NOT_BOT)

        identifier = extract_article_identifier(request.path, self._prefix)
        if identifier is None:
            return EdgeOutcome.pass_through(PassReason.NO_IDENTIFIER)

        if self._source is None:
            logger.error("Content store not configured; passing %s through", request.path)
            return EdgeOutcome.pass_through(PassReason.NOT_CONFIGURED, identifier)

        try:
            html = await self._source.fetch(identifier, request)
        except Exception:
            logger.exception("Meta source failed for %r; passing through", identifier)
            return EdgeOutcome.pass_through(PassReason.NOT_FOUND, identifier)
        if html is None:
            logger.info("No meta document for %r; passing through", identifier)
            return EdgeOutcome.pass_through(PassReason.NOT_FOUND, identifier)

        logger.info(
            "Serving meta document for %r to %s",
            identifier,
            classification.signature or "forced request",
        )
        return EdgeOutcome(
            kind=OutcomeKind.SERVED,
            html=html,
            headers={
                "Content-Type": HTML_CONTENT_TYPE,
                "Cache-Control": self._cache_control,
            },
            identifier=identifier,
        )
