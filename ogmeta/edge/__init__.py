"""
Edge dispatch - bot-aware meta serving for every hosting boundary.
"""

from .dispatcher import (
    DEFAULT_CACHE_CONTROL,
    HTML_CONTENT_TYPE,
    EdgeDispatcher,
    extract_article_identifier,
)
from .middleware import (
    BotMetaMiddleware,
    edge_request_from_starlette,
    make_on_request,
    outcome_response,
)
from .models import EdgeOutcome, EdgeRequest, OutcomeKind, PassReason
from .sources import DirectMetaSource, MetaSource, RemoteMetaSource
from .worker import create_worker_app, forward_to_origin

__all__ = [
    # Dispatcher
    "EdgeDispatcher",
    "extract_article_identifier",
    "DEFAULT_CACHE_CONTROL",
    "HTML_CONTENT_TYPE",
    # Models
    "EdgeOutcome",
    "EdgeRequest",
    "OutcomeKind",
    "PassReason",
    # Sources
    "MetaSource",
    "DirectMetaSource",
    "RemoteMetaSource",
    # Adapters
    "BotMetaMiddleware",
    "make_on_request",
    "edge_request_from_starlette",
    "outcome_response",
    "create_worker_app",
    "forward_to_origin",
]
