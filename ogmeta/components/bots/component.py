"""
Bots component - crawler detection.

Invariants:
- I1: Matching is a case-insensitive substring test
- I2: Missing or empty User-Agent is never a bot
- I3: Pure, no I/O
"""

from __future__ import annotations

from ._impl import DEFAULT_BOT_SIGNATURES, matched_signature
from .models import ClassifyInput, ClassifyOutput
from .ports import BotRulesPort


def run(
    inp: ClassifyInput,
    *,
    rules: BotRulesPort | None = None,
) -> ClassifyOutput:
    """
    Classify a request as crawler or human.

    Args:
        inp: User-Agent header value and the force flag.
        rules: Optional rules port supplying the signature list.

    Returns:
        ClassifyOutput with the matched signature, if any.
    """
    signatures = rules.get_bot_signatures() if rules else DEFAULT_BOT_SIGNATURES
    signature = matched_signature(inp.user_agent, signatures)

    return ClassifyOutput(
        is_bot=signature is not None,
        forced=inp.forced,
        signature=signature,
    )
