"""
Bot classification by User-Agent.

A request is treated as a crawler or link-unfurler when its User-Agent
contains any known signature anywhere, compared case-insensitively.
No header means no evidence, so the answer is False.
"""

from __future__ import annotations

from collections.abc import Iterable

# Social networks, search engines, messaging apps and validators.
DEFAULT_BOT_SIGNATURES: tuple[str, ...] = (
    "facebookexternalhit",
    "Facebot",
    "Twitterbot",
    "LinkedInBot",
    "WhatsApp",
    "TelegramBot",
    "Slackbot",
    "Discordbot",
    "Pinterest",
    "Googlebot",
    "bingbot",
    "Slurp",
    "DuckDuckBot",
    "Baiduspider",
    "YandexBot",
    "Sogou",
    "Exabot",
    "ia_archiver",
    "Applebot",
    "redditbot",
    "Embedly",
    "Quora Link Preview",
    "showyoubot",
    "outbrain",
    "vkShare",
    "W3C_Validator",
)


def matched_signature(
    user_agent: str | None,
    signatures: Iterable[str] = DEFAULT_BOT_SIGNATURES,
) -> str | None:
    """Return the first signature found in the User-Agent, or None."""
    if not user_agent:
        return None

    lower_ua = user_agent.lower()
    for signature in signatures:
        if signature and signature.lower() in lower_ua:
            return signature
    return None


def is_bot(
    user_agent: str | None,
    signatures: Iterable[str] = DEFAULT_BOT_SIGNATURES,
) -> bool:
    """Check whether the User-Agent belongs to a known crawler."""
    return matched_signature(user_agent, signatures) is not None
