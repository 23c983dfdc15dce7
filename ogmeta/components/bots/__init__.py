"""
Bots component - User-Agent based crawler detection.
"""

from ._impl import DEFAULT_BOT_SIGNATURES, is_bot, matched_signature
from .component import run
from .models import ClassifyInput, ClassifyOutput
from .ports import BotRulesPort

__all__ = [
    # Entry point
    "run",
    # Functions
    "is_bot",
    "matched_signature",
    # Constants
    "DEFAULT_BOT_SIGNATURES",
    # Models
    "ClassifyInput",
    "ClassifyOutput",
    # Ports
    "BotRulesPort",
]
