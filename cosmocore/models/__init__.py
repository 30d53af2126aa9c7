"""Database models for the Cosmocore ingestion service.

Import all models here so the mapper registry resolves relationships.
"""

from cosmocore.models.bot import Bot
from cosmocore.models.signal import Signal

__all__ = [
    "Bot",
    "Signal",
]
