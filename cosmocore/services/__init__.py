"""Service layer for the Cosmocore ingestion service."""

from cosmocore.services.signal_service import SignalService

__all__ = [
    "SignalService",
]
