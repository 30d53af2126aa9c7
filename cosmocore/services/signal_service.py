"""
Signal service for the Cosmocore ingestion service.

PURPOSE: Persist inbound webhook signals. One INSERT per signal, no retries,
no deduplication. Database errors propagate to the caller.

CALLED BY: cosmocore.api.routes_webhook
"""

from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from cosmocore.models.signal import Signal
from cosmocore.schemas.signal import SignalPayload
from cosmocore.utils.logger import get_logger


logger = get_logger("services.signal")


class SignalService:
    """
    Service for storing trading signals.

    PURPOSE: Turn a validated SignalPayload into a signals row, keeping a JSON
    copy of the payload next to the typed columns.

    CALLED BY: POST /webhook endpoint
    """

    @staticmethod
    def build_raw_payload(payload: SignalPayload) -> Optional[dict[str, Any]]:
        """
        Re-serialize the payload to a JSON-compatible document.

        Falls back to None when serialization fails; the signal is still stored.

        Args:
            payload: Validated webhook payload

        Returns:
            dict with the four payload fields (price as a decimal string), or None
        """
        try:
            return payload.model_dump(mode="json")
        except Exception as e:
            logger.warning(
                "raw_payload_serialization_failed",
                pair=payload.pair,
                error=str(e),
                exception_type=type(e).__name__,
            )
            return None

    @staticmethod
    async def record_signal(db: AsyncSession, payload: SignalPayload) -> Signal:
        """
        Insert a new signal row and commit.

        PURPOSE: Store the four payload fields verbatim plus the raw document.
        bot_id is left NULL.

        CALLED BY: POST /webhook endpoint

        Args:
            db: Async database session
            payload: Validated webhook payload

        Returns:
            Signal: The stored row

        Raises:
            sqlalchemy.exc.SQLAlchemyError: If the insert or commit fails
        """
        signal = Signal(
            pair=payload.pair,
            action=payload.action,
            price=payload.price,
            source=payload.source,
            raw_payload=SignalService.build_raw_payload(payload),
        )

        db.add(signal)
        await db.commit()

        logger.info(
            "signal_stored",
            signal_id=str(signal.id),
            pair=signal.pair,
            action=signal.action,
            source=signal.source,
        )

        return signal
