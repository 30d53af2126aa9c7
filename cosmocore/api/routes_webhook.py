"""
PURPOSE: Signal ingestion webhook route for the Cosmocore service.

The POST /webhook endpoint is PUBLIC and unauthenticated. The body is validated
against SignalPayload before the handler runs, so malformed requests are
rejected with 422 and never touch the database.

CALLED BY:
    - External alerting systems (TradingView and similar), POST
"""

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from cosmocore.api.decimal_route import DecimalJSONRoute
from cosmocore.db.engine import get_db
from cosmocore.schemas.signal import SignalPayload
from cosmocore.services.signal_service import SignalService
from cosmocore.utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/webhook", tags=["webhook"], route_class=DecimalJSONRoute)


@router.post(
    "",
    status_code=status.HTTP_200_OK,
    response_class=Response,
    responses={500: {"description": "Signal could not be stored"}},
)
async def receive_signal(
    payload: SignalPayload,
    db: AsyncSession = Depends(get_db),
) -> Response:
    """
    PURPOSE: Store one inbound trading signal.

    Returns an empty body in both outcomes. Store errors are logged here and
    never returned to the caller.

    Args:
        payload: Parsed SignalPayload body.
        db:      Request-scoped session from the shared pool.

    Returns:
        Response: 200 on success, 500 if the insert failed.

    Raises:
        HTTP 422: Malformed JSON or missing/mistyped field (FastAPI built-in).
    """
    logger.debug(
        "webhook_signal_received",
        pair=payload.pair,
        action=payload.action,
        source=payload.source,
    )

    try:
        await SignalService.record_signal(db, payload)
    except Exception as e:
        logger.error(
            "signal_store_failed",
            pair=payload.pair,
            action=payload.action,
            source=payload.source,
            error=str(e),
            exception_type=type(e).__name__,
        )
        return Response(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return Response(status_code=status.HTTP_200_OK)
