"""
PURPOSE: System-level API routes for the Cosmocore service.

Provides the liveness endpoint used by load balancers and orchestrators.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from cosmocore.db.engine import get_db
from cosmocore.schemas.system import HealthCheck
from cosmocore.utils.logger import get_logger


logger = get_logger(__name__)
router = APIRouter(tags=["system"])


@router.get("/health", response_model=HealthCheck)
async def health_check(db: AsyncSession = Depends(get_db)) -> HealthCheck:
    """
    PURPOSE: Report whether the database answers a trivial query.

    Always HTTP 200; the body carries the result. Failures are logged and not retried.

    CALLED BY: Load balancers, container health probes

    Returns:
        HealthCheck: healthy/connected or unhealthy/disconnected
    """
    try:
        await db.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(
            "health_check_failed",
            error=str(e),
            exception_type=type(e).__name__,
        )
        return HealthCheck.from_probe(connected=False)

    return HealthCheck.from_probe(connected=True)
