"""Health domain router.

Liveness check with a database round trip, for load balancers.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from enrollhub.core.constants import Routes
from enrollhub.core.deps import SessionDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix=Routes.HEALTH.prefix, tags=[Routes.HEALTH.tag])


@router.get("")
async def health(session: SessionDep):
    """Report ok when ``SELECT 1`` succeeds, 503 otherwise."""
    try:
        session.connection().execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error("Database health check failed: %s", e)
        return JSONResponse(
            status_code=503,
            content={"success": False, "status": "unhealthy", "database": "error"},
        )
    return {"success": True, "status": "ok", "database": "ok"}
