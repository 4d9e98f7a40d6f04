"""
Operational endpoints: health check and Prometheus exposition.

Neither requires a token.
"""

import logging

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from sqlalchemy import text

from backoffice.config import settings
from backoffice.database import engine
from backoffice.workflow import DEFAULT_TRANSITION_TABLE

logger = logging.getLogger(__name__)

router = APIRouter(tags=["system"])


@router.get("/api/health")
async def health_check():
    try:
        async with engine.begin() as conn:
            await conn.execute(text("SELECT 1"))
        database = {"status": "connected"}
    except Exception as exc:
        logger.warning("Health check: database unreachable: %s", exc)
        database = {"status": "disconnected", "error": str(exc)}

    return {
        "status": "healthy" if database["status"] == "connected" else "unhealthy",
        "environment": settings.environment,
        "components": {
            "database": database,
            "workflow": {"statuses": len(DEFAULT_TRANSITION_TABLE.rules)},
        },
    }


@router.get("/metrics")
async def prometheus_metrics():
    """Expose Prometheus metrics in text format."""
    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
