"""
Health check endpoint.

Reports liveness plus a live database probe so a load balancer can tell a
running process from a usable one.
"""

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession
from datetime import datetime, timezone
from typing import Dict, Any

from alumni_portal.core.config import settings
from alumni_portal.core.database import get_db
from alumni_portal.core.logging_config import logger

router = APIRouter(tags=["Health"])


async def check_database(db: AsyncSession) -> bool:
    """Run SELECT 1 on the request session"""
    try:
        await db.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"[HealthCheck] Database check failed: {e}")
        return False


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)) -> Dict[str, Any]:
    """Server status, timestamp, database connectivity and environment"""
    db_ok = await check_database(db)
    return {
        "status": "ok" if db_ok else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "connected" if db_ok else "disconnected",
        "environment": settings.ENVIRONMENT,
    }
