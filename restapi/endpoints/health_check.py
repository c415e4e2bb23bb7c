"""Health check endpoint for monitoring application status."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from components.core import schemas
from components.core.init_db import get_db

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/health_check",
    tags=["services"],
    responses={200: {"description": "Service is up"}},
)


@router.get("/", response_model=schemas.HealthCheck)
async def health_check(db: AsyncSession = Depends(get_db)) -> schemas.HealthCheck:
    """Report whether the service can reach its database."""
    try:
        await db.execute(text("SELECT 1"))
        status = "healthy"
    except SQLAlchemyError:
        logger.warning("Database is not reachable", exc_info=True)
        status = "degraded"
    return schemas.HealthCheck(service_name="Expense Tracker", status=status)
