"""Dashboard endpoints for the API."""

from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import get_db
from components.dashboard.repository import DashboardRepository
from components.dashboard import schemas
from components.user.models import User
from restapi.endpoints.auth import get_current_user

router = APIRouter(
    prefix="/dashboard",
    tags=["dashboard"],
)


@router.get("/", response_model=schemas.Dashboard)
async def read_dashboard(
    as_of: Optional[date] = Query(None, description="Day the dashboard is computed for (defaults to today)"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Get spending aggregates for the dashboard.

    Returns:
    - Total spending of all time
    - Spending of the current month
    - Spending per category
    - Daily spending of the last 7 days
    - Budget state of the current month
    """
    return await DashboardRepository(db, current_user).get_dashboard(as_of or date.today())
