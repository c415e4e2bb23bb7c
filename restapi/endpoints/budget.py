"""Budget endpoints for the API."""

import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from components.budget.repository import BudgetRepository
from components.budget import schemas
from components.core.events import change_feed, UPDATE
from components.core.init_db import get_db
from components.dashboard.repository import DashboardRepository
from components.user.models import User
from restapi.endpoints.auth import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/budgets",
    tags=["budgets"],
)


@router.get("/", response_model=schemas.BudgetStatus)
async def read_budget(
    month: Optional[date] = Query(None, description="Any day of the month (defaults to today)"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Get the monthly budget and how much of it is used.

    The evaluation state is one of:
    - unset: no budget for the month
    - normal: at most 80% used
    - near: more than 80% and at most 100% used
    - over: more than 100% used
    """
    return await DashboardRepository(db, current_user).get_budget_status(month or date.today())


@router.put("/", response_model=schemas.BudgetStatus)
async def set_budget(
    budget: schemas.BudgetSet,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Set the monthly budget, replacing any existing limit for that month."""
    month = budget.month or date.today()
    repo = BudgetRepository(db, current_user.id)
    try:
        db_budget = await repo.upsert(month, budget.limit_amount)
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Failed to set budget for user %s", current_user.id)
        raise HTTPException(status_code=400, detail="Failed to set budget")

    change_feed.publish("budgets", UPDATE, db_budget.id, current_user.id)
    return await DashboardRepository(db, current_user).get_budget_status(db_budget.month)
