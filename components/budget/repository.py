"""Repository for budget operations."""

import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from components.budget.models import Budget
from components.dashboard.evaluator import month_start

logger = logging.getLogger(__name__)


class BudgetRepository:
    """Repository for the monthly budgets of one user."""

    def __init__(self, session: AsyncSession, user_id: str):
        """Initialize repository with database session and owning user."""
        self.session = session
        self.user_id = user_id

    async def get_for_month(self, month: date) -> Optional[Budget]:
        """Get the budget of the month containing ``month``, if any."""
        result = await self.session.execute(
            select(Budget).where(
                Budget.user_id == self.user_id,
                Budget.month == month_start(month),
            )
        )
        return result.scalar_one_or_none()

    async def upsert(self, month: date, limit_amount: Decimal) -> Budget:
        """
        Create the month's budget or replace its limit.

        The key is (user, first day of month), so there is at most one
        budget per user and month.
        """
        db_budget = await self.get_for_month(month)
        if db_budget is None:
            db_budget = Budget(
                user_id=self.user_id,
                month=month_start(month),
                limit_amount=limit_amount,
            )
            self.session.add(db_budget)
        else:
            db_budget.limit_amount = limit_amount

        await self.session.commit()
        await self.session.refresh(db_budget)
        logger.info("Set budget %s for %s to %s", db_budget.id, db_budget.month, limit_amount)
        return db_budget
