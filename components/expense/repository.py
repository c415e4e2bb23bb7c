"""Repository for expense operations.

Every query is scoped to the owning user, so rows of other users behave as
if they did not exist.
"""

import logging
from datetime import date
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from components.expense.models import Expense
from components.expense.schemas import ExpenseCreate, ExpenseUpdate

logger = logging.getLogger(__name__)


class ExpenseRepository:
    """Repository for expense operations."""

    def __init__(self, session: AsyncSession, user_id: str):
        """Initialize repository with database session and owning user."""
        self.session = session
        self.user_id = user_id

    def _owned(self):
        return select(Expense).where(Expense.user_id == self.user_id)

    async def list(self, limit: Optional[int] = None) -> List[Expense]:
        """Get the user's expenses with categories, newest date first."""
        query = self._owned().order_by(Expense.date.desc(), Expense.created_at.desc())
        if limit is not None:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def list_since(self, day: date) -> List[Expense]:
        """Get the user's expenses dated on or after ``day``."""
        result = await self.session.execute(
            self._owned().where(Expense.date >= day)
        )
        return list(result.scalars().all())

    async def get(self, expense_id: str) -> Optional[Expense]:
        """Get an expense of the user by ID."""
        result = await self.session.execute(
            self._owned().where(Expense.id == expense_id)
        )
        return result.scalar_one_or_none()

    async def create(self, expense: ExpenseCreate) -> Expense:
        """Create a new expense."""
        db_expense = Expense(
            user_id=self.user_id,
            amount=expense.amount,
            description=expense.description,
            category_id=expense.category_id,
            date=expense.date,
        )
        self.session.add(db_expense)
        await self.session.commit()
        await self.session.refresh(db_expense)
        logger.info("Created expense %s for user %s", db_expense.id, self.user_id)
        return db_expense

    async def create_many(self, expenses: List[ExpenseCreate]) -> List[str]:
        """Insert several expenses in a single commit."""
        db_expenses = [
            Expense(
                user_id=self.user_id,
                amount=expense.amount,
                description=expense.description,
                category_id=expense.category_id,
                date=expense.date,
            )
            for expense in expenses
        ]
        self.session.add_all(db_expenses)
        await self.session.commit()
        logger.info("Imported %d expenses for user %s", len(db_expenses), self.user_id)
        return [db_expense.id for db_expense in db_expenses]

    async def update(self, expense_id: str, expense: ExpenseUpdate) -> Optional[Expense]:
        """Update expense by ID."""
        db_expense = await self.get(expense_id)
        if not db_expense:
            return None

        db_expense.amount = expense.amount
        db_expense.description = expense.description
        db_expense.category_id = expense.category_id
        db_expense.date = expense.date

        await self.session.commit()
        # Reload so the joined category reflects the new reference
        await self.session.refresh(db_expense)
        logger.info("Updated expense %s", expense_id)
        return db_expense

    async def delete(self, expense_id: str) -> bool:
        """Delete expense by ID."""
        db_expense = await self.get(expense_id)
        if not db_expense:
            return False

        await self.session.delete(db_expense)
        await self.session.commit()
        logger.info("Deleted expense %s", expense_id)
        return True
