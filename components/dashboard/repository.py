"""Repository assembling dashboard snapshots: fetch, then aggregate."""

from datetime import date

from sqlalchemy.ext.asyncio import AsyncSession

from components.budget.repository import BudgetRepository
from components.budget import schemas as budget_schemas
from components.dashboard import aggregator
from components.dashboard.evaluator import evaluate_budget, month_start
from components.dashboard import schemas
from components.expense.repository import ExpenseRepository
from components.user.models import User


class DashboardRepository:
    """Read-only view over a user's expenses and budget."""

    def __init__(self, session: AsyncSession, user: User):
        self.session = session
        self.user = user
        self.expenses = ExpenseRepository(session, user.id)
        self.budgets = BudgetRepository(session, user.id)

    async def get_budget_status(self, as_of: date) -> budget_schemas.BudgetStatus:
        """
        Get the budget of ``as_of``'s month evaluated against its spending.

        Spending is every expense dated on or after the first of the month.
        """
        month = month_start(as_of)
        db_budget = await self.budgets.get_for_month(month)
        records = [aggregator.to_record(expense) for expense in await self.expenses.list_since(month)]
        spend = aggregator.total_spend(records)
        evaluation = evaluate_budget(spend, db_budget.limit_amount if db_budget else None)
        return budget_schemas.BudgetStatus(
            month=month,
            budget=budget_schemas.Budget.model_validate(db_budget) if db_budget else None,
            evaluation=evaluation,
        )

    async def get_dashboard(self, as_of: date) -> schemas.Dashboard:
        """
        Get the dashboard snapshot as of a specific day.

        Returns:
            Totals for all time and for the month of ``as_of``, per-category
            totals, the trend of the last seven days and the budget state.
        """
        records = [aggregator.to_record(expense) for expense in await self.expenses.list()]
        stats = aggregator.build_dashboard(records, as_of)
        db_budget = await self.budgets.get_for_month(as_of)
        evaluation = evaluate_budget(
            aggregator.monthly_spend(records, as_of),
            db_budget.limit_amount if db_budget else None,
        )
        return schemas.Dashboard(
            **stats.model_dump(),
            currency=self.user.currency,
            budget=evaluation,
        )
