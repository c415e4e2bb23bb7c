"""Pydantic schemas for dashboard aggregates and budget evaluation."""

from datetime import date
from decimal import Decimal
from typing import List, Literal, Optional
from pydantic import BaseModel

BudgetState = Literal["unset", "normal", "near", "over"]


class ExpenseRecord(BaseModel):
    """Expense row with its resolved category, as consumed by the aggregator."""
    amount: Decimal
    date: date
    category_name: Optional[str] = None
    category_color: Optional[str] = None
    category_icon: Optional[str] = None


class CategoryTotal(BaseModel):
    """Schema for one category bucket."""
    category: str
    amount: float
    color: str
    icon: str


class DailyAmount(BaseModel):
    """Schema for one day of the spending trend."""
    date: str
    amount: float


class DashboardStats(BaseModel):
    """Schema for the dashboard snapshot."""
    as_of: date
    total_expenses: float
    monthly_expenses: float
    category_count: int
    category_summary: List[CategoryTotal]
    daily_trend: List[DailyAmount]


class BudgetEvaluation(BaseModel):
    """Schema for a budget classified against the month's spending."""
    state: BudgetState
    spent: float
    limit_amount: Optional[float] = None
    percentage: float
    progress: float
    remaining: Optional[float] = None
    overage: Optional[float] = None
    message: Optional[str] = None


class Dashboard(DashboardStats):
    """Dashboard snapshot together with the current budget state."""
    currency: str = "USD"
    budget: BudgetEvaluation
