"""Spending aggregates computed from a user's expenses.

All functions are pure: they take the already fetched rows and a reference
day and never touch the database.
"""

from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence

from components.category.schemas import (
    DEFAULT_CATEGORY_COLOR,
    DEFAULT_CATEGORY_ICON,
    DEFAULT_CATEGORY_NAME,
)
from components.dashboard.schemas import (
    CategoryTotal,
    DailyAmount,
    DashboardStats,
    ExpenseRecord,
)
from components.dashboard.evaluator import month_start

TREND_DAYS = 7


def to_record(expense) -> ExpenseRecord:
    """Build an aggregator record from an ORM expense with its category."""
    category = expense.category
    return ExpenseRecord(
        amount=expense.amount,
        date=expense.date,
        category_name=category.name if category else None,
        category_color=category.color if category else None,
        category_icon=category.icon if category else None,
    )


def _sum(expenses: Iterable[ExpenseRecord]) -> Decimal:
    return sum((Decimal(expense.amount) for expense in expenses), Decimal("0"))


def total_spend(expenses: Iterable[ExpenseRecord]) -> Decimal:
    """Sum of all expense amounts."""
    return _sum(expenses)


def monthly_spend(expenses: Iterable[ExpenseRecord], now: date) -> Decimal:
    """Sum of amounts dated on or after the first day of ``now``'s month."""
    first_day = month_start(now)
    return _sum(expense for expense in expenses if expense.date >= first_day)


def category_summary(expenses: Iterable[ExpenseRecord]) -> List[CategoryTotal]:
    """
    Total per category in first-seen order.

    Expenses without a category land in the "Other" bucket. Each expense
    contributes to exactly one bucket, so the bucket amounts add up to the
    total spend.
    """
    buckets: Dict[str, Dict] = {}
    for expense in expenses:
        name = expense.category_name or DEFAULT_CATEGORY_NAME
        color = expense.category_color or DEFAULT_CATEGORY_COLOR
        icon = expense.category_icon or DEFAULT_CATEGORY_ICON
        bucket = buckets.setdefault(name, {"amount": Decimal("0")})
        bucket["amount"] += Decimal(expense.amount)
        bucket["color"] = color
        bucket["icon"] = icon

    return [
        CategoryTotal(
            category=name,
            amount=float(bucket["amount"]),
            color=bucket["color"],
            icon=bucket["icon"],
        )
        for name, bucket in buckets.items()
    ]


def daily_trend(expenses: Sequence[ExpenseRecord], now: date) -> List[DailyAmount]:
    """Seven daily totals ending at ``now``, oldest day first."""
    days = [(now - timedelta(days=offset)).isoformat() for offset in range(TREND_DAYS - 1, -1, -1)]
    totals = {day: Decimal("0") for day in days}
    for expense in expenses:
        key = expense.date.isoformat()
        if key in totals:
            totals[key] += Decimal(expense.amount)
    return [DailyAmount(date=day, amount=float(totals[day])) for day in days]


def build_dashboard(expenses: Sequence[ExpenseRecord], now: date) -> DashboardStats:
    """Compose every aggregate into one dashboard snapshot."""
    summary = category_summary(expenses)
    return DashboardStats(
        as_of=now,
        total_expenses=float(total_spend(expenses)),
        monthly_expenses=float(monthly_spend(expenses, now)),
        category_count=len(summary),
        category_summary=summary,
        daily_trend=daily_trend(expenses, now),
    )
