"""Tests for the expense, budget and dashboard repositories on SQLite."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import select, func

from components.budget.models import Budget
from components.budget.repository import BudgetRepository
from components.category.repository import CategoryRepository
from components.dashboard.repository import DashboardRepository
from components.expense.repository import ExpenseRepository
from components.expense.schemas import ExpenseCreate, ExpenseUpdate
from components.user.repository import UserRepository
from components.user.schemas import UserCreate


async def make_user(session, login="alice"):
    return await UserRepository(session).create(UserCreate(login=login, password="secret123"))


async def category_id(session, name):
    return (await CategoryRepository(session).get_by_name(name)).id


def test_budget_upsert_keeps_one_row_per_month(run_db) -> None:
    async def scenario(session):
        user = await make_user(session)
        repo = BudgetRepository(session, user.id)
        first = await repo.upsert(date(2024, 3, 5), Decimal("100"))
        second = await repo.upsert(date(2024, 3, 28), Decimal("250"))
        count = await session.execute(select(func.count(Budget.id)).where(Budget.user_id == user.id))
        return first.id, second, count.scalar()

    first_id, budget, count = run_db(scenario)
    assert count == 1
    assert budget.id == first_id
    assert budget.month == date(2024, 3, 1)
    assert budget.limit_amount == Decimal("250")


def test_budget_lookup_by_any_day_of_month(run_db) -> None:
    async def scenario(session):
        user = await make_user(session)
        repo = BudgetRepository(session, user.id)
        await repo.upsert(date(2024, 4, 1), Decimal("90"))
        return await repo.get_for_month(date(2024, 4, 30)), await repo.get_for_month(date(2024, 5, 1))

    april, may = run_db(scenario)
    assert april.limit_amount == Decimal("90")
    assert may is None


def test_expenses_are_scoped_to_their_owner(run_db) -> None:
    async def scenario(session):
        alice = await make_user(session, "alice")
        bob = await make_user(session, "bob")
        food = await category_id(session, "Food & Dining")
        alice_repo = ExpenseRepository(session, alice.id)
        expense = await alice_repo.create(ExpenseCreate(
            amount="9.99", description="Pizza", category_id=food, date="2024-03-01",
        ))
        bob_repo = ExpenseRepository(session, bob.id)
        return (
            expense,
            await bob_repo.get(expense.id),
            await bob_repo.delete(expense.id),
            await bob_repo.list(),
            await alice_repo.list(),
        )

    expense, seen_by_bob, deleted_by_bob, bob_list, alice_list = run_db(scenario)
    assert expense.category.name == "Food & Dining"
    assert seen_by_bob is None
    assert deleted_by_bob is False
    assert bob_list == []
    assert [e.id for e in alice_list] == [expense.id]


def test_list_is_newest_first_and_limited(run_db) -> None:
    async def scenario(session):
        user = await make_user(session)
        food = await category_id(session, "Food & Dining")
        repo = ExpenseRepository(session, user.id)
        for day in ["2024-03-02", "2024-03-09", "2024-03-05"]:
            await repo.create(ExpenseCreate(amount="1", description=day, category_id=food, date=day))
        return await repo.list(limit=2)

    expenses = run_db(scenario)
    assert [e.date for e in expenses] == [date(2024, 3, 9), date(2024, 3, 5)]


def test_update_switches_category(run_db) -> None:
    async def scenario(session):
        user = await make_user(session)
        food = await category_id(session, "Food & Dining")
        travel = await category_id(session, "Travel")
        repo = ExpenseRepository(session, user.id)
        expense = await repo.create(ExpenseCreate(amount="5", description="Bus", category_id=food, date="2024-03-01"))
        return await repo.update(expense.id, ExpenseUpdate(
            amount="6", description="Train", category_id=travel, date="2024-03-02",
        ))

    updated = run_db(scenario)
    assert updated.category.name == "Travel"
    assert updated.amount == Decimal("6")
    assert updated.description == "Train"


def test_dashboard_combines_expenses_and_budget(run_db) -> None:
    async def scenario(session):
        user = await make_user(session)
        food = await category_id(session, "Food & Dining")
        repo = ExpenseRepository(session, user.id)
        await repo.create(ExpenseCreate(amount="40", description="Old", category_id=food, date="2024-02-20"))
        await repo.create(ExpenseCreate(amount="85", description="New", category_id=food, date="2024-03-03"))
        await BudgetRepository(session, user.id).upsert(date(2024, 3, 1), Decimal("100"))
        dashboards = DashboardRepository(session, user)
        return await dashboards.get_dashboard(date(2024, 3, 4)), await dashboards.get_budget_status(date(2024, 3, 4))

    dashboard, status = run_db(scenario)
    assert dashboard.total_expenses == 125
    assert dashboard.monthly_expenses == 85
    assert dashboard.currency == "USD"
    assert dashboard.budget.state == "near"
    assert status.evaluation.remaining == 15
    assert status.budget.limit_amount == 100
    assert status.month == date(2024, 3, 1)
