"""Tests for the CSV import script."""

from __future__ import annotations

import io
from decimal import Decimal

from components.expense.repository import ExpenseRepository
from components.user.repository import UserRepository
from components.user.schemas import UserCreate
from scripts.import_expenses import import_expenses

VALID_CSV = """date,amount,description,category
2024-03-01,10.50,Groceries,food & dining
2024-03-02,4,Bus ticket,Transportation
"""

INVALID_CSV = """date,amount,description,category
2024-03-01,10.50,Groceries,Food & Dining
2024-03-02,-4,Bus ticket,Transportation
2024-03-03,4,,Transportation
2024-03-04,4,Mystery,Unknown
"""


def run_import(run_db, content):
    async def scenario(session):
        user = await UserRepository(session).create(UserCreate(login="importer", password="secret123"))
        return user.id, await import_expenses(session, user.id, io.StringIO(content))

    user_id, result = run_db(scenario)

    async def stored(session):
        return await ExpenseRepository(session, user_id).list()

    return result, run_db(stored)


def test_import_valid_file(run_db) -> None:
    (success, message, errors), expenses = run_import(run_db, VALID_CSV)
    assert success
    assert message == "Imported 2 expenses"
    assert errors == []
    assert sorted(e.amount for e in expenses) == [Decimal("4"), Decimal("10.50")]
    assert {e.category.name for e in expenses} == {"Food & Dining", "Transportation"}


def test_import_rejects_whole_file_on_row_errors(run_db) -> None:
    (success, message, errors), expenses = run_import(run_db, INVALID_CSV)
    assert not success
    assert message == "Validation errors occurred"
    assert errors == [
        {"row": 3, "message": "Amount must be positive"},
        {"row": 4, "message": "Description is required"},
        {"row": 5, "message": "Please select a category"},
    ]
    assert expenses == []


def test_import_requires_columns(run_db) -> None:
    (success, message, _), _ = run_import(run_db, "date,amount\n2024-03-01,1\n")
    assert not success
    assert "columns" in message


def test_import_reports_amounts_that_do_not_fit_storage(run_db) -> None:
    content = """date,amount,description,category
2024-03-01,1e30,Yacht,Travel
2024-03-02,0.004,Gum,Food & Dining
"""
    (success, _, errors), expenses = run_import(run_db, content)
    assert not success
    assert errors == [
        {"row": 2, "message": "Amount must be at most 99999999.99"},
        {"row": 3, "message": "Amount must have at most 2 decimal places"},
    ]
    assert expenses == []
