"""Expense endpoints for the API."""

import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from components.category.repository import CategoryRepository
from components.core.config import get_settings
from components.core.errors import FieldValidationError
from components.core.events import change_feed, INSERT, UPDATE, DELETE
from components.core.init_db import get_db
from components.expense.repository import ExpenseRepository
from components.expense import schemas
from components.user.models import User
from restapi.endpoints.auth import get_current_user

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/expenses",
    tags=["expenses"],
    responses={404: {"description": "Not found"}},
)


async def _check_category(db: AsyncSession, category_id: str) -> None:
    if await CategoryRepository(db).get(category_id) is None:
        raise FieldValidationError("category_id", "Please select a category")


@router.get("/", response_model=List[schemas.Expense])
async def read_expenses(
    limit: Optional[int] = Query(None, ge=1, le=500, description="Number of records to return"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get the latest expenses with their categories, newest date first."""
    repo = ExpenseRepository(db, current_user.id)
    return await repo.list(limit=limit or settings.EXPENSE_PAGE_SIZE)


@router.get("/{expense_id}", response_model=schemas.Expense)
async def read_expense(
    expense_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Get a specific expense by ID."""
    expense = await ExpenseRepository(db, current_user.id).get(expense_id)
    if expense is None:
        raise HTTPException(status_code=404, detail="Expense not found")
    return expense


@router.post("/", response_model=schemas.Expense, status_code=201)
async def create_expense(
    expense: schemas.ExpenseCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Create a new expense."""
    repo = ExpenseRepository(db, current_user.id)
    try:
        await _check_category(db, expense.category_id)
        created = await repo.create(expense)
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Failed to create expense for user %s", current_user.id)
        raise HTTPException(status_code=400, detail="Failed to save expense")

    change_feed.publish("expenses", INSERT, created.id, current_user.id)
    return created


@router.put("/{expense_id}", response_model=schemas.Expense)
async def update_expense(
    expense_id: str,
    expense: schemas.ExpenseUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Update an expense."""
    repo = ExpenseRepository(db, current_user.id)
    try:
        await _check_category(db, expense.category_id)
        updated = await repo.update(expense_id, expense)
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Failed to update expense %s", expense_id)
        raise HTTPException(status_code=400, detail="Failed to save expense")

    if updated is None:
        raise HTTPException(status_code=404, detail="Expense not found")
    change_feed.publish("expenses", UPDATE, expense_id, current_user.id)
    return updated


@router.delete("/{expense_id}")
async def delete_expense(
    expense_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Delete an expense."""
    repo = ExpenseRepository(db, current_user.id)
    try:
        deleted = await repo.delete(expense_id)
    except SQLAlchemyError:
        await db.rollback()
        logger.exception("Failed to delete expense %s", expense_id)
        raise HTTPException(status_code=400, detail="Failed to delete expense")

    if not deleted:
        raise HTTPException(status_code=404, detail="Expense not found")
    change_feed.publish("expenses", DELETE, expense_id, current_user.id)
    return {"message": "Expense deleted"}
