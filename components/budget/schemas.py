"""Pydantic schemas for budget data validation."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from components.dashboard.evaluator import month_start
from components.dashboard.schemas import BudgetEvaluation
from components.expense.schemas import parse_amount, parse_date


class BudgetSet(BaseModel):
    """Schema for setting or replacing a monthly budget."""
    limit_amount: Decimal = Field(None, validate_default=True)
    month: Optional[date] = None

    @field_validator("limit_amount", mode="before")
    @classmethod
    def validate_limit_amount(cls, value):
        message = "Please enter a valid amount"
        return parse_amount(
            value,
            message=message,
            invalid_message=message,
            precision_message=message,
            too_large_message=message,
        )

    @field_validator("month", mode="before")
    @classmethod
    def normalize_month(cls, value):
        if value is None:
            return None
        return month_start(parse_date(value))


class Budget(BaseModel):
    """Schema for budget response."""
    id: str
    month: date
    limit_amount: float

    class Config:
        from_attributes = True


class BudgetStatus(BaseModel):
    """Budget of a month together with its evaluation."""
    month: date
    budget: Optional[Budget] = None
    evaluation: BudgetEvaluation
