"""Pydantic schemas for expense data validation."""

import uuid
from datetime import date as date_type, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError

from components.category.schemas import CategoryRead

DESCRIPTION_MAX_LENGTH = 200
# Range of a Numeric(10, 2) column
CENT = Decimal("0.01")
MAX_AMOUNT = Decimal("99999999.99")


def parse_amount(
    value: Any,
    message: str = "Amount must be positive",
    invalid_message: str = "Amount must be a number",
    precision_message: str = "Amount must have at most 2 decimal places",
    too_large_message: str = f"Amount must be at most {MAX_AMOUNT}",
) -> Decimal:
    """
    Parse a submitted amount and require it to be strictly positive.

    The result always fits a Numeric(10, 2) column: at most two decimal
    places and no more than ``MAX_AMOUNT``.
    """
    if isinstance(value, bool) or value is None:
        raise PydanticCustomError("amount", invalid_message)
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise PydanticCustomError("amount", invalid_message)
    if not amount.is_finite():
        raise PydanticCustomError("amount", invalid_message)
    if amount <= 0:
        raise PydanticCustomError("amount", message)
    if amount > MAX_AMOUNT:
        raise PydanticCustomError("amount", too_large_message)
    try:
        rounded = amount.quantize(CENT)
    except InvalidOperation:
        raise PydanticCustomError("amount", invalid_message)
    if rounded != amount:
        raise PydanticCustomError("amount", precision_message)
    return rounded


def parse_date(value: Any) -> date_type:
    """Accept a date or a canonical YYYY-MM-DD string."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date_type):
        return value
    if value is None or (isinstance(value, str) and not value.strip()):
        raise PydanticCustomError("date", "Date is required")
    try:
        return datetime.strptime(str(value).strip(), "%Y-%m-%d").date()
    except ValueError:
        raise PydanticCustomError("date", "Date must be in YYYY-MM-DD format")


class ExpenseBase(BaseModel):
    """Fields submitted by the expense form, validated in form order."""
    amount: Decimal = Field(None, validate_default=True)
    description: str = Field(None, validate_default=True)
    category_id: str = Field(None, validate_default=True)
    date: date_type = Field(None, validate_default=True)

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount(cls, value):
        return parse_amount(value)

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, value):
        if value is None or not str(value).strip():
            raise PydanticCustomError("description", "Description is required")
        value = str(value).strip()
        if len(value) > DESCRIPTION_MAX_LENGTH:
            raise PydanticCustomError(
                "description",
                "Description must be at most {max_length} characters",
                {"max_length": DESCRIPTION_MAX_LENGTH},
            )
        return value

    @field_validator("category_id", mode="before")
    @classmethod
    def validate_category_id(cls, value):
        try:
            return str(uuid.UUID(str(value)))
        except (TypeError, ValueError):
            raise PydanticCustomError("category_id", "Please select a category")

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, value):
        return parse_date(value)


class ExpenseCreate(ExpenseBase):
    """Schema for expense creation."""
    pass


class ExpenseUpdate(ExpenseBase):
    """Schema for expense update; the same field set as creation."""
    pass


class Expense(BaseModel):
    """Schema for expense response."""
    id: str
    amount: float
    description: Optional[str] = None
    date: date_type
    category_id: Optional[str] = None
    category: Optional[CategoryRead] = None

    class Config:
        from_attributes = True
