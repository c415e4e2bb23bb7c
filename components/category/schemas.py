"""Pydantic schemas for expense categories."""

from typing import Optional
from pydantic import BaseModel

DEFAULT_CATEGORY_NAME = "Other"
DEFAULT_CATEGORY_COLOR = "#6B7280"
DEFAULT_CATEGORY_ICON = "📌"


class CategoryBase(BaseModel):
    name: str
    color: str
    icon: Optional[str] = None


class CategoryRead(CategoryBase):
    id: str

    class Config:
        from_attributes = True
