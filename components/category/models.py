"""Expense category model for the database."""

from sqlalchemy import Column, String
from sqlalchemy.orm import relationship

from components.core.database import Base, TimestampMixin, id_column


class Category(TimestampMixin, Base):
    """Shared expense category, read-only for users."""
    __tablename__ = "expense_categories"

    id = id_column()
    name = Column(String(100), nullable=False)
    color = Column(String(16), nullable=False)
    icon = Column(String(16), nullable=True)

    expenses = relationship("Expense", back_populates="category")
