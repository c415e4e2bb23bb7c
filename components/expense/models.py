"""Expense model for the database."""

from sqlalchemy import Column, String, Date, ForeignKey, Numeric
from sqlalchemy.orm import relationship

from components.core.database import Base, TimestampMixin, id_column


class Expense(TimestampMixin, Base):
    """A single spending event recorded by its owner."""
    __tablename__ = "expenses"

    id = id_column()
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    category_id = Column(String(36), ForeignKey("expense_categories.id"), nullable=True)
    amount = Column(Numeric(10, 2), nullable=False)
    description = Column(String(200), nullable=True)
    date = Column(Date, nullable=False)

    user = relationship("User", back_populates="expenses")
    category = relationship("Category", back_populates="expenses", lazy="joined")
