"""User model for the database."""

from sqlalchemy import Column, String, Date
from sqlalchemy.orm import relationship

from components.core.database import Base, TimestampMixin, id_column


class User(TimestampMixin, Base):
    """User account together with its display profile."""
    __tablename__ = "users"

    id = id_column()
    login = Column(String(50), unique=True, nullable=False)
    password = Column(String(255), nullable=False)  # Hashed password
    registration_date = Column(Date, nullable=False)
    full_name = Column(String(255), nullable=False, default="")
    currency = Column(String(3), nullable=False, default="USD")

    expenses = relationship("Expense", back_populates="user", cascade="all, delete-orphan")
    budgets = relationship("Budget", back_populates="user", cascade="all, delete-orphan")
