"""Budget model for the database."""

from sqlalchemy import Column, String, Date, ForeignKey, Numeric, UniqueConstraint
from sqlalchemy.orm import relationship

from components.core.database import Base, TimestampMixin, id_column


class Budget(TimestampMixin, Base):
    """Monthly spending limit of a user."""
    __tablename__ = "budgets"
    __table_args__ = (UniqueConstraint("user_id", "month", name="uq_budgets_user_month"),)

    id = id_column()
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    month = Column(Date, nullable=False)  # First day of the month
    limit_amount = Column(Numeric(10, 2), nullable=False)

    user = relationship("User", back_populates="budgets")
