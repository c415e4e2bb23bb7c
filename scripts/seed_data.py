"""Script to seed default categories and a demo account into the database."""

from datetime import date, timedelta
from decimal import Decimal
import asyncio

from components.core.init_db import db_manager
from components.category.repository import CategoryRepository
from components.expense.models import Expense
from components.budget.repository import BudgetRepository
from components.user.repository import UserRepository
from components.user.schemas import UserCreate

DEMO_LOGIN = "demo"
DEMO_PASSWORD = "password123"


async def seed_data():
    """Create tables, default categories and a demo user with a month of expenses."""
    await db_manager.create_all()

    async with db_manager.get_db() as db:
        categories = CategoryRepository(db)
        created = await categories.seed_defaults()
        print(f"Seeded {created} categories")

        users = UserRepository(db)
        if await users.exists(DEMO_LOGIN):
            print("Demo user already exists, skipping expenses")
            return
        user = await users.create(UserCreate(login=DEMO_LOGIN, password=DEMO_PASSWORD, full_name="Demo User"))

        all_categories = await categories.get_all()
        today = date.today()
        for i in range(30):
            category = all_categories[i % len(all_categories)]
            db.add(Expense(
                user_id=user.id,
                category_id=category.id,
                amount=Decimal("5.00") + Decimal(i % 7) * Decimal("3.25"),
                description=f"{category.name} #{i + 1}",
                date=today - timedelta(days=i),
            ))
        await db.commit()

        await BudgetRepository(db, user.id).upsert(today, Decimal("500.00"))
        print(f"Created demo user '{DEMO_LOGIN}' with 30 expenses and a budget")


if __name__ == "__main__":
    asyncio.run(seed_data())
