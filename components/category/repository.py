"""Repository for expense category operations."""

import logging
from typing import List, Optional
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from components.category.models import Category

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    ("Food & Dining", "#F59E0B", "🍔"),
    ("Transportation", "#3B82F6", "🚗"),
    ("Shopping", "#EC4899", "🛍️"),
    ("Entertainment", "#8B5CF6", "🎬"),
    ("Bills & Utilities", "#EF4444", "💡"),
    ("Healthcare", "#10B981", "🏥"),
    ("Education", "#6366F1", "📚"),
    ("Travel", "#14B8A6", "✈️"),
    ("Other", "#6B7280", "📌"),
]


class CategoryRepository:
    """Read access to the shared category list."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_all(self) -> List[Category]:
        result = await self.session.execute(select(Category))
        return list(result.scalars().all())

    async def get(self, category_id: str) -> Optional[Category]:
        result = await self.session.execute(
            select(Category).where(Category.id == category_id)
        )
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Optional[Category]:
        result = await self.session.execute(
            select(Category).where(func.lower(Category.name) == name.strip().lower())
        )
        return result.scalars().first()

    async def seed_defaults(self) -> int:
        """Insert the default categories when the table is empty."""
        result = await self.session.execute(select(func.count(Category.id)))
        if result.scalar():
            return 0
        self.session.add_all(
            Category(name=name, color=color, icon=icon)
            for name, color, icon in DEFAULT_CATEGORIES
        )
        await self.session.commit()
        logger.info("Seeded %d default categories", len(DEFAULT_CATEGORIES))
        return len(DEFAULT_CATEGORIES)
