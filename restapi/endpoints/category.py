"""Category endpoints for the API."""

from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from components.category.repository import CategoryRepository
from components.category import schemas
from components.core.init_db import get_db

router = APIRouter(
    prefix="/categories",
    tags=["categories"],
)


@router.get("/", response_model=List[schemas.CategoryRead])
async def read_categories(db: AsyncSession = Depends(get_db)):
    """Get every expense category."""
    return await CategoryRepository(db).get_all()
