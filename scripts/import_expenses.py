"""Script to import a user's expenses from a CSV file.

The CSV needs the columns ``date``, ``amount``, ``description`` and
``category`` (category name, matched case-insensitively). All rows are
validated first; nothing is written if any row fails.

Usage: python -m scripts.import_expenses <login> <file.csv>
"""

import argparse
import asyncio
from typing import BinaryIO, Dict, List, Tuple, Union
from pathlib import Path

import pandas as pd
from pydantic import ValidationError

from components.category.repository import CategoryRepository
from components.core.init_db import db_manager
from components.expense.repository import ExpenseRepository
from components.expense.schemas import ExpenseCreate
from components.user.repository import UserRepository

REQUIRED_COLUMNS = ["date", "amount", "description", "category"]


def _cell(value):
    return None if pd.isna(value) else value


async def import_expenses(
    session,
    user_id: str,
    source: Union[str, Path, BinaryIO],
) -> Tuple[bool, str, List[Dict]]:
    """
    Import expenses from a CSV file.

    Returns:
        Tuple containing:
        - Success status (bool)
        - Message (str)
        - List of row errors if any (List[Dict])
    """
    frame = pd.read_csv(source, dtype=str, keep_default_na=True)
    missing = [column for column in REQUIRED_COLUMNS if column not in frame.columns]
    if missing:
        return False, f"CSV file must contain {', '.join(REQUIRED_COLUMNS)} columns", []

    categories = CategoryRepository(session)
    by_name = {category.name.lower(): category.id for category in await categories.get_all()}

    errors = []
    expenses = []
    # Row numbers start at 2 to account for the header row
    for row_num, row in enumerate(frame.to_dict(orient="records"), start=2):
        category_name = _cell(row["category"])
        category_id = by_name.get(str(category_name).strip().lower()) if category_name else None
        try:
            expenses.append(ExpenseCreate(
                amount=_cell(row["amount"]),
                description=_cell(row["description"]),
                category_id=category_id,
                date=_cell(row["date"]),
            ))
        except ValidationError as e:
            errors.append({"row": row_num, "message": e.errors()[0]["msg"]})

    if errors:
        return False, "Validation errors occurred", errors
    if not expenses:
        return False, "CSV file contains no expenses", []

    ids = await ExpenseRepository(session, user_id).create_many(expenses)
    return True, f"Imported {len(ids)} expenses", []


async def main(login: str, path: Path) -> int:
    async with db_manager.get_db() as db:
        user = await UserRepository(db).get_by_login(login)
        if user is None:
            print(f"Error: user '{login}' not found")
            return 1

        success, message, errors = await import_expenses(db, user.id, path)
        print(message)
        for error in errors:
            print(f"  Row {error['row']}: {error['message']}")
        return 0 if success else 1


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Import expenses from a CSV file")
    parser.add_argument("login", help="Login of the user owning the expenses")
    parser.add_argument("path", type=Path, help="CSV file to import")
    args = parser.parse_args()
    raise SystemExit(asyncio.run(main(args.login, args.path)))
