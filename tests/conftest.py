"""Shared fixtures: a throwaway SQLite database and an API client bound to it."""

from __future__ import annotations

import asyncio
import os

os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///./.pytest_expenses.db")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from components.core.database import DatabaseManager
from components.core.init_db import get_db, get_db_manager
from components.category.repository import CategoryRepository
from restapi.router import create_app


@pytest.fixture
def db_manager(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", poolclass=NullPool)
    manager = DatabaseManager(engine)

    async def prepare() -> None:
        await manager.create_all()
        async with manager.get_db() as session:
            await CategoryRepository(session).seed_defaults()

    asyncio.run(prepare())
    yield manager
    asyncio.run(engine.dispose())


@pytest.fixture
def run_db(db_manager):
    """Run ``coro_fn(session)`` to completion in a fresh session."""

    def runner(coro_fn):
        async def wrapper():
            async with db_manager.get_db() as session:
                return await coro_fn(session)

        return asyncio.run(wrapper())

    return runner


@pytest.fixture
def client(db_manager):
    app = create_app()

    async def override_get_db():
        async with db_manager.get_db() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_db_manager] = lambda: db_manager
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def register_user(client):
    """Register a user and return its auth headers and token."""

    def register(login: str = "alice"):
        response = client.post("/auth/register", json={"login": login, "password": "secret123"})
        assert response.status_code == 200, response.text
        token = response.json()["access_token"]
        return {"Authorization": f"Bearer {token}"}, token

    return register


@pytest.fixture
def headers(register_user):
    return register_user()[0]


@pytest.fixture
def categories(client):
    response = client.get("/categories/")
    assert response.status_code == 200
    return {category["name"]: category for category in response.json()}
