"""Shared fixtures: a temporary database wired into the app"""
import pytest
from httpx import ASGITransport, AsyncClient

from taskboard.db import Database
from taskboard.main import app
from taskboard.services.db_service import TaskStore, get_task_store


@pytest.fixture
def database(tmp_path):
    """Fresh SQLite database per test"""
    return Database(str(tmp_path / "tasks.db"))


@pytest.fixture
def store(database):
    """Task store bound to the temporary database and injected into the app"""
    task_store = TaskStore(database)
    app.dependency_overrides[get_task_store] = lambda: task_store
    yield task_store
    app.dependency_overrides.pop(get_task_store, None)


@pytest.fixture
async def client(store):
    """HTTP client for API testing"""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
