"""Shared test fixtures."""

from collections.abc import Iterator
from datetime import date

import pytest
from fastapi.testclient import TestClient

from src.task_planner.main import app
from src.task_planner.services.task_store import TaskStore, get_task_store


@pytest.fixture(autouse=True)
def fresh_store() -> Iterator[TaskStore]:
    """Give every test an empty task store."""
    get_task_store.cache_clear()
    yield get_task_store()
    get_task_store.cache_clear()


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def wednesday() -> date:
    """Frozen clock: Wednesday 2024-01-10."""
    return date(2024, 1, 10)
