# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from taskboard.core.config import Settings
from taskboard.db.session import Database
from taskboard.main import create_app


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a throwaway SQLite file, with the rate limit out of the way."""
    return Settings(
        DB_PATH=str(tmp_path / "data" / "taskmanager.db"),
        ENVIRONMENT="test",
        RATE_LIMIT_MAX=10_000,
        LOG_LEVEL="WARNING",
    )


@pytest.fixture()
def db(settings: Settings) -> Iterator[Database]:
    database = Database(settings.DB_PATH)
    database.init()
    yield database
    database.close()


@pytest.fixture()
def client(settings: Settings) -> Iterator[TestClient]:
    with TestClient(create_app(settings)) as test_client:
        yield test_client
