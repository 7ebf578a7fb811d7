"""Shared fixtures: temporary database, uploads and static directories."""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from perfeval.config import Settings
from perfeval.database import Store
from perfeval.main import create_app
from perfeval.storage.repositories import insert_employee


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'evaluations.db'}",
        upload_dir=tmp_path / "uploads",
        static_dir=tmp_path / "public",
    )


@pytest.fixture
def client(settings):
    """TestClient with the lifespan (store initialization) running."""
    with TestClient(create_app(settings)) as c:
        yield c


@pytest_asyncio.fixture
async def store(tmp_path):
    store = Store(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    await store.initialize()
    yield store
    await store.close()


@pytest.fixture
def add_employee(store):
    """Factory inserting an employee into the store; returns its id."""

    async def _add(name: str = "Ana Souza", **overrides) -> int:
        fields = {
            "name": name,
            "role": "Developer",
            "department": "Engineering",
            "email": f"{name.split()[0].lower()}@example.com",
            "admission_date": "2024-02-01",
        }
        fields.update(overrides)
        async with store.transaction() as db:
            result = await insert_employee(db, **fields)
        return result.last_insert_id

    return _add
