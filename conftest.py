"""
Shared fixtures.

Tests run against in-memory SQLite (aiosqlite); the environment is set before
any `app` module reads its settings.
"""
import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENVIRONMENT"] = "test"
os.environ["CREATE_TABLES_ON_STARTUP"] = "true"
os.environ["DEBUG"] = "false"

import asyncio

import pytest
from fastapi.testclient import TestClient

from app.database.database import build_engine, build_session_factory, create_tables
from app.modules.accounting.store import AccountingStore

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest.fixture
def run_with_store():
    """
    Run `scenario(store)` on a fresh database inside one event loop.

    The store is already loaded (empty) when the scenario starts.
    """
    def runner(scenario):
        async def main():
            engine = build_engine(TEST_DATABASE_URL)
            await create_tables(engine)
            store = AccountingStore(build_session_factory(engine))
            await store.load_all()
            try:
                return await scenario(store)
            finally:
                await engine.dispose()

        return asyncio.run(main())

    return runner


@pytest.fixture
def client():
    """API client; startup creates the tables and loads an empty store"""
    from app.main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def party_payload():
    return {
        "name": "Gupta Enterprises",
        "email": "accounts@gupta.example.com",
        "address": "14, Station Road\nKothrud",
        "district": "Pune",
        "state": "Maharashtra",
        "gstin": "27aapfu0939f1zv",
    }
