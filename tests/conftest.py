"""
Shared fixtures — a throwaway SQLite database per test.
"""

import pytest
import pytest_asyncio

from auth.service import CredentialService
from database.credential_store import CredentialStore
from database.session import Database

FAST_ROUNDS = 4  # bcrypt minimum; keeps the suite quick


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'credentials.db'}"


@pytest_asyncio.fixture
async def database(database_url):
    db = Database(database_url)
    await db.open()
    yield db
    await db.close()


@pytest.fixture
def store(database) -> CredentialStore:
    return CredentialStore(database)


@pytest.fixture
def service(store) -> CredentialService:
    return CredentialService(store, rounds=FAST_ROUNDS)
