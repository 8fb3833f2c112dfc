"""
Test configuration and fixtures for the UFMarketPlace accounts API.

HTTP tests share one temporary database for the session and use unique
emails; service tests get a fresh database per test so the first user
created is always id 1.
"""

import os
import tempfile
import uuid
from typing import Generator

import pytest
import pytest_asyncio
from dotenv import load_dotenv
from fastapi.testclient import TestClient

load_dotenv()

test_db_url = os.getenv("TEST_DATABASE_URL")
if test_db_url:
    if "postgresql://" in test_db_url and "asyncpg" not in test_db_url:
        test_db_url = test_db_url.replace("postgresql://", "postgresql+asyncpg://")
    os.environ["DATABASE_URL"] = test_db_url
else:
    test_db_path = tempfile.mktemp(suffix=".db")
    os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{test_db_path}"

from marketplace.features.auth.dependencies import get_email_sender  # noqa: E402
from marketplace.platform.db.session import build_engine, init_models  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker  # noqa: E402

from tests.fakes import RecordingEmailSender  # noqa: E402


@pytest.fixture(scope="session")
def test_app():
    """Create FastAPI test application."""
    from marketplace.main import app

    return app


@pytest.fixture
def outbox() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture(scope="function")
def client(test_app, outbox) -> Generator[TestClient, None, None]:
    """
    Test client with the email transport replaced by an in-memory outbox.
    Entering the client runs the lifespan, which creates the tables.
    """
    test_app.dependency_overrides[get_email_sender] = lambda: outbox

    with TestClient(test_app) as test_client:
        yield test_client

    test_app.dependency_overrides.pop(get_email_sender, None)


@pytest.fixture
def unique_email() -> str:
    return f"gator{uuid.uuid4().hex[:8]}@ufl.edu"


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'accounts.db'}"


@pytest_asyncio.fixture
async def db_session(database_url):
    """A fresh, empty database per test."""
    engine = build_engine(database_url)
    await init_models(engine)

    async with async_sessionmaker(engine, expire_on_commit=False)() as session:
        yield session

    await engine.dispose()
