"""
Pytest configuration and shared fixtures for backend tests.

This module provides test fixtures for database sessions, test clients,
authentication, a mocked language model client, and sample entries.

NOTE: Heavy imports (app factory, models) are done lazily inside fixtures
to avoid loading the entire app for tests that don't need it.
"""

import sys
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

# Add backend directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Type hints only - not imported at runtime
if TYPE_CHECKING:
    from typing import AsyncGenerator

    from httpx import AsyncClient
    from infrastructure.database import models
    from sqlalchemy.ext.asyncio import AsyncSession


# Files that use database fixtures
DB_FIXTURE_FILES = {
    "test_crud.py",
    "test_database.py",
    "test_search_service.py",
}


def pytest_collection_modifyitems(items):
    """Auto-apply markers based on test directory and fixtures used."""
    for item in items:
        filepath = str(item.fspath)
        filename = Path(filepath).name

        # Apply 'unit' marker to tests in unit directory
        if "/tests/unit/" in filepath:
            item.add_marker(pytest.mark.unit)
            if filename in DB_FIXTURE_FILES:
                item.add_marker(pytest.mark.crud)
        # Apply 'integration' marker to tests in integration directory
        elif "/tests/integration/" in filepath:
            item.add_marker(pytest.mark.integration)
            item.add_marker(pytest.mark.api)


@pytest.fixture(autouse=True)
def reset_db_write_lock():
    """Each test runs on its own event loop; drop the lock bound to the previous one."""
    from infrastructure.database.connection import reset_write_lock

    reset_write_lock()
    yield
    reset_write_lock()


# ============================================================================
# Environment fixtures
# ============================================================================

TEST_PASSWORD = "test_password"
TEST_PASSWORD_HASH = "$2b$12$H0fCIM9buSuQsCFErTRi0Omz//QVZxCKJW5Dapi2u3ealuUFzvF9O"
TEST_JWT_SECRET = "test_secret_key_for_testing_only"


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Set up mock environment variables for testing."""
    from core import reset_settings

    monkeypatch.setenv("API_KEY_HASH", TEST_PASSWORD_HASH)
    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("ENABLE_GUEST_LOGIN", "false")
    monkeypatch.delenv("GUEST_PASSWORD_HASH", raising=False)

    reset_settings()
    yield {
        "api_key_hash": TEST_PASSWORD_HASH,
        "jwt_secret": TEST_JWT_SECRET,
        "test_password": TEST_PASSWORD,
    }
    reset_settings()


# ============================================================================
# Database fixtures
# ============================================================================


@pytest.fixture
async def database():
    """A connected in-memory Database, disposed after the test."""
    from infrastructure.database import Database

    db = Database("sqlite+aiosqlite:///:memory:")
    await db.connect()
    yield db
    await db.disconnect()


@pytest.fixture
async def test_db(database) -> "AsyncGenerator[AsyncSession, None]":
    """Provide a session on a fresh in-memory database."""
    async with database.session() as session:
        yield session


# ============================================================================
# Language model fixtures
# ============================================================================


@pytest.fixture
def mock_llm():
    """LLMClient stand-in whose complete() is an AsyncMock. Set side_effect per test."""
    from unittest.mock import AsyncMock, MagicMock

    from sdk.client.llm_client import LLMClient

    llm = MagicMock(spec=LLMClient)
    llm.model = "test-model"
    llm.complete = AsyncMock(return_value="{}")
    return llm


@pytest.fixture
def generation_service(mock_llm):
    from services.generation_service import GenerationService

    return GenerationService(mock_llm)


@pytest.fixture
def ingestion_service(generation_service):
    from services.ingestion_service import IngestionService

    return IngestionService(generation_service)


# ============================================================================
# App/Client fixtures
# ============================================================================


@pytest.fixture
def app(mock_env_vars, generation_service, ingestion_service, database):
    """FastAPI app with state populated the way the lifespan would."""
    from core.app_factory import create_app
    from routers.auth import limiter

    application = create_app(database=database)
    application.state.database = database
    application.state.generation_service = generation_service
    application.state.ingestion_service = ingestion_service
    limiter.reset()
    return application


async def _make_client(app, test_db, headers=None) -> "AsyncGenerator[AsyncClient, None]":
    from httpx import ASGITransport, AsyncClient
    from infrastructure.database.connection import get_db

    async def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test", headers=headers or {}) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
async def client(app, test_db) -> "AsyncGenerator[AsyncClient, None]":
    """Create a test client without credentials."""
    async for ac in _make_client(app, test_db):
        yield ac


@pytest.fixture
async def authenticated_client(app, test_db) -> "AsyncGenerator[tuple[AsyncClient, str], None]":
    """Create a test client with a valid admin JWT token."""
    from domain.value_objects.enums import UserRole
    from infrastructure.auth import generate_jwt_token

    token = generate_jwt_token(role=UserRole.ADMIN)
    async for ac in _make_client(app, test_db, headers={"X-API-Key": token}):
        yield ac, token


@pytest.fixture
async def guest_client(app, test_db) -> "AsyncGenerator[tuple[AsyncClient, str], None]":
    """Create a test client with a valid guest JWT token."""
    from domain.value_objects.enums import UserRole
    from infrastructure.auth import generate_jwt_token

    token = generate_jwt_token(role=UserRole.GUEST)
    async for ac in _make_client(app, test_db, headers={"X-API-Key": token}):
        yield ac, token


# ============================================================================
# Sample data fixtures
# ============================================================================


@pytest.fixture
async def sample_entry(test_db: "AsyncSession") -> "models.Entry":
    """Create a sample entry for testing."""
    import crud
    from schemas.entries import EntryCreate

    return await crud.create_entry(
        test_db,
        EntryCreate(
            title="Building a Business with AI",
            youtube_link="https://www.youtube.com/watch?v=dQw4w9WgXcQ",
            speaker="Alex Hormozi",
            main_idea="Leverage beats effort when growing a company",
            key_takeaways=["Start with the offer", "Price on value"],
            central_problem="Founders trade time for money",
            social_media_hooks=["Stop working harder"],
            tags=["Business", "AI & Technology"],
            notes="Rewatch the pricing part",
        ),
    )


@pytest.fixture
async def sample_entries(test_db: "AsyncSession") -> "list[models.Entry]":
    """A small corpus covering every search tier."""
    import crud
    from schemas.entries import EntryCreate

    drafts = [
        EntryCreate(
            title="Morning Routines",
            speaker="Tim Ferriss",
            main_idea="Small habits compound",
            tags=["Productivity"],
        ),
        EntryCreate(title="Pricing Power", speaker="Alex Hormozi", main_idea="Charge more", tags=["Business"]),
        EntryCreate(title="Deep Work", speaker="Cal Newport", main_idea="Focus beats multitasking for productivity"),
        EntryCreate(title="The Productivity Myth", speaker="Oliver Burkeman", main_idea="Time is finite"),
    ]
    return [await crud.create_entry(test_db, draft) for draft in drafts]
