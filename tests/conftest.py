"""Shared pytest fixtures configured to use SQLite in-memory databases."""

import logging
import os

# must be set before the app (and its settings) are imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ["NOTEKEEPER_SKIP_LIFESPAN_DB"] = "1"

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from src.notekeeper.core.models import Note, User  # noqa: E402
from src.notekeeper.database import build_engine, build_session_factory, create_tables, get_db_session  # noqa: E402
from src.notekeeper.main import app  # noqa: E402
from src.notekeeper.security.jwt import issue_access_token  # noqa: E402
from src.notekeeper.security.password import hash_password  # noqa: E402

# Silence extremely verbose DEBUG logs from aiosqlite to keep test output readable
logging.getLogger("aiosqlite").setLevel(logging.WARNING)


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test."""
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    await create_tables(engine)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
async def test_session(test_engine):
    """Session bound to the per-test database."""
    session_maker = build_session_factory(test_engine)
    async with session_maker() as session:
        yield session


@pytest.fixture
def test_app(test_engine):
    """App whose requests each get their own session on the test database."""
    session_maker = build_session_factory(test_engine)

    async def _override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db_session] = _override_get_db
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
async def async_client(test_app):
    """Async HTTP client talking to the app in-process."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def test_user_data():
    """Sample user data for testing."""
    return {
        "name": "Test User",
        "email": "test.user@example.com",
        "password": "secret123",
    }


@pytest.fixture
async def test_user(test_session, test_user_data):
    """Create a test user in the database."""
    user = User(
        name=test_user_data["name"],
        email=test_user_data["email"],
        password_hash=hash_password(test_user_data["password"]),
    )
    test_session.add(user)
    await test_session.commit()
    await test_session.refresh(user)
    return user


@pytest.fixture
async def other_user(test_session):
    """A second account, for ownership checks."""
    user = User(name="Other User", email="other@example.com", password_hash=hash_password("other123"))
    test_session.add(user)
    await test_session.commit()
    await test_session.refresh(user)
    return user


@pytest.fixture
def auth_headers(test_user):
    """Create authentication headers with a valid JWT token."""
    token = issue_access_token(test_user.id, test_user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def other_auth_headers(other_user):
    token = issue_access_token(other_user.id, other_user.email)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def test_note_data():
    """Sample note data for testing."""
    return {
        "title": "Test Note",
        "content": "This is a test note content",
        "isPinned": False,
        "tags": ["test", "example"],
        "folder": "Work",
    }


@pytest.fixture
async def test_note(test_session, test_user):
    """Create a test note in the database."""
    note = Note(
        title="Test Note",
        content="This is a test note content",
        folder="Work",
        is_pinned=False,
        owner_id=test_user.id,
    )
    note.set_tags(["test", "example"])
    test_session.add(note)
    await test_session.commit()
    return note
