"""Unit tests for UserRepository."""

import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from src.notekeeper.core.models.user import User
from src.notekeeper.core.repositories.user_repository import UserRepository


class FakeResult:
    def __init__(self, scalar=None):
        self._scalar = scalar

    def scalar_one_or_none(self):
        return self._scalar

    def scalar(self):
        return self._scalar


class FakeSession:
    def __init__(self, result=None):
        self._result = result
        self.added = []
        self.commits = 0
        self.refreshed = []
        self.statements = []

    async def execute(self, stmt):
        self.statements.append(stmt)
        return self._result

    def add(self, obj):
        self.added.append(obj)

    async def commit(self):
        self.commits += 1

    async def refresh(self, obj, attrs=None):
        self.refreshed.append(obj)


@pytest.mark.asyncio
async def test_create_user_lowercases_email():
    session = FakeSession()
    repo = UserRepository(session)
    user = await repo.create_user(email="Ada@Example.com", name="Ada", password_hash="h")
    assert isinstance(user, User)
    assert user.email == "ada@example.com"
    assert session.added == [user]
    assert session.commits == 1
    assert session.refreshed == [user]


@pytest.mark.asyncio
async def test_get_by_email_lowercases_lookup():
    user = User(email="ada@example.com", name="Ada", password_hash="h")
    session = FakeSession(FakeResult(user))
    repo = UserRepository(session)

    assert await repo.get_by_email("ADA@Example.com") is user
    compiled = session.statements[0].compile(compile_kwargs={"literal_binds": True})
    assert "ada@example.com" in str(compiled)


@pytest.mark.asyncio
async def test_is_email_taken_fake():
    assert await UserRepository(FakeSession(FakeResult(True))).is_email_taken("a@example.com")
    assert not await UserRepository(FakeSession(FakeResult(False))).is_email_taken("a@example.com")


@pytest.mark.asyncio
async def test_set_password_hash_commits():
    session = FakeSession()
    user = User(email="ada@example.com", name="Ada", password_hash="old")
    await UserRepository(session).set_password_hash(user, "new")
    assert user.password_hash == "new"
    assert session.commits == 1


@pytest.mark.asyncio
async def test_user_lookups_against_database(test_session):
    repo = UserRepository(test_session)
    created = await repo.create_user(email="ada@example.com", name="Ada", password_hash="h")

    assert await repo.get_by_id(created.id) is created
    assert await repo.get_by_id(uuid.uuid4()) is None
    assert await repo.is_email_taken("ADA@example.com") is True
    assert await repo.is_email_taken("bob@example.com") is False

    with pytest.raises(IntegrityError):
        await repo.create_user(email="ada@example.com", name="Ada 2", password_hash="h")
