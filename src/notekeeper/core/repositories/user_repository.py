"""User repository for database operations.

Emails are stored lowercase, so every lookup lowercases its argument.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.user import User


class UserRepository:
    """Repository for user database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_user(self, *, email: str, name: str, password_hash: str) -> User:
        """Insert a user; raises IntegrityError if the email is already registered."""
        user = User(email=email.lower(), name=name, password_hash=password_hash)
        self.session.add(user)
        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def is_email_taken(self, email: str) -> bool:
        result = await self.session.execute(select(exists().where(User.email == email.lower())))
        return bool(result.scalar())

    async def set_password_hash(self, user: User, password_hash: str) -> None:
        """Replace the stored hash, e.g. after a scheme upgrade."""
        user.password_hash = password_hash
        await self.session.commit()
