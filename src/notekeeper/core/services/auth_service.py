"""Authentication service implementation."""

from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ... import security
from ..exceptions import InvalidInputError, NotFoundError, UnauthenticatedError
from ..logging import get_logger
from ..repositories.user_repository import UserRepository
from ..schemas.auth import (
    AuthResponse,
    LoginRequest,
    ProfileResponse,
    RegisterRequest,
    UserResponse,
)
from .interfaces import IAuthService

logger = get_logger("auth")

DUPLICATE_EMAIL_ERROR = [{"field": "email", "message": "User already exists"}]


class AuthService(IAuthService):
    """Authentication service implementation."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)

    async def register_user(self, request: RegisterRequest) -> AuthResponse:
        """Register new user."""
        if await self.user_repo.is_email_taken(request.email):
            raise InvalidInputError("User already exists", DUPLICATE_EMAIL_ERROR)

        try:
            user = await self.user_repo.create_user(
                email=request.email,
                name=request.name,
                password_hash=security.hash_password(request.password),
            )
        except IntegrityError:
            # lost a race with a concurrent registration for the same email
            await self.session.rollback()
            raise InvalidInputError("User already exists", DUPLICATE_EMAIL_ERROR)

        logger.info("Registered user %s", user.id)
        return AuthResponse(
            message="User registered successfully",
            token=security.issue_access_token(user.id, user.email),
            user=UserResponse.model_validate(user),
        )

    async def authenticate_user(self, request: LoginRequest) -> AuthResponse:
        """Login user and return a session token."""
        user = await self.user_repo.get_by_email(request.email)
        valid, new_hash = (
            security.verify_and_update(request.password, user.password_hash) if user else (False, None)
        )
        if not valid:
            logger.info("Failed login attempt for %s", request.email)
            raise UnauthenticatedError("Invalid credentials")
        if new_hash:
            await self.user_repo.set_password_hash(user, new_hash)
            logger.info("Upgraded password hash for user %s", user.id)

        return AuthResponse(
            message="Login successful",
            token=security.issue_access_token(user.id, user.email),
            user=UserResponse.model_validate(user),
        )

    async def get_profile(self, user_id: UUID) -> ProfileResponse:
        """Get user by ID."""
        user = await self.user_repo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User")
        return ProfileResponse(user=UserResponse.model_validate(user))
