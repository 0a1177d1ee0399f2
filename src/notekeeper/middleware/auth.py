"""Authentication middleware."""

from typing import Optional
from uuid import UUID

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..core.exceptions import UnauthenticatedError
from ..security import TokenIdentity, verify_access_token


class JWTBearer(HTTPBearer):
    """JWT Bearer token authentication.

    Resolves to the caller's ``TokenIdentity`` and stores it on
    ``request.state.user``. Every failure is a 401.
    """

    def __init__(self):
        # errors are raised here so they are 401 rather than HTTPBearer's own
        super().__init__(auto_error=False)

    async def __call__(self, request: Request) -> TokenIdentity:
        credentials: Optional[HTTPAuthorizationCredentials] = await super().__call__(request)
        if not credentials:
            raise UnauthenticatedError("No token, authorization denied")

        if credentials.scheme.lower() != "bearer":
            raise UnauthenticatedError("Invalid authentication scheme")

        identity = verify_access_token(credentials.credentials)
        if not identity:
            raise UnauthenticatedError("Token is not valid")

        request.state.user = identity
        return identity


jwt_bearer = JWTBearer()


async def get_current_identity(identity: TokenIdentity = Depends(jwt_bearer)) -> TokenIdentity:
    """Get the authenticated caller's identity."""
    return identity


async def get_current_user_id(identity: TokenIdentity = Depends(jwt_bearer)) -> UUID:
    """Get current authenticated user ID."""
    return identity.user_id
