"""Security utilities."""

from .jwt import (
    TokenIdentity,
    create_access_token,
    decode_access_token,
    issue_access_token,
    verify_access_token,
)
from .password import hash_password, verify_and_update

__all__ = [
    "hash_password",
    "verify_and_update",
    "TokenIdentity",
    "create_access_token",
    "issue_access_token",
    "decode_access_token",
    "verify_access_token",
]
