"""Password hashing backed by passlib."""

from typing import Optional, Tuple

from passlib.context import CryptContext

# bcrypt_sha256 pre-hashes with SHA-256 so passwords past bcrypt's 72-byte limit still count.
# plain bcrypt is accepted for verification and upgraded on the next login.
pwd_context = CryptContext(schemes=["bcrypt_sha256", "bcrypt"], deprecated=["bcrypt"])


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_and_update(plain_password: str, hashed_password: str) -> Tuple[bool, Optional[str]]:
    """Verify, and return a replacement hash when the stored one is outdated."""
    try:
        return pwd_context.verify_and_update(plain_password, hashed_password)
    except ValueError:
        return False, None
