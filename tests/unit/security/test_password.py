"""Unit tests for security/password.py"""

from passlib.hash import bcrypt

from src.notekeeper.security.password import hash_password, verify_and_update


def test_hash_and_verify():
    hashed = hash_password("secret123")
    assert hashed != "secret123"
    assert hashed.startswith("$bcrypt-sha256$")
    assert verify_and_update("secret123", hashed)[0] is True
    assert verify_and_update("wrong", hashed) == (False, None)


def test_hashes_are_salted():
    assert hash_password("secret123") != hash_password("secret123")


def test_long_passwords_are_not_truncated():
    base = "a" * 80
    hashed = hash_password(base + "1")
    assert verify_and_update(base + "1", hashed)[0] is True
    assert verify_and_update(base + "2", hashed)[0] is False


def test_malformed_hash_fails_verification():
    assert verify_and_update("secret123", "not-a-hash") == (False, None)


def test_current_hash_needs_no_update():
    assert verify_and_update("secret123", hash_password("secret123")) == (True, None)


def test_plain_bcrypt_hash_is_upgraded():
    legacy = bcrypt.hash("secret123")
    valid, new_hash = verify_and_update("secret123", legacy)
    assert valid is True
    assert new_hash.startswith("$bcrypt-sha256$")
    assert verify_and_update("secret123", new_hash) == (True, None)
