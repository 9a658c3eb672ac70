"""Password hashing with bcrypt."""

import hashlib

import bcrypt

BCRYPT_ROUNDS = 10


def _pre_hash(password: str) -> bytes:
    # bcrypt ignores input past 72 bytes
    password_bytes = password.encode("utf-8")
    if len(password_bytes) <= 72:
        return password_bytes
    return hashlib.sha256(password_bytes).hexdigest().encode("ascii")


def hash_password(password: str) -> str:
    """Hash a password for storage."""
    return bcrypt.hashpw(_pre_hash(password), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored hash."""
    try:
        return bcrypt.checkpw(_pre_hash(password), password_hash.encode("utf-8"))
    except ValueError:
        return False
