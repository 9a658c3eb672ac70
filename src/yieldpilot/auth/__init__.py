"""Authentication helpers: password hashing and access tokens."""

from yieldpilot.auth.passwords import hash_password, verify_password
from yieldpilot.auth.tokens import TokenPayload, require_auth, sign_token, verify_token

__all__ = [
    "TokenPayload",
    "hash_password",
    "require_auth",
    "sign_token",
    "verify_password",
    "verify_token",
]
