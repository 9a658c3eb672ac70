"""JWT issuing and verification (HS256)."""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Header

from yieldpilot.config import get_settings
from yieldpilot.errors import AuthenticationError, ConfigurationError

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


@dataclass
class TokenPayload:
    """Claims carried by an access token."""

    user_id: str
    email: str
    iat: Optional[int] = None
    exp: Optional[int] = None


def _secret() -> str:
    secret = get_settings().jwt_secret
    if not secret:
        logger.error("JWT_SECRET environment variable is required")
        raise ConfigurationError("JWT_SECRET environment variable is required")
    return secret


def sign_token(user_id: str, email: str, expires_days: Optional[int] = None) -> str:
    """Issue a signed token for a user."""
    settings = get_settings()
    now = datetime.now(timezone.utc)
    days = expires_days if expires_days is not None else settings.jwt_expires_days
    claims = {
        "userId": str(user_id),
        "email": email,
        "iat": now,
        "exp": now + timedelta(days=days),
    }
    return jwt.encode(claims, _secret(), algorithm=ALGORITHM)


def verify_token(token: str) -> TokenPayload:
    """Decode and validate a token.

    Raises:
        AuthenticationError: If the token is invalid or expired
    """
    secret = _secret()
    try:
        claims = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Invalid or expired token")
    except jwt.InvalidTokenError:
        raise AuthenticationError("Invalid or expired token")

    if "userId" not in claims or "email" not in claims:
        raise AuthenticationError("Invalid or expired token")

    return TokenPayload(
        user_id=str(claims["userId"]),
        email=claims["email"],
        iat=claims.get("iat"),
        exp=claims.get("exp"),
    )


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Pull the token out of an Authorization header value."""
    if not authorization or not authorization.startswith("Bearer "):
        return None
    return authorization[len("Bearer "):].strip() or None


async def require_auth(authorization: Optional[str] = Header(None)) -> TokenPayload:
    """FastAPI dependency for protected routes."""
    token = extract_bearer_token(authorization)
    if token is None:
        raise AuthenticationError("No token provided")
    return verify_token(token)
