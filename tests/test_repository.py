"""Tests for user persistence and credentials."""

import jwt
import pytest

from yieldpilot.auth.passwords import hash_password, verify_password
from yieldpilot.auth.tokens import extract_bearer_token, sign_token, verify_token
from yieldpilot.errors import AuthenticationError


class TestUserRepository:
    """Tests for UserRepository."""

    @pytest.mark.asyncio
    async def test_create_lowercases_email(self, user_repo):
        user = await user_repo.create_user(email="Carol@Example.COM", name="Carol")

        assert user.id is not None
        assert user.email == "carol@example.com"
        assert await user_repo.get_user_by_email("CAROL@example.com") is not None

    @pytest.mark.asyncio
    async def test_list_and_count(self, user_repo):
        for i in range(5):
            await user_repo.create_user(email=f"u{i}@example.com", name=f"User {i}")

        assert await user_repo.count_users() == 5
        page = await user_repo.list_users(offset=3, limit=10)
        assert [u.email for u in page] == ["u3@example.com", "u4@example.com"]

    @pytest.mark.asyncio
    async def test_update_only_given_fields(self, user_repo):
        user = await user_repo.create_user(
            email="dan@example.com", name="Dan", wallet_address="0xabc"
        )

        user = await user_repo.update_user(user, name="Daniel")

        assert user.name == "Daniel"
        assert user.wallet_address == "0xabc"

    @pytest.mark.asyncio
    async def test_delete(self, user_repo):
        user = await user_repo.create_user(email="eve@example.com", name="Eve")

        await user_repo.delete_user(user)

        assert await user_repo.get_user(user.id) is None


class TestPasswords:
    """Tests for bcrypt hashing."""

    def test_round_trip(self):
        hashed = hash_password("secret123")

        assert hashed != "secret123"
        assert verify_password("secret123", hashed)
        assert not verify_password("secret124", hashed)

    def test_long_password_is_not_truncated(self):
        """Passwords sharing a 72-byte prefix still differ."""
        base = "x" * 72
        hashed = hash_password(base + "a")

        assert verify_password(base + "a", hashed)
        assert not verify_password(base + "b", hashed)

    def test_malformed_hash(self):
        assert verify_password("secret123", "not-a-bcrypt-hash") is False


class TestTokens:
    """Tests for JWT issue and verification."""

    def test_sign_and_verify(self):
        token = sign_token("12", "frank@example.com")

        payload = verify_token(token)

        assert payload.user_id == "12"
        assert payload.email == "frank@example.com"
        assert payload.exp > payload.iat

    def test_expired_token(self):
        token = sign_token("12", "frank@example.com", expires_days=-1)

        with pytest.raises(AuthenticationError, match="Invalid or expired token"):
            verify_token(token)

    def test_foreign_secret(self):
        """Tokens signed with another key are rejected."""
        token = jwt.encode(
            {"userId": "12", "email": "frank@example.com"},
            "another-secret-key-with-at-least-32-bytes",
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationError):
            verify_token(token)

    def test_extract_bearer_token(self):
        assert extract_bearer_token("Bearer abc") == "abc"
        assert extract_bearer_token("Basic abc") is None
        assert extract_bearer_token(None) is None
