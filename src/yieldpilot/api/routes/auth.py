"""Account registration and login endpoints."""

import logging

from fastapi import APIRouter, Depends, status

from yieldpilot.accounts.database import get_db
from yieldpilot.accounts.repository import UserRepository
from yieldpilot.api.routes.schemas import LoginRequest, RegisterRequest, UserOut
from yieldpilot.auth.passwords import hash_password, verify_password
from yieldpilot.auth.tokens import TokenPayload, require_auth, sign_token
from yieldpilot.errors import AuthenticationError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest) -> dict:
    """Create an account with a bcrypt-hashed password."""
    async with get_db() as session:
        repo = UserRepository(session)
        if await repo.get_user_by_email(request.email):
            raise ConflictError("User already exists")

        user = await repo.create_user(
            email=request.email,
            name=request.name,
            password_hash=hash_password(request.password),
        )
        logger.info(f"Registered user {user.id}")
        return {
            "message": "User created successfully",
            "user": UserOut.from_model(user).model_dump(by_alias=True, mode="json"),
        }


@router.post("/login")
async def login(request: LoginRequest) -> dict:
    """Verify credentials and issue an access token."""
    async with get_db() as session:
        repo = UserRepository(session)
        user = await repo.get_user_by_email(request.email)

    if user is None or not user.password_hash or not verify_password(
        request.password, user.password_hash
    ):
        raise AuthenticationError("Invalid credentials")

    token = sign_token(str(user.id), user.email)
    return {
        "message": "Login successful",
        "token": token,
        "user": {"id": str(user.id), "email": user.email},
    }


@router.get("/me")
async def me(payload: TokenPayload = Depends(require_auth)) -> dict:
    """Return the account behind the bearer token."""
    async with get_db() as session:
        repo = UserRepository(session)
        user = await repo.get_user(int(payload.user_id)) if payload.user_id.isdigit() else None

    if user is None:
        raise NotFoundError("User not found")

    return {"user": UserOut.from_model(user).model_dump(by_alias=True, mode="json")}
