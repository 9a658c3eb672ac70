"""User management endpoints (``?id=`` addresses a single user)."""

import logging
from typing import Optional

from fastapi import APIRouter, Query, status

from yieldpilot.accounts.database import get_db
from yieldpilot.accounts.repository import UserRepository
from yieldpilot.api.routes.schemas import CreateUserRequest, UpdateUserRequest, UserOut
from yieldpilot.errors import ApiError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/database/users", tags=["users"])

MAX_PAGE_SIZE = 100


def _parse_user_id(user_id: Optional[str]) -> int:
    if not user_id:
        raise ApiError("User ID is required", status_code=400)
    if not user_id.isdigit():
        raise NotFoundError("User not found")
    return int(user_id)


def _dump(user) -> dict:
    return UserOut.from_model(user).model_dump(by_alias=True, mode="json")


@router.get("")
async def get_users(
    user_id: Optional[str] = Query(None, alias="id"),
    page: int = Query(1),
    limit: int = Query(10),
) -> dict:
    """Get one user by ``id`` or a paginated list."""
    async with get_db() as session:
        repo = UserRepository(session)

        if user_id is not None:
            user = await repo.get_user(_parse_user_id(user_id))
            if user is None:
                raise NotFoundError("User not found")
            return {"user": _dump(user)}

        page = max(1, page)
        limit = min(MAX_PAGE_SIZE, max(1, limit))
        users = await repo.list_users(offset=(page - 1) * limit, limit=limit)
        total = await repo.count_users()

    return {
        "users": [_dump(u) for u in users],
        "pagination": {
            "page": page,
            "limit": limit,
            "total": total,
            "totalPages": (total + limit - 1) // limit,
        },
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(request: CreateUserRequest) -> dict:
    """Create a user without credentials (e.g. a wallet-login account)."""
    async with get_db() as session:
        repo = UserRepository(session)
        if await repo.get_user_by_email(request.email):
            raise ConflictError("User already exists")
        user = await repo.create_user(
            email=request.email,
            name=request.name,
            wallet_address=request.wallet_address,
        )
        return {"message": "User created successfully", "user": _dump(user)}


@router.put("")
async def update_user(
    request: UpdateUserRequest,
    user_id: Optional[str] = Query(None, alias="id"),
) -> dict:
    """Update name and/or wallet address."""
    uid = _parse_user_id(user_id)
    async with get_db() as session:
        repo = UserRepository(session)
        user = await repo.get_user(uid)
        if user is None:
            raise NotFoundError("User not found")
        user = await repo.update_user(
            user, name=request.name, wallet_address=request.wallet_address
        )
        return {"message": "User updated successfully", "user": _dump(user)}


@router.delete("")
async def delete_user(user_id: Optional[str] = Query(None, alias="id")) -> dict:
    uid = _parse_user_id(user_id)
    async with get_db() as session:
        repo = UserRepository(session)
        user = await repo.get_user(uid)
        if user is None:
            raise NotFoundError("User not found")
        await repo.delete_user(user)
        logger.info(f"Deleted user {uid}")
    return {"message": "User deleted successfully"}
