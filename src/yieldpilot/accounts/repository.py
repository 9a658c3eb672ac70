"""Repository for user account operations."""

from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from yieldpilot.accounts.models import User


class UserRepository:
    """Repository for all user-related database operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_user(
        self,
        email: str,
        name: str,
        password_hash: Optional[str] = None,
        wallet_address: Optional[str] = None,
    ) -> User:
        """Create a new user. The caller checks email uniqueness first."""
        user = User(
            email=email.lower(),
            name=name,
            password_hash=password_hash,
            wallet_address=wallet_address,
        )
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        return await self.session.get(User, user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by email (case-insensitive)."""
        stmt = select(User).where(User.email == email.lower())
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_users(self, offset: int = 0, limit: int = 10) -> list[User]:
        """List users ordered by ID."""
        stmt = select(User).order_by(User.id).offset(offset).limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_users(self) -> int:
        result = await self.session.execute(select(func.count(User.id)))
        return result.scalar_one()

    async def update_user(
        self,
        user: User,
        name: Optional[str] = None,
        wallet_address: Optional[str] = None,
    ) -> User:
        """Apply the given non-None fields to a user."""
        if name is not None:
            user.name = name
        if wallet_address is not None:
            user.wallet_address = wallet_address
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def delete_user(self, user: User) -> None:
        await self.session.delete(user)
        await self.session.flush()
