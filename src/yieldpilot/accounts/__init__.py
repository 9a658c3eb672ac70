"""User account storage."""

from yieldpilot.accounts.database import close_db, get_db, init_db
from yieldpilot.accounts.models import Base, User
from yieldpilot.accounts.repository import UserRepository

__all__ = ["Base", "User", "UserRepository", "close_db", "get_db", "init_db"]
