"""Shared request/response models for account routes."""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from yieldpilot.accounts.models import User

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def _validate_email(v: str) -> str:
    v = v.strip()
    if not EMAIL_PATTERN.match(v):
        raise ValueError("Invalid email address")
    return v.lower()


class UserOut(BaseModel):
    """Public view of a user."""

    id: str
    email: str
    name: str
    wallet_address: Optional[str] = Field(None, alias="walletAddress")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    model_config = {"populate_by_name": True}

    @classmethod
    def from_model(cls, user: User) -> "UserOut":
        return cls(
            id=str(user.id),
            email=user.email,
            name=user.name,
            wallet_address=user.wallet_address,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


class RegisterRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=6)
    name: str = Field(..., min_length=2)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _validate_email(v)


class LoginRequest(BaseModel):
    email: str
    password: str = Field(..., min_length=6)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _validate_email(v)


class CreateUserRequest(BaseModel):
    email: str
    name: str = Field(..., min_length=2)
    wallet_address: Optional[str] = Field(None, alias="walletAddress")

    model_config = {"populate_by_name": True}

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return _validate_email(v)


class UpdateUserRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=2)
    wallet_address: Optional[str] = Field(None, alias="walletAddress")

    model_config = {"populate_by_name": True}
