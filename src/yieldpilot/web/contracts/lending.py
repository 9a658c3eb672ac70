"""Deposit (lending) request and response contracts."""

from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from yieldpilot.web.contracts.transactions import TransactionCall


class DepositRequest(BaseModel):
    """Request to assemble approve + swap calls for a lending deposit."""

    input_token: str = Field(..., alias="inputToken", min_length=1, description="Token to deposit")
    user_public_address: str = Field(
        ..., alias="userPublicAddress", min_length=1, description="Depositor (smart account) address"
    )
    amount: Decimal = Field(..., description="Human-readable amount (e.g. 20.5)")

    model_config = {"populate_by_name": True}

    @field_validator("amount", mode="before")
    @classmethod
    def validate_amount_is_number(cls, v):
        """The amount must be sent as a JSON number."""
        if isinstance(v, bool) or not isinstance(v, (int, float, Decimal)):
            raise ValueError("amount must be a number")
        return v


class DepositResponse(BaseModel):
    """Ordered calls for the bundler: approval first, swap second."""

    success: bool = True
    transactions: list[TransactionCall] = Field(default_factory=list)
