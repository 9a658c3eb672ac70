"""Wallet lookup contracts.

The backend treats wallets as read-only: only public addresses are accepted.
"""

from pydantic import BaseModel, Field, field_validator

SUPPORTED_WALLET_NETWORKS = ("ethereum", "polygon", "hyperevm")


class WalletInfoRequest(BaseModel):
    """Request for public wallet information."""

    address: str = Field(..., min_length=1, description="Wallet address")
    network: str = Field(default="ethereum", description="Network name")

    @field_validator("network")
    @classmethod
    def validate_network(cls, v: str) -> str:
        network = v.lower()
        if network not in SUPPORTED_WALLET_NETWORKS:
            raise ValueError(
                f"Unsupported network: {v}. Supported: {', '.join(SUPPORTED_WALLET_NETWORKS)}"
            )
        return network


class WalletInfoResponse(BaseModel):
    """Public on-chain information about an address."""

    address: str
    network: str
    balance: str = Field(..., description="Native balance in ether units")
    transaction_count: int = Field(..., alias="transactionCount")
    is_contract: bool = Field(..., alias="isContract")

    model_config = {"populate_by_name": True}
