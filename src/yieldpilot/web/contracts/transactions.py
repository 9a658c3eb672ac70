"""Transaction contracts for client-signed operations.

These contracts describe calls the client signs and submits itself, either
directly or batched as a smart-account user operation. NO signing or
broadcasting happens server-side.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator
from web3 import Web3


class TransactionCall(BaseModel):
    """A single call for a bundler batch."""

    to: str = Field(..., description="Target contract address")
    data: str = Field(..., description="Call data (0x-prefixed hex)")
    value: str = Field(default="0", description="Native value in wei as a decimal string")


class UnsignedTransaction(BaseModel):
    """An unsigned contract call for client-side signing."""

    network: str = Field(..., description="Network name (ethereum, polygon, hyperevm)")
    chain_id: Optional[int] = Field(None, description="EVM chain ID")
    to: str = Field(..., description="Contract address")
    value: str = Field(default="0", description="Value in wei (decimal string)")
    data: str = Field(..., description="Encoded call data")
    gas_limit: Optional[str] = Field(None, description="Estimated gas (when a sender was given)")
    description: Optional[str] = Field(None, description="Human-readable description")
    warnings: list[str] = Field(default_factory=list, description="Any warnings")


class ContractCallRequest(BaseModel):
    """Request to encode a state-changing contract call."""

    contract_address: str = Field(..., alias="contractAddress")
    abi: list[Any] = Field(..., description="Contract ABI (JSON list)")
    method: str = Field(..., min_length=1)
    params: list[Any] = Field(default_factory=list)
    network: str = Field(default="ethereum")
    from_address: Optional[str] = Field(
        None, alias="fromAddress", description="Sender, enables gas estimation"
    )
    value: int = Field(default=0, ge=0, description="Native value in wei")

    model_config = {"populate_by_name": True}

    @field_validator("contract_address", "from_address")
    @classmethod
    def validate_address(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not Web3.is_address(v):
            raise ValueError("Invalid contract or sender address")
        return v

    @field_validator("network")
    @classmethod
    def validate_network(cls, v: str) -> str:
        network = v.lower()
        if network not in ("ethereum", "polygon", "hyperevm"):
            raise ValueError(f"Unsupported network: {v}")
        return network


class ContractReadResponse(BaseModel):
    """Result of a view-method read."""

    contract_address: str = Field(..., alias="contractAddress")
    method: str
    result: str
    network: str

    model_config = {"populate_by_name": True}
