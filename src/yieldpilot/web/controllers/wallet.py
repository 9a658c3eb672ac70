"""Wallet lookup endpoints (public addresses only)."""

import logging

from fastapi import APIRouter, Depends, Query
from web3 import Web3

from yieldpilot.api.deps import get_chain_registry
from yieldpilot.errors import ApiError
from yieldpilot.utils.units import format_units
from yieldpilot.web.contracts.wallet import WalletInfoRequest, WalletInfoResponse
from yieldpilot.web.services.chain_service import ChainRegistry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/crypto/wallet", tags=["wallet"])


async def _wallet_info(request: WalletInfoRequest, chains: ChainRegistry) -> WalletInfoResponse:
    if not Web3.is_address(request.address):
        raise ApiError("Invalid Ethereum address", status_code=400, code="INVALID_ADDRESS")

    client = chains.get(request.network)

    try:
        balance = await client.get_balance(request.address)
        transaction_count = await client.get_transaction_count(request.address)
        is_contract = await client.is_contract(request.address)
    except Exception as e:
        logger.error(f"Wallet info error for {request.address} on {request.network}: {e}")
        raise ApiError("Failed to fetch wallet information", status_code=500)

    return WalletInfoResponse(
        address=request.address,
        network=request.network,
        balance=format_units(balance, 18),
        transaction_count=transaction_count,
        is_contract=is_contract,
    )


@router.post("", response_model=WalletInfoResponse)
async def post_wallet_info(
    request: WalletInfoRequest,
    chains: ChainRegistry = Depends(get_chain_registry),
) -> WalletInfoResponse:
    """Get balance, nonce and contract status for an address."""
    return await _wallet_info(request, chains)


@router.get("", response_model=WalletInfoResponse)
async def get_wallet_info(
    address: str = Query(None, description="Wallet address"),
    network: str = Query("ethereum", description="Network name"),
    chains: ChainRegistry = Depends(get_chain_registry),
) -> WalletInfoResponse:
    """Query-string variant of the wallet lookup."""
    if not address:
        raise ApiError("Address parameter is required", status_code=400)
    try:
        request = WalletInfoRequest(address=address, network=network)
    except ValueError as e:
        raise ApiError(f"Validation error: {e}", status_code=400, code="VALIDATION_ERROR")
    return await _wallet_info(request, chains)
