"""Generic contract endpoints.

Reads call whitelisted ERC-20 view methods. Writes are encoded as unsigned
calls for the client to sign; the server holds no key.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from web3 import Web3

from yieldpilot.api.deps import get_chain_registry, get_transaction_builder
from yieldpilot.errors import ApiError
from yieldpilot.web.contracts.transactions import (
    ContractCallRequest,
    ContractReadResponse,
    UnsignedTransaction,
)
from yieldpilot.web.services.chain_service import ERC20_VIEW_METHODS, ChainCallError, ChainRegistry
from yieldpilot.web.services.transaction_builder import TransactionBuilder

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/crypto/contracts", tags=["contracts"])


@router.get("", response_model=ContractReadResponse)
async def read_contract(
    contract_address: Optional[str] = Query(None, alias="contractAddress"),
    method: Optional[str] = Query(None),
    network: str = Query("ethereum"),
    owner: Optional[str] = Query(None, description="Owner address for balanceOf"),
    chains: ChainRegistry = Depends(get_chain_registry),
) -> ContractReadResponse:
    """Read an ERC-20 view method (name, symbol, decimals, totalSupply, balanceOf)."""
    if not contract_address or not method:
        raise ApiError("contractAddress and method are required", status_code=400)
    if not Web3.is_address(contract_address):
        raise ApiError("Invalid contract address", status_code=400, code="INVALID_ADDRESS")
    if method not in ERC20_VIEW_METHODS:
        raise ApiError(
            f"Unsupported method {method}. Supported: {', '.join(sorted(ERC20_VIEW_METHODS))}",
            status_code=400,
        )

    args = []
    if method == "balanceOf":
        if not owner or not Web3.is_address(owner):
            raise ApiError("balanceOf requires a valid owner address", status_code=400)
        args = [Web3.to_checksum_address(owner)]

    client = chains.get(network)

    try:
        result = await client.call_view(contract_address, method, args)
    except Exception as e:
        logger.warning(f"Contract read {method} on {contract_address} failed: {e}")
        raise ChainCallError(f"Method {method} not found or failed to execute", details=str(e) or None)

    return ContractReadResponse(
        contract_address=contract_address,
        method=method,
        result=str(result),
        network=network.lower(),
    )


@router.post("", response_model=UnsignedTransaction)
async def build_contract_call(
    request: ContractCallRequest,
    chains: ChainRegistry = Depends(get_chain_registry),
    tx_builder: TransactionBuilder = Depends(get_transaction_builder),
) -> UnsignedTransaction:
    """Encode a state-changing call for client-side signing.

    When ``fromAddress`` is given and the network is configured, the gas
    limit is estimated; a failed estimate is reported as a warning.
    """
    try:
        tx = tx_builder.build_contract_call(
            network=request.network,
            contract_address=request.contract_address,
            abi=request.abi,
            method=request.method,
            params=request.params,
            value=request.value,
        )
    except ValueError as e:
        raise ApiError(str(e), status_code=400)

    if request.from_address:
        client = chains.find(request.network)
        if client is None:
            tx.warnings.append(f"Gas estimation unavailable: no RPC configured for {request.network}.")
        else:
            try:
                gas = await client.estimate_gas({
                    "from": Web3.to_checksum_address(request.from_address),
                    "to": tx.to,
                    "data": tx.data,
                    "value": request.value,
                })
                tx.gas_limit = str(gas)
            except Exception as e:
                logger.info(f"Gas estimation for {request.method} failed: {e}")
                tx.warnings.append(f"Gas estimation failed: {e}")

    return tx
