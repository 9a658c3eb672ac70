"""Transaction builder for preparing unsigned calls.

This service encodes call data for client-side signing.
NO signing or broadcasting happens here - this is non-custodial.
"""

import logging
from typing import Any, Optional

from eth_abi import encode
from web3 import Web3

from yieldpilot.web.contracts.transactions import TransactionCall, UnsignedTransaction
from yieldpilot.web.services.chain_service import SUPPORTED_CHAINS

logger = logging.getLogger(__name__)

APPROVE_SIGNATURE = "approve(address,uint256)"

MAX_UINT256 = 2**256 - 1


def function_selector(signature: str) -> bytes:
    """First four bytes of keccak256 of a canonical function signature."""
    return bytes(Web3.keccak(text=signature)[:4])


def canonical_type(param: dict) -> str:
    """Canonical ABI type of a parameter, expanding tuples to (t1,t2,...)."""
    abi_type = param["type"]
    if abi_type.startswith("tuple"):
        inner = ",".join(canonical_type(c) for c in param.get("components", []))
        return f"({inner}){abi_type[len('tuple'):]}"
    return abi_type


def find_function(abi: list, method: str, arg_count: int) -> dict:
    """Locate a function entry by name and arity.

    Raises:
        ValueError: If no single function matches
    """
    candidates = [
        entry
        for entry in abi
        if isinstance(entry, dict)
        and entry.get("type", "function") == "function"
        and entry.get("name") == method
    ]
    if not candidates:
        raise ValueError(f"Method {method} not found in ABI")

    matching = [c for c in candidates if len(c.get("inputs", [])) == arg_count]
    if not matching:
        raise ValueError(f"Method {method} does not take {arg_count} argument(s)")
    if len(matching) > 1:
        raise ValueError(f"Method {method} is ambiguous for {arg_count} argument(s)")
    return matching[0]


def encode_function_call(abi_entry: dict, args: list) -> str:
    """Encode selector + arguments for an ABI function entry."""
    types = [canonical_type(p) for p in abi_entry.get("inputs", [])]
    signature = f"{abi_entry['name']}({','.join(types)})"
    normalized = [_normalize_arg(t, a) for t, a in zip(types, args)]
    return "0x" + (function_selector(signature) + encode(types, normalized)).hex()


def _normalize_arg(abi_type: str, value: Any) -> Any:
    """Coerce JSON-friendly values into what the ABI encoder expects."""
    if abi_type == "address" and isinstance(value, str):
        return Web3.to_checksum_address(value)
    if abi_type.startswith(("uint", "int")) and not abi_type.endswith("]"):
        if isinstance(value, str):
            return int(value, 0)
    if abi_type.startswith("bytes") and not abi_type.endswith("]") and isinstance(value, str):
        return Web3.to_bytes(hexstr=value)
    return value


class TransactionBuilder:
    """Builds unsigned calls for client-side signing.

    This service NEVER:
    - Accesses private keys
    - Signs transactions
    - Broadcasts transactions
    """

    def encode_approval(self, spender: str, amount: int) -> str:
        """Call data for ERC-20 approve(spender, amount)."""
        if not 0 <= amount <= MAX_UINT256:
            raise ValueError(f"Approval amount out of range: {amount}")
        args = encode(["address", "uint256"], [Web3.to_checksum_address(spender), amount])
        return "0x" + (function_selector(APPROVE_SIGNATURE) + args).hex()

    def build_approval(self, token_address: str, spender: str, amount: int) -> TransactionCall:
        """Build the approval call granting ``spender`` exactly ``amount``."""
        return TransactionCall(
            to=token_address,
            data=self.encode_approval(spender, amount),
            value="0",
        )

    def build_contract_call(
        self,
        network: str,
        contract_address: str,
        abi: list,
        method: str,
        params: Optional[list] = None,
        value: int = 0,
    ) -> UnsignedTransaction:
        """Encode an arbitrary contract method call.

        Raises:
            ValueError: If the method is not in the ABI or arguments do not encode
        """
        params = params or []
        entry = find_function(abi, method, len(params))

        try:
            data = encode_function_call(entry, params)
        except Exception as e:
            raise ValueError(f"Failed to encode {method} arguments: {e}")

        warnings = []
        if entry.get("stateMutability") in ("view", "pure"):
            warnings.append(f"{method} is a {entry['stateMutability']} function; use a read instead.")
        if value and entry.get("stateMutability") not in (None, "payable"):
            warnings.append(f"{method} is not payable but a value was supplied.")

        chain_info = SUPPORTED_CHAINS.get(network)
        return UnsignedTransaction(
            network=network,
            chain_id=chain_info.chain_id if chain_info else None,
            to=Web3.to_checksum_address(contract_address),
            value=str(value),
            data=data,
            description=f"Call {method} on {contract_address[:10]}...",
            warnings=warnings,
        )
