"""Chain service for read-only EVM access.

One ChainClient per network is built at application start-up and handed to
the services that need it. Nothing here signs or broadcasts transactions.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Optional

from web3 import AsyncWeb3, Web3
from web3.exceptions import BadFunctionCallOutput, ContractLogicError

from yieldpilot.config import Settings
from yieldpilot.errors import ApiError, ConfigurationError

logger = logging.getLogger(__name__)


ERC20_ABI = [
    {
        "constant": True,
        "inputs": [],
        "name": "name",
        "outputs": [{"name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [],
        "name": "symbol",
        "outputs": [{"name": "", "type": "string"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [],
        "name": "decimals",
        "outputs": [{"name": "", "type": "uint8"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [],
        "name": "totalSupply",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
    {
        "constant": True,
        "inputs": [{"name": "owner", "type": "address"}],
        "name": "balanceOf",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
]

ERC20_VIEW_METHODS = {entry["name"] for entry in ERC20_ABI}

# Call reverted or returned no data: the address is not a contract of that shape
CONTRACT_CALL_ERRORS = (ContractLogicError, BadFunctionCallOutput)


@dataclass(frozen=True)
class ChainInfo:
    """Public metadata for a supported network."""

    id: str
    name: str
    chain_id: int
    native_asset: str
    explorer_url: str


SUPPORTED_CHAINS = {
    "ethereum": ChainInfo(
        id="ethereum",
        name="Ethereum Mainnet",
        chain_id=1,
        native_asset="ETH",
        explorer_url="https://etherscan.io",
    ),
    "polygon": ChainInfo(
        id="polygon",
        name="Polygon Mainnet",
        chain_id=137,
        native_asset="MATIC",
        explorer_url="https://polygonscan.com",
    ),
    "hyperevm": ChainInfo(
        id="hyperevm",
        name="HyperEVM",
        chain_id=999,
        native_asset="HYPE",
        explorer_url="https://hyperevmscan.io",
    ),
}


class ChainCallError(ApiError):
    """A contract call reverted or failed on the RPC side."""

    def __init__(self, message: str, details: Optional[str] = None):
        super().__init__(message, status_code=400, code="CONTRACT_CALL_FAILED", details=details)


class ChainClient:
    """Read-only client for a single EVM network."""

    def __init__(
        self,
        network: str,
        rpc_url: str,
        chain_id: Optional[int] = None,
        timeout: float = 15.0,
        web3: Optional[AsyncWeb3] = None,
    ):
        self.network = network
        self.rpc_url = rpc_url
        self.chain_id = chain_id
        self.timeout = timeout
        self.w3 = web3 or AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(rpc_url))

    def __repr__(self) -> str:
        return f"ChainClient(network={self.network})"

    async def _bounded(self, awaitable):
        """Await an RPC call under the client timeout."""
        return await asyncio.wait_for(awaitable, timeout=self.timeout)

    def token(self, address: str, abi: Optional[list] = None):
        """Contract handle for a token address."""
        return self.w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi or ERC20_ABI)

    async def get_decimals(self, token_address: str) -> int:
        """Read ERC-20 decimals() for a token."""
        decimals = await self._bounded(self.token(token_address).functions.decimals().call())
        return int(decimals)

    async def get_balance(self, address: str) -> int:
        """Native balance in wei."""
        return await self._bounded(self.w3.eth.get_balance(Web3.to_checksum_address(address)))

    async def get_transaction_count(self, address: str) -> int:
        return await self._bounded(
            self.w3.eth.get_transaction_count(Web3.to_checksum_address(address))
        )

    async def is_contract(self, address: str) -> bool:
        code = await self._bounded(self.w3.eth.get_code(Web3.to_checksum_address(address)))
        return len(code) > 0

    async def call_view(self, address: str, method: str, args: Optional[list] = None, abi=None) -> Any:
        """Call a view function and return its decoded result."""
        contract = self.token(address, abi)
        fn = contract.get_function_by_name(method)
        return await self._bounded(fn(*(args or [])).call())

    async def estimate_gas(self, tx: dict) -> int:
        return await self._bounded(self.w3.eth.estimate_gas(tx))


class ChainRegistry:
    """Per-process set of chain clients, keyed by network name."""

    def __init__(self, clients: Optional[dict[str, ChainClient]] = None):
        self._clients: dict[str, ChainClient] = dict(clients or {})

    @classmethod
    def from_settings(cls, settings: Settings) -> "ChainRegistry":
        """Build a client for every network with a configured RPC URL."""
        clients = {}
        for network, info in SUPPORTED_CHAINS.items():
            rpc_url = settings.get_rpc_url(network)
            if not rpc_url:
                logger.info(f"No RPC URL configured for {network} - chain disabled")
                continue
            chain_id = settings.hyperevm_chain_id if network == "hyperevm" else info.chain_id
            clients[network] = ChainClient(
                network=network,
                rpc_url=rpc_url,
                chain_id=chain_id,
                timeout=settings.http_timeout_seconds,
            )
        return cls(clients)

    @property
    def networks(self) -> list[str]:
        return sorted(self._clients)

    def find(self, network: str) -> Optional[ChainClient]:
        return self._clients.get(network.lower())

    def get(self, network: str) -> ChainClient:
        """Get the client for a network.

        Raises:
            ConfigurationError: If no RPC URL is configured for the network
        """
        client = self.find(network)
        if client is None:
            logger.error(f"Server configuration error: Missing RPC URL for {network}.")
            raise ConfigurationError("RPC URL not configured")
        return client
