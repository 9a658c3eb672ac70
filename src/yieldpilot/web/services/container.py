"""Process-lifetime service wiring.

Clients are constructed once from settings and passed explicitly to the
services that use them.
"""

import logging
from typing import Optional

import httpx

from yieldpilot.config import Settings
from yieldpilot.lending.hyperlend import HyperLendClient
from yieldpilot.routing.gluex import GlueXClient
from yieldpilot.web.services.chain_service import ChainRegistry
from yieldpilot.web.services.chat_service import ChatService
from yieldpilot.web.services.deposit_builder import DepositTransactionBuilder
from yieldpilot.web.services.transaction_builder import TransactionBuilder

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Holds the shared HTTP client, chain clients and services."""

    def __init__(
        self,
        settings: Settings,
        http_client: Optional[httpx.AsyncClient] = None,
        chains: Optional[ChainRegistry] = None,
    ):
        self.settings = settings
        self.http_client = http_client or httpx.AsyncClient(timeout=settings.http_timeout_seconds)
        self.chains = chains or ChainRegistry.from_settings(settings)
        self.tx_builder = TransactionBuilder()

        self.markets = HyperLendClient(
            base_url=settings.hyperlend_api_url,
            chain=settings.hyperlend_chain,
            timeout=settings.http_timeout_seconds,
            client=self.http_client,
        )
        self.router = GlueXClient(
            api_key=settings.gluex_api_key,
            unique_pid=settings.gluex_unique_pid,
            chain_id=settings.gluex_chain_id,
            quote_url=settings.gluex_quote_url,
            timeout=settings.http_timeout_seconds,
            client=self.http_client,
        )
        self.deposit_builder = DepositTransactionBuilder(
            chain=self.chains.find("hyperevm"),
            markets=self.markets,
            router=self.router,
            tx_builder=self.tx_builder,
        )
        self.chat = ChatService(
            api_key=settings.openai_api_key,
            base_url=settings.openai_api_url,
            timeout=settings.http_timeout_seconds,
            client=self.http_client,
        )
        logger.info(f"Services ready (chains: {', '.join(self.chains.networks) or 'none'})")

    async def close(self) -> None:
        """Release the shared HTTP client."""
        await self.http_client.aclose()
