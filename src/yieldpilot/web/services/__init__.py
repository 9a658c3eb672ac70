"""Web services for the assistant backend.

SECURITY: These services MUST NOT:
- Access private keys or seed phrases
- Sign or broadcast transactions

These services CAN:
- Query blockchain state (decimals, balances, view calls)
- Fetch quotes and market listings
- Prepare unsigned calls for client signing
"""

from yieldpilot.web.services.chain_service import ChainClient, ChainRegistry
from yieldpilot.web.services.chat_service import ChatService
from yieldpilot.web.services.container import ServiceContainer
from yieldpilot.web.services.deposit_builder import DepositTransactionBuilder
from yieldpilot.web.services.transaction_builder import TransactionBuilder

__all__ = [
    "ChainClient",
    "ChainRegistry",
    "ChatService",
    "ServiceContainer",
    "DepositTransactionBuilder",
    "TransactionBuilder",
]
