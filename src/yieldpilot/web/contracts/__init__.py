"""Request and response contracts for the web layer."""

from yieldpilot.web.contracts.chat import ChatRequest, ChatResponse
from yieldpilot.web.contracts.lending import DepositRequest, DepositResponse
from yieldpilot.web.contracts.transactions import (
    ContractCallRequest,
    ContractReadResponse,
    TransactionCall,
    UnsignedTransaction,
)
from yieldpilot.web.contracts.wallet import WalletInfoRequest, WalletInfoResponse

__all__ = [
    # Chat
    "ChatRequest",
    "ChatResponse",
    # Lending
    "DepositRequest",
    "DepositResponse",
    # Transactions
    "ContractCallRequest",
    "ContractReadResponse",
    "TransactionCall",
    "UnsignedTransaction",
    # Wallet
    "WalletInfoRequest",
    "WalletInfoResponse",
]
