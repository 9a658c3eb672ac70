"""HTTP controllers for web API endpoints.

SECURITY: These controllers MUST NOT:
- Access private keys
- Sign or broadcast transactions

All on-chain operations are read-only or prepare data for client-side signing.
"""

from yieldpilot.web.controllers.chat import router as chat_router
from yieldpilot.web.controllers.contracts import router as contracts_router
from yieldpilot.web.controllers.lending import router as lending_router
from yieldpilot.web.controllers.wallet import router as wallet_router

__all__ = [
    "chat_router",
    "contracts_router",
    "lending_router",
    "wallet_router",
]
