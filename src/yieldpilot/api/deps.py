"""FastAPI dependencies resolving the per-process service container."""

from fastapi import Request

from yieldpilot.config import get_settings
from yieldpilot.web.services.chain_service import ChainRegistry
from yieldpilot.web.services.chat_service import ChatService
from yieldpilot.web.services.container import ServiceContainer
from yieldpilot.web.services.deposit_builder import DepositTransactionBuilder
from yieldpilot.web.services.transaction_builder import TransactionBuilder


def get_services(request: Request) -> ServiceContainer:
    """Container built in the app lifespan (or on first use without one)."""
    services = getattr(request.app.state, "services", None)
    if services is None:
        services = ServiceContainer(get_settings())
        request.app.state.services = services
    return services


def get_deposit_builder(request: Request) -> DepositTransactionBuilder:
    return get_services(request).deposit_builder


def get_chain_registry(request: Request) -> ChainRegistry:
    return get_services(request).chains


def get_transaction_builder(request: Request) -> TransactionBuilder:
    return get_services(request).tx_builder


def get_chat_service(request: Request) -> ChatService:
    return get_services(request).chat
