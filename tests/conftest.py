"""Pytest configuration and fixtures."""

import os
from typing import AsyncGenerator, Callable, Optional
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from web3 import Web3

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["DEBUG"] = "true"
os.environ["JWT_SECRET"] = "test-secret-key-with-at-least-32-bytes!"
os.environ.pop("HYPEREVM_RPC_URL", None)
os.environ.pop("GLUEX_API_KEY", None)
os.environ.pop("GLUEX_UNIQUE_PID", None)
os.environ.pop("OPENAI_API_KEY", None)

from yieldpilot.accounts.models import Base
from yieldpilot.accounts.repository import UserRepository
from yieldpilot.lending.hyperlend import HyperLendClient
from yieldpilot.routing.gluex import GlueXClient
from yieldpilot.web.services.chain_service import ChainClient
from yieldpilot.web.services.deposit_builder import DepositTransactionBuilder

# All-lowercase addresses are valid without a checksum
INPUT_TOKEN = "0x" + "aa" * 20
USER_ADDRESS = "0x" + "33" * 20
ROUTER_ADDRESS = "0x" + "22" * 20
ATOKEN_ADDRESS = "0x" + "44" * 20
SWAP_CALLDATA = "0xdeadbeef" + "00" * 32

# Deposit calls carry the checksummed forms
INPUT_TOKEN_CHECKSUM = Web3.to_checksum_address(INPUT_TOKEN)
USER_ADDRESS_CHECKSUM = Web3.to_checksum_address(USER_ADDRESS)

HYPERLEND_URL = "https://hyperlend.test"
GLUEX_URL = "https://gluex.test/v1/quote"


@pytest_asyncio.fixture
async def db_engine():
    """Create in-memory database engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(db_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create database session for testing."""
    session_factory = async_sessionmaker(
        bind=db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def user_repo(db_session: AsyncSession) -> UserRepository:
    """Create user repository for testing."""
    return UserRepository(db_session)


def default_reserves() -> list[dict]:
    return [
        {
            "chain": "hyperEvm",
            "underlyingAsset": "0x" + "55" * 20,
            "name": "Wrapped HYPE",
            "symbol": "WHYPE",
            "decimals": "18",
            "aTokenAddress": "0x" + "66" * 20,
        },
        {
            "chain": "hyperEvm",
            # Listing uses upper-case hex; lookups must ignore case
            "underlyingAsset": "0x" + "AA" * 20,
            "name": "USD Coin",
            "symbol": "USDC",
            "decimals": "6",
            "aTokenAddress": ATOKEN_ADDRESS,
        },
    ]


def default_quote() -> dict:
    return {
        "statusCode": 200,
        "result": {
            "router": ROUTER_ADDRESS,
            "calldata": SWAP_CALLDATA,
            "outputAmount": "999000",
        },
    }


class FakeUpstream:
    """httpx transport serving the market listing and quote endpoints."""

    def __init__(
        self,
        reserves: Optional[list] = None,
        quote_status: int = 200,
        quote_body: Optional[object] = None,
        markets_status: int = 200,
        quote_exception: Optional[Callable[[httpx.Request], Exception]] = None,
    ):
        self.reserves = default_reserves() if reserves is None else reserves
        self.quote_status = quote_status
        self.quote_body = default_quote() if quote_body is None else quote_body
        self.markets_status = markets_status
        self.quote_exception = quote_exception
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.path == "/data/markets":
            if self.markets_status != 200:
                return httpx.Response(self.markets_status, text="markets down")
            return httpx.Response(200, json={"reserves": self.reserves})
        if request.url.path == "/v1/quote":
            if self.quote_exception is not None:
                raise self.quote_exception(request)
            if isinstance(self.quote_body, str):
                return httpx.Response(self.quote_status, text=self.quote_body)
            return httpx.Response(self.quote_status, json=self.quote_body)
        return httpx.Response(404, text="not found")

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


def make_chain(decimals: int = 6) -> MagicMock:
    """Chain client double with an async decimals() read."""
    chain = MagicMock(spec=ChainClient)
    chain.network = "hyperevm"
    chain.get_decimals = AsyncMock(return_value=decimals)
    return chain


def make_builder(
    upstream: FakeUpstream,
    chain=None,
    api_key: Optional[str] = "gluex-key",
    unique_pid: Optional[str] = "partner-1",
) -> DepositTransactionBuilder:
    http_client = upstream.client()
    return DepositTransactionBuilder(
        chain=chain,
        markets=HyperLendClient(base_url=HYPERLEND_URL, chain="hyperEvm", client=http_client),
        router=GlueXClient(
            api_key=api_key,
            unique_pid=unique_pid,
            chain_id="hyperevm",
            quote_url=GLUEX_URL,
            client=http_client,
        ),
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
async def test_app():
    """Create test application with fresh database."""
    from yieldpilot.accounts.database import close_db, get_engine
    from yieldpilot.api.app import create_app

    # Create tables in memory database
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    app = create_app()

    yield app

    # Cleanup
    app.dependency_overrides.clear()
    services = getattr(app.state, "services", None)
    if services is not None:
        await services.close()
    await close_db()


@pytest.fixture
async def client(test_app):
    """Create async test client."""
    transport = httpx.ASGITransport(app=test_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
