"""Tests for the /api/lending endpoint."""

import pytest

from yieldpilot.api.deps import get_deposit_builder

from conftest import (
    INPUT_TOKEN,
    INPUT_TOKEN_CHECKSUM,
    ROUTER_ADDRESS,
    SWAP_CALLDATA,
    USER_ADDRESS,
    FakeUpstream,
    make_builder,
    make_chain,
)


def deposit_body(**overrides) -> dict:
    body = {"inputToken": INPUT_TOKEN, "userPublicAddress": USER_ADDRESS, "amount": 1}
    body.update(overrides)
    return body


@pytest.fixture
def use_builder(test_app):
    """Install a deposit builder backed by fake upstreams."""

    def install(builder):
        test_app.dependency_overrides[get_deposit_builder] = lambda: builder
        return builder

    return install


class TestLendingEndpoint:
    """Tests for deposit building over HTTP."""

    @pytest.mark.asyncio
    async def test_build_deposit(self, client, use_builder, upstream):
        """Response lists the approval first and the swap second."""
        use_builder(make_builder(upstream, chain=make_chain(decimals=6)))

        response = await client.post("/api/lending", json=deposit_body())

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        approval, swap = data["transactions"]
        assert approval["to"] == INPUT_TOKEN_CHECKSUM
        assert approval["data"].startswith("0x095ea7b3")
        assert ROUTER_ADDRESS[2:] in approval["data"]
        assert approval["data"].endswith(format(1_000_000, "064x"))
        assert swap == {"to": ROUTER_ADDRESS, "data": SWAP_CALLDATA, "value": "0"}

    @pytest.mark.asyncio
    async def test_fractional_amount(self, client, use_builder, upstream):
        use_builder(make_builder(upstream, chain=make_chain(decimals=18)))

        response = await client.post("/api/lending", json=deposit_body(amount=0.001))

        assert response.status_code == 200
        approval = response.json()["transactions"][0]
        assert approval["data"].endswith(format(10**15, "064x"))

    @pytest.mark.asyncio
    async def test_invalid_address(self, client, use_builder, upstream):
        chain = make_chain()
        use_builder(make_builder(upstream, chain=chain))

        response = await client.post(
            "/api/lending", json=deposit_body(inputToken="not-an-address")
        )

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "error": "Invalid inputToken address provided.",
            "code": "INVALID_ARGUMENT",
        }
        chain.get_decimals.assert_not_awaited()
        assert upstream.requests == []

    @pytest.mark.asyncio
    async def test_amount_must_be_number(self, client, use_builder, upstream):
        use_builder(make_builder(upstream, chain=make_chain()))

        response = await client.post("/api/lending", json=deposit_body(amount="10"))

        assert response.status_code == 400
        data = response.json()
        assert data["code"] == "VALIDATION_ERROR"
        assert data["error"].startswith("Validation error")

    @pytest.mark.asyncio
    async def test_missing_field(self, client, use_builder, upstream):
        use_builder(make_builder(upstream, chain=make_chain()))

        response = await client.post("/api/lending", json={"amount": 1})

        assert response.status_code == 400
        assert "inputToken" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_negative_amount(self, client, use_builder, upstream):
        use_builder(make_builder(upstream, chain=make_chain()))

        response = await client.post("/api/lending", json=deposit_body(amount=-5))

        assert response.status_code == 400
        assert response.json()["error"] == "amount must be positive."

    @pytest.mark.asyncio
    async def test_reserve_not_found(self, client, use_builder):
        use_builder(make_builder(FakeUpstream(reserves=[]), chain=make_chain()))

        response = await client.post("/api/lending", json=deposit_body())

        assert response.status_code == 404
        data = response.json()
        assert data["code"] == "RESERVE_NOT_FOUND"
        assert data["error"] == f"No corresponding aToken found for asset {INPUT_TOKEN_CHECKSUM}."

    @pytest.mark.asyncio
    async def test_quote_failure_passthrough(self, client, use_builder):
        upstream = FakeUpstream(quote_status=503, quote_body="upstream unavailable")
        use_builder(make_builder(upstream, chain=make_chain()))

        response = await client.post("/api/lending", json=deposit_body())

        assert response.status_code == 503
        assert response.json() == {
            "success": False,
            "error": "Failed to fetch quote from GlueX.",
            "details": "upstream unavailable",
            "code": "QUOTE_SERVICE_FAILED",
        }

    @pytest.mark.asyncio
    async def test_unconfigured_server(self, client):
        """Without an RPC URL or router credentials the request fails with 500."""
        response = await client.post("/api/lending", json=deposit_body())

        assert response.status_code == 500
        assert response.json() == {
            "success": False,
            "error": "Server configuration error.",
            "code": "CONFIGURATION_MISSING",
        }

    @pytest.mark.asyncio
    async def test_unexpected_error(self, client, use_builder, upstream):
        """Unclassified failures become a 500 with the error message."""
        chain = make_chain()
        builder = use_builder(make_builder(upstream, chain=chain))
        builder.markets.get_atoken_address = _raise_runtime_error

        response = await client.post("/api/lending", json=deposit_body())

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "listing exploded"}


async def _raise_runtime_error(*args, **kwargs):
    raise RuntimeError("listing exploded")
