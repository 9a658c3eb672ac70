"""HyperLend market listing integration.

Resolves the receipt token (aToken) minted for a deposited asset. The listing
is fetched fresh on every lookup; reserves may be added or changed between
calls.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from yieldpilot.errors import DepositError, DepositErrorKind

logger = logging.getLogger(__name__)

HYPERLEND_API = "https://api.hyperlend.finance"


@dataclass
class ReserveRecord:
    """A lending reserve as listed by the markets endpoint."""

    underlying_asset: str
    atoken_address: Optional[str]
    name: Optional[str] = None
    symbol: Optional[str] = None
    decimals: Optional[int] = None

    @classmethod
    def from_api(cls, data: dict) -> "ReserveRecord":
        decimals = data.get("decimals")
        return cls(
            underlying_asset=str(data.get("underlyingAsset") or ""),
            atoken_address=data.get("aTokenAddress") or None,
            name=data.get("name"),
            symbol=data.get("symbol"),
            decimals=int(decimals) if str(decimals or "").isdigit() else None,
        )


class HyperLendClient:
    """Client for the HyperLend markets API."""

    def __init__(
        self,
        base_url: str = HYPERLEND_API,
        chain: str = "hyperEvm",
        timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.chain = chain
        self.timeout = timeout
        self._client = client

    @property
    def markets_url(self) -> str:
        return f"{self.base_url}/data/markets"

    async def _get(self) -> httpx.Response:
        params = {"chain": self.chain}
        if self._client is not None:
            return await self._client.get(self.markets_url, params=params, timeout=self.timeout)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.get(self.markets_url, params=params)

    async def fetch_reserves(self) -> list[ReserveRecord]:
        """Fetch the full reserve listing.

        Raises:
            DepositError: MARKET_LISTING_FAILED if the listing cannot be fetched
        """
        try:
            response = await self._get()
        except httpx.TimeoutException as e:
            logger.warning(f"HyperLend markets request timed out after {self.timeout}s")
            raise DepositError(
                DepositErrorKind.MARKET_LISTING_FAILED,
                "Failed to resolve output token from HyperLend API.",
                status_code=504,
                details=str(e) or None,
            )
        except httpx.HTTPError as e:
            logger.error(f"HyperLend markets transport error: {e}")
            raise DepositError(
                DepositErrorKind.MARKET_LISTING_FAILED,
                "Failed to resolve output token from HyperLend API.",
                details=str(e),
            )

        if not response.is_success:
            logger.warning(f"HyperLend API request failed with status: {response.status_code}")
            raise DepositError(
                DepositErrorKind.MARKET_LISTING_FAILED,
                "Failed to resolve output token from HyperLend API.",
                details=f"HyperLend API request failed with status: {response.status_code}",
            )

        try:
            data = response.json()
        except ValueError:
            data = None

        reserves = data.get("reserves") if isinstance(data, dict) else None
        if not isinstance(reserves, list):
            raise DepositError(
                DepositErrorKind.MARKET_LISTING_FAILED,
                "Failed to resolve output token from HyperLend API.",
                details="Markets response has no reserves list",
            )

        return [ReserveRecord.from_api(r) for r in reserves if isinstance(r, dict)]

    async def get_atoken_address(self, underlying_asset: str) -> str:
        """Resolve the aToken address for an underlying asset.

        Linear scan over the listing, matching addresses case-insensitively.

        Raises:
            DepositError: RESERVE_NOT_FOUND if there is no reserve or it has no aToken
        """
        reserves = await self.fetch_reserves()
        target = underlying_asset.lower()

        reserve = next(
            (r for r in reserves if r.underlying_asset.lower() == target),
            None,
        )

        if reserve is None or not reserve.atoken_address:
            logger.warning(
                f"No corresponding aToken found for asset {underlying_asset} "
                f"on chain {self.chain} ({len(reserves)} reserves listed)"
            )
            raise DepositError(
                DepositErrorKind.RESERVE_NOT_FOUND,
                f"No corresponding aToken found for asset {underlying_asset}.",
            )

        logger.info(
            f"Found aTokenAddress for {reserve.name} ({reserve.symbol}): {reserve.atoken_address}"
        )
        return reserve.atoken_address
