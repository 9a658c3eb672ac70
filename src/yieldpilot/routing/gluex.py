"""GlueX router integration.

Requests a swap quote with pre-built router calldata. The returned calldata is
meant for client-side submission; nothing is signed or broadcast here.
"""

import logging
from typing import Optional

import httpx

from yieldpilot.errors import DepositError, DepositErrorKind
from yieldpilot.routing.base import RouterQuote

logger = logging.getLogger(__name__)

GLUEX_QUOTE_ENDPOINT = "https://router.gluex.xyz/v1/quote"


class GlueXClient:
    """Quote client for the GlueX router API."""

    def __init__(
        self,
        api_key: Optional[str],
        unique_pid: Optional[str],
        chain_id: str = "hyperevm",
        quote_url: str = GLUEX_QUOTE_ENDPOINT,
        timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize GlueX client.

        Args:
            api_key: GlueX API key (sent as x-api-key)
            unique_pid: Partner ID attached to every quote
            chain_id: GlueX chain identifier (e.g. "hyperevm", "base")
            quote_url: Quote endpoint
            timeout: Request timeout in seconds
            client: Shared HTTP client; a short-lived one is used when omitted
        """
        self.api_key = api_key
        self.unique_pid = unique_pid
        self.chain_id = chain_id
        self.quote_url = quote_url
        self.timeout = timeout
        self._client = client

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.unique_pid)

    def ensure_configured(self) -> None:
        """Raise if the API key or partner ID is missing."""
        if not self.is_configured:
            logger.error("Server configuration error: Missing GLUEX_API_KEY or GLUEX_UNIQUE_PID.")
            raise DepositError(
                DepositErrorKind.CONFIGURATION_MISSING, "Server configuration error."
            )

    def _get_headers(self) -> dict:
        return {
            "x-api-key": self.api_key or "",
            "Content-Type": "application/json",
        }

    async def _post(self, payload: dict) -> httpx.Response:
        if self._client is not None:
            return await self._client.post(
                self.quote_url, headers=self._get_headers(), json=payload, timeout=self.timeout
            )
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.quote_url, headers=self._get_headers(), json=payload)

    async def get_quote(
        self,
        input_token: str,
        output_token: str,
        input_amount: int,
        user_address: str,
        output_receiver: Optional[str] = None,
    ) -> RouterQuote:
        """Fetch a swap quote with router calldata.

        Args:
            input_token: Address of the token being sold
            output_token: Address of the token being bought
            input_amount: Exact input amount in base units
            user_address: Address that will submit the swap
            output_receiver: Address receiving the output (defaults to user_address)

        Returns:
            RouterQuote with router address and calldata

        Raises:
            DepositError: QUOTE_SERVICE_FAILED on any non-success response
        """
        self.ensure_configured()

        payload = {
            "chainID": self.chain_id,
            "userAddress": user_address,
            "outputReceiver": output_receiver or user_address,
            "uniquePID": self.unique_pid,
            "inputToken": input_token,
            "outputToken": output_token,
            "inputAmount": str(input_amount),
            "isPermit2": False,
        }
        logger.debug(f"Requesting GlueX quote: {input_amount} {input_token} -> {output_token}")

        try:
            response = await self._post(payload)
        except httpx.TimeoutException as e:
            logger.warning(f"GlueX quote timed out after {self.timeout}s")
            raise DepositError(
                DepositErrorKind.QUOTE_SERVICE_FAILED,
                "Quote request to GlueX timed out.",
                status_code=504,
                details=str(e) or None,
            )
        except httpx.HTTPError as e:
            logger.error(f"GlueX quote transport error: {e}")
            raise DepositError(
                DepositErrorKind.QUOTE_SERVICE_FAILED,
                "Failed to fetch quote from GlueX.",
                details=str(e),
            )

        if not response.is_success:
            logger.warning(f"GlueX API error: {response.status_code} - {response.text}")
            raise DepositError(
                DepositErrorKind.QUOTE_SERVICE_FAILED,
                "Failed to fetch quote from GlueX.",
                # Only error statuses pass through
                status_code=response.status_code if response.status_code >= 400 else 502,
                details=response.text,
            )

        try:
            data = response.json()
        except ValueError:
            raise DepositError(
                DepositErrorKind.QUOTE_SERVICE_FAILED,
                "GlueX returned a malformed quote.",
                details=response.text,
            )

        # GlueX also reports failures inside a 200 body
        body_status = data.get("statusCode") if isinstance(data, dict) else None
        if isinstance(body_status, int) and body_status >= 400:
            logger.warning(f"GlueX quote rejected: {data}")
            raise DepositError(
                DepositErrorKind.QUOTE_SERVICE_FAILED,
                "Failed to fetch quote from GlueX.",
                status_code=body_status if body_status < 600 else 502,
                details=response.text,
            )

        result = data.get("result") if isinstance(data, dict) else None
        if not isinstance(result, dict) or not result.get("router") or not result.get("calldata"):
            raise DepositError(
                DepositErrorKind.QUOTE_SERVICE_FAILED,
                "GlueX returned a malformed quote.",
                details=response.text,
            )

        output_amount = result.get("outputAmount")
        quote = RouterQuote(
            router=result["router"],
            calldata=result["calldata"],
            input_token=input_token,
            output_token=output_token,
            input_amount=input_amount,
            output_amount=int(output_amount) if str(output_amount or "").isdigit() else None,
            raw=result,
        )
        logger.info(f"GlueX quote received: {quote.to_dict()}")
        return quote
