"""Deposit transaction builder.

Turns (input token, user, amount) into the two calls a smart-account bundler
submits to deposit into a HyperLend reserve through the GlueX router:

1. approve(router, amount) on the input token
2. the router's swap call, input token -> reserve aToken

Each step depends on the previous one, so they run strictly in order. Nothing
is persisted or submitted here; a failure at any step leaves no side effects.
"""

import logging
from decimal import Decimal
from typing import Optional, Union

from web3 import Web3

from yieldpilot.errors import DepositError, DepositErrorKind
from yieldpilot.lending.hyperlend import HyperLendClient
from yieldpilot.routing.gluex import GlueXClient
from yieldpilot.utils.units import to_base_units
from yieldpilot.web.contracts.transactions import TransactionCall
from yieldpilot.web.services.chain_service import CONTRACT_CALL_ERRORS, ChainClient
from yieldpilot.web.services.transaction_builder import MAX_UINT256, TransactionBuilder

logger = logging.getLogger(__name__)


class DepositTransactionBuilder:
    """Assembles approve + swap calls for a lending deposit."""

    def __init__(
        self,
        chain: Optional[ChainClient],
        markets: HyperLendClient,
        router: GlueXClient,
        tx_builder: Optional[TransactionBuilder] = None,
    ):
        """Initialize the builder.

        Args:
            chain: Client for the deposit network (None when no RPC URL is configured)
            markets: Lending market listing client
            router: Swap quote client
            tx_builder: Call data encoder
        """
        self.chain = chain
        self.markets = markets
        self.router = router
        self.tx_builder = tx_builder or TransactionBuilder()

    @staticmethod
    def _validate(
        input_token: str,
        user_address: str,
        amount: Union[Decimal, int, float],
    ) -> tuple[str, str, Decimal]:
        if not isinstance(input_token, str) or not Web3.is_address(input_token):
            raise DepositError(
                DepositErrorKind.INVALID_ARGUMENT, "Invalid inputToken address provided."
            )
        if not isinstance(user_address, str) or not Web3.is_address(user_address):
            raise DepositError(
                DepositErrorKind.INVALID_ARGUMENT, "Invalid userPublicAddress provided."
            )
        if isinstance(amount, bool) or not isinstance(amount, (Decimal, int, float)):
            raise DepositError(DepositErrorKind.INVALID_ARGUMENT, "amount must be a number.")

        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
        if not value.is_finite() or value <= 0:
            raise DepositError(DepositErrorKind.INVALID_ARGUMENT, "amount must be positive.")

        # is_address also accepts bare hex; everything downstream expects 0x-checksummed
        return Web3.to_checksum_address(input_token), Web3.to_checksum_address(user_address), value

    def _check_configuration(self) -> ChainClient:
        if self.chain is None:
            logger.error("Server configuration error: Missing HYPEREVM_RPC_URL.")
            raise DepositError(
                DepositErrorKind.CONFIGURATION_MISSING, "Server configuration error."
            )
        self.router.ensure_configured()
        return self.chain

    async def _resolve_decimals(self, chain: ChainClient, input_token: str) -> int:
        try:
            decimals = await chain.get_decimals(input_token)
        except CONTRACT_CALL_ERRORS as e:
            logger.warning(f"decimals() reverted for {input_token}: {e}")
            raise DepositError(
                DepositErrorKind.TOKEN_QUERY_FAILED,
                "Failed to fetch decimals. The provided address may not be a valid ERC20 token.",
                details=str(e) or None,
            )
        except Exception as e:
            logger.error(f"decimals() query failed for {input_token}: {type(e).__name__}: {e}")
            raise DepositError(
                DepositErrorKind.TOKEN_QUERY_FAILED,
                "Failed to fetch token decimals.",
                details=f"{type(e).__name__}: {e}",
            )
        logger.debug(f"Token {input_token} has {decimals} decimals")
        return decimals

    async def build(
        self,
        input_token: str,
        user_address: str,
        amount: Union[Decimal, int, float],
    ) -> list[TransactionCall]:
        """Build the ordered [approval, swap] calls.

        Args:
            input_token: Address of the token to deposit
            user_address: Depositor address (sender and output receiver)
            amount: Human-readable amount

        Returns:
            Two calls: approval of the router first, then the swap

        Raises:
            DepositError: With the kind of the step that failed
        """
        input_token, user_address, human_amount = self._validate(input_token, user_address, amount)
        chain = self._check_configuration()

        logger.info(f"Building deposit: {human_amount} of {input_token} for {user_address}")

        # Step 1: decimals -> exact base-unit amount
        decimals = await self._resolve_decimals(chain, input_token)
        try:
            input_amount = to_base_units(human_amount, decimals)
        except ValueError as e:
            raise DepositError(DepositErrorKind.INVALID_ARGUMENT, str(e))
        if input_amount == 0:
            raise DepositError(
                DepositErrorKind.INVALID_ARGUMENT, "amount is below the token's smallest unit."
            )
        if input_amount > MAX_UINT256:
            raise DepositError(
                DepositErrorKind.INVALID_ARGUMENT, "amount exceeds the maximum uint256 token amount."
            )

        # Step 2: reserve aToken is the swap output
        output_token = await self.markets.get_atoken_address(input_token)
        logger.info(f"Output token address: {output_token}")

        # Step 3: router quote for the exact input amount
        quote = await self.router.get_quote(
            input_token=input_token,
            output_token=output_token,
            input_amount=input_amount,
            user_address=user_address,
            output_receiver=user_address,
        )

        # Step 4: approval must precede the swap that spends it
        approval = self.tx_builder.build_approval(input_token, quote.router, input_amount)
        swap = TransactionCall(to=quote.router, data=quote.calldata, value="0")

        logger.info(
            f"Deposit calls ready: approve {input_amount} to {quote.router}, swap -> {output_token}"
        )
        return [approval, swap]
