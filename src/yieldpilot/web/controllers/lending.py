"""Lending deposit endpoint.

Returns the approve + swap calls a smart-account bundler submits as one
user operation. NO signing or broadcasting happens server-side.
"""

import logging

from fastapi import APIRouter, Depends

from yieldpilot.api.deps import get_deposit_builder
from yieldpilot.errors import ApiError
from yieldpilot.web.contracts.lending import DepositRequest, DepositResponse
from yieldpilot.web.services.deposit_builder import DepositTransactionBuilder

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/lending", tags=["lending"])


@router.post("", response_model=DepositResponse)
async def build_deposit(
    request: DepositRequest,
    builder: DepositTransactionBuilder = Depends(get_deposit_builder),
) -> DepositResponse:
    """Build the calls to deposit ``amount`` of ``inputToken`` into HyperLend.

    The response lists the approval first and the swap second; the client
    must submit them in that order (or batched in that order).
    """
    try:
        transactions = await builder.build(
            input_token=request.input_token,
            user_address=request.user_public_address,
            amount=request.amount,
        )
    except ApiError:
        raise
    except Exception as e:
        logger.exception("Error in /api/lending")
        raise ApiError(str(e) or "An unknown error occurred.", status_code=500)

    return DepositResponse(success=True, transactions=transactions)
