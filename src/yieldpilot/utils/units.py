"""Conversion between human-readable token amounts and integer base units."""

from decimal import Decimal, InvalidOperation, localcontext
from typing import Union

Amount = Union[Decimal, int, float, str]

# uint8 is the ERC-20 decimals return type
MAX_DECIMALS = 255


def to_base_units(amount: Amount, decimals: int) -> int:
    """Scale a human amount to the token's smallest unit.

    Args:
        amount: Human-readable amount (e.g. Decimal("20.5"))
        decimals: Token decimal precision

    Returns:
        amount * 10**decimals as an exact integer

    Raises:
        ValueError: If the amount is not finite and non-negative, or has more
            fractional digits than the token can represent
    """
    if not 0 <= decimals <= MAX_DECIMALS:
        raise ValueError(f"Invalid token decimals: {decimals}")

    if isinstance(amount, bool):
        raise ValueError(f"Invalid amount: {amount!r}")

    try:
        # str() keeps the shortest repr of a float (0.001, not its binary expansion)
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
    except (InvalidOperation, TypeError, ValueError):
        raise ValueError(f"Invalid amount: {amount!r}")

    if not value.is_finite() or value < 0:
        raise ValueError(f"Invalid amount: {amount!r}")

    # Enough precision that the scaled value is never rounded
    with localcontext() as ctx:
        ctx.prec = max(len(value.as_tuple().digits) + decimals + 2, 28)
        scaled = value.scaleb(decimals)
        integral = scaled.to_integral_value()
        if scaled != integral:
            raise ValueError(
                f"Amount {value} has more than {decimals} decimal places"
            )
        return int(integral)


def format_units(value: int, decimals: int) -> str:
    """Format an integer base-unit value as a plain decimal string."""
    with localcontext() as ctx:
        ctx.prec = max(len(str(abs(value))) + decimals + 2, 28)
        human = Decimal(value).scaleb(-decimals).normalize()
    return format(human, "f")
