"""Router quote model shared by routing integrations."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class RouterQuote:
    """Pre-built swap call returned by a router aggregator.

    The calldata is opaque: it is sized for the exact input amount that was
    quoted and must be sent to ``router`` unchanged.
    """

    router: str
    calldata: str
    input_token: str
    output_token: str
    input_amount: int
    output_amount: Optional[int] = None
    raw: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Convert to dictionary for logging."""
        return {
            "router": self.router,
            "input_token": self.input_token,
            "output_token": self.output_token,
            "input_amount": str(self.input_amount),
            "output_amount": str(self.output_amount) if self.output_amount is not None else None,
        }
