"""Lending market integrations."""

from yieldpilot.lending.hyperlend import HyperLendClient, ReserveRecord

__all__ = ["HyperLendClient", "ReserveRecord"]
