"""Swap routing integrations (quote only, never execution)."""

from yieldpilot.routing.base import RouterQuote
from yieldpilot.routing.gluex import GlueXClient

__all__ = ["RouterQuote", "GlueXClient"]
