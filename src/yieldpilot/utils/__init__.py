"""Utility modules for yieldpilot."""

from yieldpilot.utils.units import format_units, to_base_units

__all__ = ["format_units", "to_base_units"]
