"""Tests for amount scaling."""

from decimal import Decimal

import pytest

from yieldpilot.utils.units import format_units, to_base_units


class TestToBaseUnits:
    """Tests for human amount -> base units."""

    def test_six_decimals(self):
        """One whole token with 6 decimals."""
        assert to_base_units(1, 6) == 1_000_000

    def test_eighteen_decimals_fraction(self):
        """0.001 of an 18-decimal token."""
        assert to_base_units(Decimal("0.001"), 18) == 1_000_000_000_000_000

    def test_float_uses_shortest_repr(self):
        """Floats scale from their printed value, not the binary expansion."""
        assert to_base_units(0.001, 18) == 10**15
        assert to_base_units(20.5, 6) == 20_500_000

    def test_zero_decimals(self):
        assert to_base_units(42, 0) == 42

    def test_large_amount_is_exact(self):
        """No rounding for values beyond the default context precision."""
        amount = Decimal("123456789012345678901234567890.123456789012345678")
        assert to_base_units(amount, 18) == 123456789012345678901234567890123456789012345678

    def test_excess_precision_rejected(self):
        """More fractional digits than the token supports is an error."""
        with pytest.raises(ValueError, match="decimal places"):
            to_base_units(Decimal("1.0000001"), 6)

    def test_trailing_zeros_allowed(self):
        assert to_base_units(Decimal("1.500000000"), 6) == 1_500_000

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            to_base_units(Decimal("-1"), 6)

    def test_non_finite_rejected(self):
        with pytest.raises(ValueError):
            to_base_units(Decimal("NaN"), 6)
        with pytest.raises(ValueError):
            to_base_units(float("inf"), 6)

    def test_bool_rejected(self):
        with pytest.raises(ValueError):
            to_base_units(True, 6)

    def test_invalid_decimals(self):
        with pytest.raises(ValueError, match="decimals"):
            to_base_units(1, 256)


class TestFormatUnits:
    """Tests for base units -> display string."""

    def test_format_ether(self):
        assert format_units(1_500_000_000_000_000_000, 18) == "1.5"

    def test_format_zero(self):
        assert format_units(0, 18) == "0"

    def test_format_whole(self):
        """Whole values print without exponent."""
        assert format_units(10**20, 18) == "100"

    def test_format_smallest_unit(self):
        assert format_units(1, 18) == "0.000000000000000001"
