"""
Tests for range checks and advisory warnings.
"""

from decimal import Decimal

import pytest
from mazerion_core.exceptions import ValidationError
from mazerion_core.units import Unit
from mazerion_core.validation import (
    abv_warning,
    brix_warning,
    plato_warning,
    temp_c_warning,
    validate_brix,
    validate_category,
    validate_non_negative,
    validate_percent,
    validate_ph,
    validate_sg,
    validate_temp_c,
    validate_temp_f,
    validate_unit,
)


class TestRangeBoundaries:
    """Bounds are inclusive; one step outside fails."""

    @pytest.mark.parametrize(
        "check,low,high,below,above",
        [
            (validate_sg, "0.600", "2.000", "0.599", "2.001"),
            (validate_brix, "0", "70", "-0.01", "70.01"),
            (validate_ph, "1.5", "8.5", "1.49", "8.51"),
            (validate_temp_c, "-5", "100", "-5.1", "100.1"),
            (validate_temp_f, "23", "212", "22.9", "212.1"),
            (validate_percent, "0", "100", "-0.001", "100.001"),
        ],
    )
    def test_boundaries(self, check, low, high, below, above):
        check(Decimal(low))
        check(Decimal(high))
        with pytest.raises(ValidationError):
            check(Decimal(below))
        with pytest.raises(ValidationError):
            check(Decimal(above))

    def test_message_names_quantity_and_range(self):
        with pytest.raises(ValidationError) as exc:
            validate_sg(Decimal("2.5"))
        assert "SG 2.5" in exc.value.message
        assert "0.600 to 2.000" in exc.value.message

    def test_ph_above_neutral_range(self):
        with pytest.raises(ValidationError):
            validate_ph(Decimal("14"))

    def test_nan_rejected(self):
        with pytest.raises(ValidationError):
            validate_sg(Decimal("NaN"))

    def test_infinity_rejected(self):
        with pytest.raises(ValidationError):
            validate_non_negative(Decimal("Infinity"), "Volume")


class TestValidateUnit:
    """Tests for per-unit dispatch."""

    def test_bounded_unit(self):
        with pytest.raises(ValidationError):
            validate_unit(Decimal("0.5"), Unit.SPECIFIC_GRAVITY)

    def test_volume_non_negative(self):
        validate_unit(Decimal("0"), Unit.LITERS)
        with pytest.raises(ValidationError) as exc:
            validate_unit(Decimal("-1"), Unit.LITERS)
        assert "Volume" in exc.value.message

    def test_count_non_negative(self):
        with pytest.raises(ValidationError):
            validate_unit(Decimal("-3"), Unit.COUNT)


class TestAdvisoryWarnings:
    """Advisory checks return a message or None, never raise."""

    def test_brix_threshold(self):
        assert brix_warning(Decimal("45")) is None
        message = brix_warning(Decimal("50"))
        assert message is not None
        assert "above typical range" in message

    def test_plato_threshold(self):
        assert plato_warning(Decimal("12")) is None
        assert plato_warning(Decimal("46")) is not None

    def test_abv(self):
        assert abv_warning(Decimal("14")) is None
        assert abv_warning(Decimal("21")) == "ABV > 20% is unusually high"

    def test_temperature_deviation(self):
        assert temp_c_warning(Decimal("20")) is None
        assert temp_c_warning(Decimal("30")) is None
        assert temp_c_warning(Decimal("31")) is not None
        assert temp_c_warning(Decimal("9")) is not None


class TestCategory:
    """Tests for the closed category set."""

    def test_valid(self):
        validate_category("Mead Styles")

    def test_invalid(self):
        with pytest.raises(ValidationError) as exc:
            validate_category("Misc")
        assert "Utilities" in exc.value.message
