"""
Tests for the compounding racking-loss calculator.
"""

from decimal import Decimal

import pytest
from mazerion_core.calculators.racking_losses import RackingLossCalculator, compound
from mazerion_core.conversions import quantize
from mazerion_core.exceptions import (
    CalculationError,
    MissingInputError,
    ParseError,
    ValidationError,
)
from mazerion_core.models import CalcInput
from mazerion_core.units import Unit


def make_input(**fields):
    return CalcInput.from_mapping(fields)


@pytest.fixture
def calculator():
    return RackingLossCalculator()


class TestCompound:
    """Tests for the per-racking schedule."""

    def test_schedule_length(self):
        assert len(compound(Decimal("20"), Decimal("0.95"), 4)) == 4

    def test_matches_power(self):
        schedule = compound(Decimal("20"), Decimal("0.95"), 3)
        assert schedule == [Decimal("19.00"), Decimal("18.0500"), Decimal("17.147500")]
        assert schedule[-1] == Decimal("20") * Decimal("0.95") ** 3

    @pytest.mark.parametrize("rate", ["1", "5", "12.5", "30"])
    @pytest.mark.parametrize("rackings", [2, 3, 6])
    def test_compounding_keeps_more_than_additive(self, rate, rackings):
        initial = Decimal("20")
        r = Decimal(rate) / 100
        final = compound(initial, 1 - r, rackings)[-1]
        assert final > initial * (1 - rackings * r)


class TestRackingLossCalculator:
    """Tests for RackingLossCalculator."""

    def test_five_gallons_three_rackings(self, calculator):
        result = calculator.calculate(
            make_input(initial_volume="5", loss_rate_percent="5", num_rackings="3")
        )
        meta = dict(result.metadata)

        assert quantize(result.output.value, 2) == Decimal("21.64")
        assert result.output.unit == Unit.COUNT
        assert meta["Correct (Compounding)"] == "21.64"
        assert meta["Wrong (Additive)"] == "21.45"
        assert meta["Initial Volume"] == "5.00 gal (18.93 L)"
        assert meta["Racking 1"] == "17.98 L (5.00% lost)"
        assert result.warnings == ()

    def test_report_layout(self, calculator):
        result = calculator.calculate(
            make_input(initial_volume="5", loss_rate_percent="5", num_rackings="3")
        )
        labels = [label for label, _ in result.metadata]

        assert labels[:9] == [
            "Initial Volume",
            "Loss Per Racking",
            "Rackings",
            "Bottle Size",
            "",
            "── Volume After Each Racking ──",
            "Racking 1",
            "Racking 2",
            "Racking 3",
        ]
        assert result.metadata[4] == ("", "")
        assert labels.index("Correct (Compounding)") < labels.index("Wrong (Additive)")

    def test_litres_and_bottle_size(self, calculator):
        result = calculator.calculate(
            make_input(
                initial_volume="20",
                volume_unit="l",
                loss_rate_percent="5",
                num_rackings="3",
                bottle_size_ml="500",
            )
        )
        # 17.1475 L / 0.5 L
        assert result.output.value == Decimal("34.30")
        assert dict(result.metadata)["Initial Volume"] == "20.00 L"

    def test_high_losses_warn(self, calculator):
        result = calculator.calculate(
            make_input(initial_volume="5", loss_rate_percent="20", num_rackings="5")
        )
        assert len(result.warnings) == 3
        assert result.warnings[0].startswith("High total loss")

    def test_additive_estimate_floors_at_zero(self, calculator):
        result = calculator.calculate(
            make_input(initial_volume="5", loss_rate_percent="40", num_rackings="3")
        )
        assert dict(result.metadata)["Wrong (Additive)"] == "0.00"
        assert result.output.value > 0

    def test_zero_loss(self, calculator):
        result = calculator.calculate(
            make_input(initial_volume="20", volume_unit="l", loss_rate_percent="0", num_rackings="2")
        )
        meta = dict(result.metadata)
        assert meta["Correct (Compounding)"] == meta["Wrong (Additive)"]

    def test_missing_initial_volume(self, calculator):
        with pytest.raises(MissingInputError) as exc:
            calculator.calculate(make_input(loss_rate_percent="5", num_rackings="3"))
        assert exc.value.name == "initial_volume"

    def test_total_loss_rejected(self, calculator):
        with pytest.raises(ValidationError) as exc:
            calculator.calculate(
                make_input(initial_volume="5", loss_rate_percent="100", num_rackings="3")
            )
        assert "100%" in exc.value.message

    @pytest.mark.parametrize(
        "fields,message",
        [
            ({"initial_volume": "0"}, "Initial volume must be positive"),
            ({"loss_rate_percent": "-1"}, "Loss rate cannot be negative"),
            ({"num_rackings": "0"}, "Number of rackings must be 1-10"),
            ({"num_rackings": "11"}, "Number of rackings must be 1-10"),
            ({"bottle_size_ml": "0"}, "Bottle size must be positive"),
            ({"volume_unit": "barrel"}, "volume_unit"),
        ],
    )
    def test_range_checks(self, calculator, fields, message):
        base = {"initial_volume": "5", "loss_rate_percent": "5", "num_rackings": "3"}
        with pytest.raises(ValidationError) as exc:
            calculator.calculate(make_input(**{**base, **fields}))
        assert message in exc.value.message

    def test_unparseable_volume(self, calculator):
        with pytest.raises(ParseError):
            calculator.calculate(
                make_input(initial_volume="five", loss_rate_percent="5", num_rackings="3")
            )

    @pytest.mark.parametrize(
        "fields",
        [
            {"initial_volume": "5", "loss_rate_percent": "5", "num_rackings": "3"},
            {"initial_volume": "5", "loss_rate_percent": "100", "num_rackings": "3"},
            {"initial_volume": "x", "loss_rate_percent": "5", "num_rackings": "3"},
            {"loss_rate_percent": "5", "num_rackings": "3"},
            {"initial_volume": "5", "loss_rate_percent": "5", "num_rackings": "12"},
        ],
    )
    def test_validate_agrees_with_calculate(self, calculator, fields):
        calc_input = make_input(**fields)
        try:
            calculator.validate(calc_input)
        except Exception as e:
            with pytest.raises(type(e)):
                calculator.calculate(calc_input)
        else:
            calculator.calculate(calc_input)


class TestRackingLossMagnitudes:
    """Numbers beyond what the decimal context carries fail as library errors."""

    @pytest.mark.parametrize("field", ["initial_volume", "loss_rate_percent", "bottle_size_ml"])
    @pytest.mark.parametrize("raw", ["1e26", "1e999999", "1e-999999"])
    def test_out_of_magnitude_input(self, calculator, field, raw):
        base = {"initial_volume": "5", "loss_rate_percent": "5", "num_rackings": "3"}
        calc_input = make_input(**{**base, field: raw})
        with pytest.raises(ParseError):
            calculator.validate(calc_input)
        with pytest.raises(ParseError):
            calculator.calculate(calc_input)

    def test_separated_digits_are_not_a_racking_count(self, calculator):
        with pytest.raises(ParseError):
            calculator.calculate(
                make_input(initial_volume="5", loss_rate_percent="5", num_rackings="1_0")
            )

    def test_bottle_count_too_large_to_round(self, calculator):
        calc_input = make_input(
            initial_volume="1e15",
            loss_rate_percent="5",
            num_rackings="3",
            bottle_size_ml="1e-15",
        )
        with pytest.raises(CalculationError):
            calculator.calculate(calc_input)

    def test_largest_supported_volume(self, calculator):
        result = calculator.calculate(
            make_input(initial_volume="1e15", loss_rate_percent="5", num_rackings="3")
        )
        assert result.output.value > 0
