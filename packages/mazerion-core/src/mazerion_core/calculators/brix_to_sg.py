"""
Brix to specific gravity conversion.

Uses the Brew Your Own / Brewer's Friend polynomial:
SG = Brix / (258.6 - (Brix / 258.2) × 227.1) + 1
"""

from decimal import Decimal

from mazerion_core.conversions import quantize
from mazerion_core.models import CalcInput, CalcResult, Measurement
from mazerion_core.protocols import Calculator
from mazerion_core.registry import register_calculator
from mazerion_core.units import Unit
from mazerion_core.validation import Category, brix_warning, validate_brix


def brix_to_sg(brix: Decimal) -> Decimal:
    denominator = Decimal("258.6") - (brix / Decimal("258.2")) * Decimal("227.1")
    return brix / denominator + 1


@register_calculator
class BrixToSgCalculator(Calculator):
    id = "brix_to_sg"
    name = "Brix to SG"
    category = Category.BASIC.value
    description = "Convert degrees Brix to specific gravity (Brew Your Own formula)"

    def _parse(self, calc_input: CalcInput) -> Decimal:
        measurement = calc_input.find_measurement(Unit.BRIX)
        if measurement is not None:
            return measurement.value
        brix = calc_input.get_decimal("brix")
        validate_brix(brix)
        return brix

    def validate(self, calc_input: CalcInput) -> None:
        self._parse(calc_input)

    def calculate(self, calc_input: CalcInput) -> CalcResult:
        brix = self._parse(calc_input)
        sg = brix_to_sg(brix)

        result = CalcResult(output=Measurement.sg(sg))
        result = result.with_optional_warning(brix_warning(brix))

        return (
            result.with_meta("Brix", f"{quantize(brix, 2)}°Bx")
            .with_meta("Specific Gravity", quantize(sg, 4))
            .with_meta("Formula", "Brew Your Own (accurate)")
            .with_meta("Calculation", f"{brix} / (258.6 - ({brix} / 258.2) × 227.1) + 1")
        )
