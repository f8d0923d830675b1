"""ABV calculator from original and final gravity."""

from dataclasses import dataclass
from decimal import Decimal

from mazerion_core.conversions import quantize
from mazerion_core.exceptions import ValidationError
from mazerion_core.models import CalcInput, CalcResult, Measurement
from mazerion_core.protocols import Calculator
from mazerion_core.registry import register_calculator
from mazerion_core.validation import Category, abv_warning, validate_sg

ABV_FACTOR = Decimal("131.25")


@dataclass(frozen=True)
class AbvInputs:
    og: Decimal
    fg: Decimal

    @property
    def abv(self) -> Decimal:
        return (self.og - self.fg) * ABV_FACTOR


@register_calculator
class AbvCalculator(Calculator):
    """Standard (OG - FG) × 131.25 estimate."""

    id = "abv"
    name = "ABV Calculator"
    category = Category.BASIC.value
    description = "Calculate alcohol by volume from original and final specific gravity"

    def _parse(self, calc_input: CalcInput) -> AbvInputs:
        og = calc_input.get_decimal("og")
        fg = calc_input.get_decimal("fg")
        validate_sg(og)
        validate_sg(fg)
        if og < fg:
            raise ValidationError("OG must be >= FG")

        inputs = AbvInputs(og=og, fg=fg)
        if inputs.abv > 100:
            raise ValidationError("Gravity drop implies more than 100% ABV")
        return inputs

    def validate(self, calc_input: CalcInput) -> None:
        self._parse(calc_input)

    def calculate(self, calc_input: CalcInput) -> CalcResult:
        inputs = self._parse(calc_input)
        abv = inputs.abv

        result = CalcResult(output=Measurement.abv(abv))
        result = result.with_optional_warning(abv_warning(abv))

        return (
            result.with_meta("OG", quantize(inputs.og, 4))
            .with_meta("FG", quantize(inputs.fg, 4))
            .with_meta("ABV", f"{quantize(abv, 2)}%")
            .with_meta("Formula", "Standard ABV = (OG - FG) × 131.25")
        )
