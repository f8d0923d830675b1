"""Water needed to bring a finished batch down to a target ABV."""

from dataclasses import dataclass
from decimal import Decimal

from mazerion_core.conversions import quantize
from mazerion_core.exceptions import ValidationError
from mazerion_core.models import CalcInput, CalcResult, Measurement
from mazerion_core.protocols import Calculator
from mazerion_core.registry import register_calculator
from mazerion_core.validation import Category, validate_percent


@dataclass(frozen=True)
class DilutionInputs:
    current_volume: Decimal
    current_abv: Decimal
    target_abv: Decimal

    @property
    def water_needed(self) -> Decimal:
        return self.current_volume * (self.current_abv / self.target_abv - 1)


@register_calculator
class DilutionCalculator(Calculator):
    id = "dilution"
    name = "Dilution"
    category = Category.BASIC.value
    description = "Calculate water to add to reach a target ABV"

    def _parse(self, calc_input: CalcInput) -> DilutionInputs:
        volume = calc_input.get_decimal("current_volume")
        current_abv = calc_input.get_decimal("current_abv")
        target_abv = calc_input.get_decimal("target_abv")

        if volume <= 0:
            raise ValidationError("Volume must be positive")
        validate_percent(current_abv)
        validate_percent(target_abv)
        if target_abv <= 0:
            raise ValidationError("Target ABV must be positive")
        if current_abv <= target_abv:
            raise ValidationError("Current ABV must be greater than target ABV")

        return DilutionInputs(
            current_volume=volume,
            current_abv=current_abv,
            target_abv=target_abv,
        )

    def validate(self, calc_input: CalcInput) -> None:
        self._parse(calc_input)

    def calculate(self, calc_input: CalcInput) -> CalcResult:
        inputs = self._parse(calc_input)
        water = inputs.water_needed

        return (
            CalcResult(output=Measurement.liters(water))
            .with_meta("Current Volume", f"{quantize(inputs.current_volume, 2)} L")
            .with_meta("Current ABV", f"{quantize(inputs.current_abv, 2)}%")
            .with_meta("Target ABV", f"{quantize(inputs.target_abv, 2)}%")
            .with_meta("Water To Add", f"{quantize(water, 2)} L")
            .with_meta("Final Volume", f"{quantize(inputs.current_volume + water, 2)} L")
        )
