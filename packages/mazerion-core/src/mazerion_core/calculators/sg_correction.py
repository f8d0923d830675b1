"""Hydrometer temperature correction (calibrated at 20°C)."""

from dataclasses import dataclass
from decimal import Decimal

from mazerion_core.conversions import fahrenheit_to_celsius, quantize
from mazerion_core.exceptions import MissingInputError
from mazerion_core.models import CalcInput, CalcResult, Measurement
from mazerion_core.protocols import Calculator
from mazerion_core.registry import register_calculator
from mazerion_core.units import Unit
from mazerion_core.validation import (
    HYDROMETER_CALIBRATION_C,
    Category,
    temp_c_warning,
    validate_sg,
    validate_temp_c,
    validate_temp_f,
)

CORRECTION_PER_DEGREE = Decimal("0.00013")


@dataclass(frozen=True)
class SgCorrectionInputs:
    sg: Decimal
    temp_c: Decimal

    @property
    def correction(self) -> Decimal:
        return CORRECTION_PER_DEGREE * (self.temp_c - HYDROMETER_CALIBRATION_C)

    @property
    def corrected_sg(self) -> Decimal:
        return self.sg + self.correction


@register_calculator
class SgCorrectionCalculator(Calculator):
    id = "sg_correction"
    name = "SG Temperature Correction"
    category = Category.BASIC.value
    description = "Correct specific gravity reading for temperature (calibrated at 20°C)"

    def _read_temp_c(self, calc_input: CalcInput) -> Decimal:
        celsius = calc_input.find_measurement(Unit.CELSIUS)
        if celsius is not None:
            return celsius.value
        fahrenheit = calc_input.find_measurement(Unit.FAHRENHEIT)
        if fahrenheit is not None:
            return fahrenheit_to_celsius(fahrenheit.value)

        if calc_input.get_param("temp_c") is not None:
            temp_c = calc_input.get_decimal("temp_c")
            validate_temp_c(temp_c)
            return temp_c
        if calc_input.get_param("temp_f") is not None:
            temp_f = calc_input.get_decimal("temp_f")
            validate_temp_f(temp_f)
            return fahrenheit_to_celsius(temp_f)
        raise MissingInputError("temp_c")

    def _parse(self, calc_input: CalcInput) -> SgCorrectionInputs:
        measurement = calc_input.find_measurement(Unit.SPECIFIC_GRAVITY)
        if measurement is not None:
            sg = measurement.value
        else:
            sg = calc_input.get_decimal("sg")
            validate_sg(sg)

        inputs = SgCorrectionInputs(sg=sg, temp_c=self._read_temp_c(calc_input))
        validate_sg(inputs.corrected_sg)
        return inputs

    def validate(self, calc_input: CalcInput) -> None:
        self._parse(calc_input)

    def calculate(self, calc_input: CalcInput) -> CalcResult:
        inputs = self._parse(calc_input)

        result = CalcResult(output=Measurement.sg(inputs.corrected_sg))
        result = result.with_optional_warning(temp_c_warning(inputs.temp_c))

        return (
            result.with_meta("Measured SG", quantize(inputs.sg, 4))
            .with_meta("Temperature", f"{quantize(inputs.temp_c, 1)} °C")
            .with_meta("Correction", f"{quantize(inputs.correction, 4):+}")
            .with_meta("Calibration", f"{HYDROMETER_CALIBRATION_C}°C")
        )
