"""Bottle and case counts for a finished volume."""

from decimal import ROUND_CEILING, Decimal

from mazerion_core.conversions import convert_volume, quantize
from mazerion_core.exceptions import ValidationError
from mazerion_core.models import CalcInput, CalcResult, Measurement
from mazerion_core.protocols import Calculator
from mazerion_core.registry import register_calculator
from mazerion_core.units import Unit
from mazerion_core.validation import Category

# (key, size in mL, description)
BOTTLE_SIZES: list[tuple[str, Decimal, str]] = [
    ("12oz", Decimal("354.88"), "12 oz / 355 mL"),
    ("375ml", Decimal("375"), "375 mL / half-bottle"),
    ("500ml", Decimal("500"), "500 mL"),
    ("750ml", Decimal("750"), "750 mL / standard wine"),
    ("1L", Decimal("1000"), "1 L / magnum"),
    ("1.5L", Decimal("1500"), "1.5 L"),
    ("3L", Decimal("3000"), "3 L / double magnum"),
    ("5L", Decimal("5000"), "5 L / jeroboam"),
    ("6L", Decimal("6000"), "6 L / imperial"),
]

# (bottle key, bottles per case)
CASE_SIZES: list[tuple[str, int]] = [
    ("12oz", 24),
    ("375ml", 12),
    ("750ml", 12),
    ("1L", 12),
]

VOLUME_UNIT_NAMES: dict[str, Unit] = {
    "l": Unit.LITERS,
    "gal": Unit.GALLONS,
}


@register_calculator
class GallonsToBottlesCalculator(Calculator):
    id = "gallons_to_bottles"
    name = "Gallons to Bottles"
    category = Category.UTILITIES.value
    description = "Calculate bottle and case counts from a finished volume"

    def _parse(self, calc_input: CalcInput) -> Decimal:
        """Volume in litres."""
        volume = calc_input.get_decimal("volume")
        unit_name = (calc_input.get_param("volume_unit") or "").strip().lower() or "l"
        if unit_name not in VOLUME_UNIT_NAMES:
            raise ValidationError(
                f"volume_unit must be one of: {', '.join(VOLUME_UNIT_NAMES)}"
            )
        if volume <= 0:
            raise ValidationError("Volume must be positive")
        return convert_volume(volume, VOLUME_UNIT_NAMES[unit_name], Unit.LITERS)

    def validate(self, calc_input: CalcInput) -> None:
        self._parse(calc_input)

    def calculate(self, calc_input: CalcInput) -> CalcResult:
        volume_l = self._parse(calc_input)
        volume_ml = volume_l * 1000

        counts = {
            key: quantize(volume_ml / size_ml, 0)
            for key, size_ml, _ in BOTTLE_SIZES
        }

        result = CalcResult(output=Measurement.count(counts["750ml"]))
        for key, _, label in BOTTLE_SIZES:
            result = result.with_meta(f"Bottles {key}", f"{counts[key]} bottles ({label})")

        result = result.with_spacer()
        for key, per_case in CASE_SIZES:
            cases = (counts[key] / per_case).to_integral_value(rounding=ROUND_CEILING)
            result = result.with_meta(f"Cases {key}", f"{cases} cases ({per_case} × {key})")

        gallons = convert_volume(volume_l, Unit.LITERS, Unit.GALLONS)
        quarts = convert_volume(volume_l, Unit.LITERS, Unit.QUARTS)
        fluid_ounces = convert_volume(volume_l, Unit.LITERS, Unit.FLUID_OUNCES)
        return (
            result.with_spacer()
            .with_meta("Volume (gal)", f"{quantize(gallons, 2)} gal")
            .with_meta("Volume (L)", f"{quantize(volume_l, 2)} L")
            .with_meta("Volume (qt)", f"{quantize(quarts, 2)} qt")
            .with_meta("Volume (fl oz)", f"{quantize(fluid_ounces, 1)} fl oz")
        )
