"""
Range checks and advisory warnings for brewing values.

Every calculator enforces the same physical bounds through these
functions, and Measurement construction consults the same RANGES table,
so a value accepted here is exactly a value a Measurement can hold.
Bounds are inclusive.

Advisory functions never raise: they return None when the value is
unremarkable, or a message to attach to the result's warnings.
"""

from decimal import Decimal
from enum import Enum

from mazerion_core.exceptions import ValidationError
from mazerion_core.units import Unit


class Category(str, Enum):
    """Closed set of calculator categories, in menu order."""

    BASIC = "Basic"
    ADVANCED = "Advanced"
    BREWING = "Brewing"
    BEER = "Beer"
    FINISHING = "Finishing"
    MEAD_STYLES = "Mead Styles"
    UTILITIES = "Utilities"


VALID_CATEGORIES: tuple[str, ...] = tuple(c.value for c in Category)

# (label, minimum, maximum); a maximum of None means unbounded above
RANGES: dict[Unit, tuple[str, Decimal, Decimal | None]] = {
    Unit.SPECIFIC_GRAVITY: ("SG", Decimal("0.600"), Decimal("2.000")),
    Unit.BRIX: ("Brix", Decimal("0"), Decimal("70")),
    Unit.PLATO: ("Plato", Decimal("0"), Decimal("70")),
    Unit.PH: ("pH", Decimal("1.5"), Decimal("8.5")),
    Unit.CELSIUS: ("Temperature (°C)", Decimal("-5"), Decimal("100")),
    Unit.FAHRENHEIT: ("Temperature (°F)", Decimal("23"), Decimal("212")),
    Unit.PERCENT: ("Percentage", Decimal("0"), Decimal("100")),
    Unit.ABV: ("ABV", Decimal("0"), Decimal("100")),
}

NON_NEGATIVE_LABELS: dict[Unit, str] = {
    Unit.PPM: "Concentration",
    Unit.GRAMS: "Mass",
    Unit.KILOGRAMS: "Mass",
    Unit.OUNCES: "Mass",
    Unit.POUNDS: "Mass",
    Unit.LITERS: "Volume",
    Unit.MILLILITERS: "Volume",
    Unit.GALLONS: "Volume",
    Unit.QUARTS: "Volume",
    Unit.PINTS: "Volume",
    Unit.FLUID_OUNCES: "Volume",
    Unit.COUNT: "Count",
}

TYPICAL_SUGAR_MAX = Decimal("45")
HIGH_ABV = Decimal("20")
HYDROMETER_CALIBRATION_C = Decimal("20")
CALIBRATION_TOLERANCE_C = Decimal("10")


def _check_finite(label: str, value: Decimal) -> None:
    if not value.is_finite():
        raise ValidationError(f"{label} must be a finite number, got {value}")


def _check_range(unit: Unit, value: Decimal) -> None:
    label, minimum, maximum = RANGES[unit]
    _check_finite(label, value)
    if value < minimum or (maximum is not None and value > maximum):
        raise ValidationError(
            f"{label} {value} outside range {minimum} to {maximum}"
        )


def validate_sg(value: Decimal) -> None:
    """Specific gravity must lie in 0.600 to 2.000."""
    _check_range(Unit.SPECIFIC_GRAVITY, value)


def validate_brix(value: Decimal) -> None:
    """Brix must lie in 0 to 70."""
    _check_range(Unit.BRIX, value)


def validate_plato(value: Decimal) -> None:
    """Plato must lie in 0 to 70."""
    _check_range(Unit.PLATO, value)


def validate_ph(value: Decimal) -> None:
    """pH must lie in 1.5 to 8.5."""
    _check_range(Unit.PH, value)


def validate_temp_c(value: Decimal) -> None:
    """Temperature must lie in -5 to 100 °C."""
    _check_range(Unit.CELSIUS, value)


def validate_temp_f(value: Decimal) -> None:
    """Temperature must lie in 23 to 212 °F."""
    _check_range(Unit.FAHRENHEIT, value)


def validate_percent(value: Decimal) -> None:
    """Percentages must lie in 0 to 100."""
    _check_range(Unit.PERCENT, value)


def validate_non_negative(value: Decimal, label: str = "Value") -> None:
    """Quantities such as volumes and masses cannot be negative."""
    _check_finite(label, value)
    if value < 0:
        raise ValidationError(f"{label} {value} must not be negative")


def validate_unit(value: Decimal, unit: Unit) -> None:
    """
    Check a value against the bounds for its unit.

    Args:
        value: The value to check
        unit: The unit the value is expressed in

    Raises:
        ValidationError: If the value is not finite or out of range
    """
    if unit in RANGES:
        _check_range(unit, value)
    else:
        validate_non_negative(value, NON_NEGATIVE_LABELS[unit])


def validate_category(category: str) -> None:
    """
    Check that a category belongs to the closed category set.

    Raises:
        ValidationError: If the category is unknown
    """
    if category not in VALID_CATEGORIES:
        raise ValidationError(
            f"Invalid category '{category}'. "
            f"Must be one of: {', '.join(VALID_CATEGORIES)}"
        )


# Advisory warnings


def brix_warning(value: Decimal) -> str | None:
    """Brix readings above 45 are plausible but unusual."""
    if value > TYPICAL_SUGAR_MAX:
        return f"Brix {value} above typical range (0 to {TYPICAL_SUGAR_MAX})"
    return None


def plato_warning(value: Decimal) -> str | None:
    """Plato readings above 45 are plausible but unusual."""
    if value > TYPICAL_SUGAR_MAX:
        return f"Plato {value} above typical range (0 to {TYPICAL_SUGAR_MAX})"
    return None


def abv_warning(value: Decimal) -> str | None:
    """Most yeasts give out well before 20% ABV."""
    if value > HIGH_ABV:
        return f"ABV > {HIGH_ABV}% is unusually high"
    return None


def temp_c_warning(value: Decimal) -> str | None:
    """Hydrometer readings far from the 20 °C calibration point are less reliable."""
    if abs(value - HYDROMETER_CALIBRATION_C) > CALIBRATION_TOLERANCE_C:
        return (
            f"Large temperature deviation from calibration "
            f"({HYDROMETER_CALIBRATION_C}°C)"
        )
    return None
