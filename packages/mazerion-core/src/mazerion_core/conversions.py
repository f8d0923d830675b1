"""
Decimal unit conversions for brewing measurements.

All arithmetic stays in Decimal so chained conversions do not accumulate
floating-point error. Internal base units:
- Mass: grams
- Volume: litres
- Temperature: Celsius
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, Overflow

from mazerion_core.exceptions import CalculationError, ParseError, UnitConversionError
from mazerion_core.units import Dimension, Unit

Number = Decimal | int | float | str

MASS_TO_GRAMS: dict[Unit, Decimal] = {
    Unit.KILOGRAMS: Decimal("1000"),
    Unit.GRAMS: Decimal("1"),
    Unit.POUNDS: Decimal("453.59237"),
    Unit.OUNCES: Decimal("28.349523125"),
}

VOLUME_TO_LITRES: dict[Unit, Decimal] = {
    Unit.LITERS: Decimal("1"),
    Unit.MILLILITERS: Decimal("0.001"),
    Unit.GALLONS: Decimal("3.785411784"),
    Unit.QUARTS: Decimal("0.946352946"),
    Unit.PINTS: Decimal("0.473176473"),
    Unit.FLUID_OUNCES: Decimal("0.0295735295625"),
}


# Parsed input may span 1e-15 to 1e15 (decimal exponent); beyond that the
# products of a calculation outgrow the 28-digit decimal context
MAX_INPUT_EXPONENT = 15


def check_magnitude(value: Decimal, label: str) -> Decimal:
    """
    Refuse finite, non-zero input too large or too small to calculate with.

    Raises:
        ParseError: If the decimal exponent is outside ±MAX_INPUT_EXPONENT
    """
    if value.is_finite() and value and abs(value.adjusted()) > MAX_INPUT_EXPONENT:
        raise ParseError(
            f"Invalid {label}: {value} is outside the supported magnitude "
            f"(1e-{MAX_INPUT_EXPONENT} to 1e{MAX_INPUT_EXPONENT})"
        )
    return value


def to_decimal(value: Number) -> Decimal:
    """
    Coerce a caller-supplied number to Decimal without float drift.

    Floats go through their shortest repr, so 1.05 becomes Decimal("1.05")
    rather than the binary expansion. Decimals pass through untouched;
    anything else is held to MAX_INPUT_EXPONENT.

    Raises:
        ParseError: If the value is not a number or is out of magnitude
    """
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ParseError(f"Invalid number: {value!r}")
    if isinstance(value, int):
        return check_magnitude(Decimal(value), "number")
    if isinstance(value, float):
        return check_magnitude(Decimal(repr(value)), "number")
    try:
        parsed = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ParseError(f"Invalid number: {value!r}") from e
    return check_magnitude(parsed, "number")


def quantize(value: Decimal, places: int) -> Decimal:
    """
    Round half up to a fixed number of decimal places.

    Raises:
        CalculationError: If the result needs more digits than the context carries
    """
    try:
        return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    except (InvalidOperation, Overflow) as e:
        raise CalculationError(
            f"{value} is too large to round to {places} decimal places"
        ) from e


def _coerce_unit(unit: Unit | str) -> Unit:
    if isinstance(unit, Unit):
        return unit
    try:
        return Unit(unit.lower())
    except ValueError as e:
        raise UnitConversionError(f"Unknown unit: {unit}") from e


def convert_mass(value: Number, from_unit: Unit | str, to_unit: Unit | str) -> Decimal:
    """
    Convert between mass units.

    Args:
        value: The value to convert
        from_unit: Source unit
        to_unit: Target unit

    Returns:
        Converted value

    Raises:
        UnitConversionError: If either unit is not a mass unit
    """
    from_unit = _coerce_unit(from_unit)
    to_unit = _coerce_unit(to_unit)
    for unit in (from_unit, to_unit):
        if unit not in MASS_TO_GRAMS:
            raise UnitConversionError(f"Not a mass unit: {unit.value}")

    grams = to_decimal(value) * MASS_TO_GRAMS[from_unit]
    return grams / MASS_TO_GRAMS[to_unit]


def convert_volume(value: Number, from_unit: Unit | str, to_unit: Unit | str) -> Decimal:
    """
    Convert between volume units.

    Args:
        value: The value to convert
        from_unit: Source unit
        to_unit: Target unit

    Returns:
        Converted value

    Raises:
        UnitConversionError: If either unit is not a volume unit
    """
    from_unit = _coerce_unit(from_unit)
    to_unit = _coerce_unit(to_unit)
    for unit in (from_unit, to_unit):
        if unit not in VOLUME_TO_LITRES:
            raise UnitConversionError(f"Not a volume unit: {unit.value}")

    litres = to_decimal(value) * VOLUME_TO_LITRES[from_unit]
    return litres / VOLUME_TO_LITRES[to_unit]


def convert_temperature(
    value: Number,
    from_unit: Unit | str,
    to_unit: Unit | str,
) -> Decimal:
    """
    Convert between Celsius and Fahrenheit.

    Raises:
        UnitConversionError: If either unit is not a temperature unit
    """
    from_unit = _coerce_unit(from_unit)
    to_unit = _coerce_unit(to_unit)
    for unit in (from_unit, to_unit):
        if unit.dimension is not Dimension.TEMPERATURE:
            raise UnitConversionError(f"Not a temperature unit: {unit.value}")

    value = to_decimal(value)
    if from_unit == to_unit:
        return value
    if from_unit == Unit.FAHRENHEIT:
        return fahrenheit_to_celsius(value)
    return celsius_to_fahrenheit(value)


def convert(value: Number, from_unit: Unit | str, to_unit: Unit | str) -> Decimal:
    """
    Convert a value between any two units of the same dimension.

    Raises:
        UnitConversionError: If the units are unknown or of different dimensions
    """
    from_unit = _coerce_unit(from_unit)
    to_unit = _coerce_unit(to_unit)
    if from_unit.dimension is not to_unit.dimension:
        raise UnitConversionError(
            f"Cannot convert {from_unit.dimension.value} ({from_unit.value}) "
            f"to {to_unit.dimension.value} ({to_unit.value})"
        )
    if from_unit == to_unit:
        return to_decimal(value)

    dimension = from_unit.dimension
    if dimension is Dimension.MASS:
        return convert_mass(value, from_unit, to_unit)
    if dimension is Dimension.VOLUME:
        return convert_volume(value, from_unit, to_unit)
    if dimension is Dimension.TEMPERATURE:
        return convert_temperature(value, from_unit, to_unit)
    raise UnitConversionError(f"No conversion between {from_unit.value} and {to_unit.value}")


def gallons_to_liters(gal: Number) -> Decimal:
    """Convert US gallons to litres."""
    return convert_volume(gal, Unit.GALLONS, Unit.LITERS)


def liters_to_gallons(litres: Number) -> Decimal:
    """Convert litres to US gallons."""
    return convert_volume(litres, Unit.LITERS, Unit.GALLONS)


def fahrenheit_to_celsius(f: Number) -> Decimal:
    """Convert Fahrenheit to Celsius."""
    return (to_decimal(f) - 32) * 5 / 9


def celsius_to_fahrenheit(c: Number) -> Decimal:
    """Convert Celsius to Fahrenheit."""
    return to_decimal(c) * 9 / 5 + 32


def ounces_to_grams(oz: Number) -> Decimal:
    """Convert ounces to grams."""
    return convert_mass(oz, Unit.OUNCES, Unit.GRAMS)


def grams_to_ounces(g: Number) -> Decimal:
    """Convert grams to ounces."""
    return convert_mass(g, Unit.GRAMS, Unit.OUNCES)


# Unit-system normalisation for callers that only know "metric or not"
def normalize_volume_to_liters(value: Number, is_metric: bool) -> Decimal:
    """Litres pass through; anything else is taken as US gallons."""
    return to_decimal(value) if is_metric else gallons_to_liters(value)


def normalize_temp_to_celsius(value: Number, is_metric: bool) -> Decimal:
    """Celsius passes through; anything else is taken as Fahrenheit."""
    return to_decimal(value) if is_metric else fahrenheit_to_celsius(value)


def normalize_weight_to_grams(value: Number, is_metric: bool) -> Decimal:
    """Grams pass through; anything else is taken as ounces."""
    return to_decimal(value) if is_metric else ounces_to_grams(value)


def display_volume(litres: Decimal, is_metric: bool) -> tuple[Decimal, str]:
    """Express a litre value in the caller's preferred unit system."""
    if is_metric:
        return litres, Unit.LITERS.symbol
    return liters_to_gallons(litres), Unit.GALLONS.symbol
