"""
Units of measurement for brewing calculations.

Every Measurement carries one of these units. Each unit knows its display
symbol, the number of decimal places it is rendered with, and the
physical dimension it belongs to (conversions never cross dimensions).
"""

from enum import Enum


class Dimension(str, Enum):
    """Physical quantity a unit measures."""

    GRAVITY = "gravity"
    SUGAR = "sugar"
    ACIDITY = "acidity"
    TEMPERATURE = "temperature"
    RATIO = "ratio"
    CONCENTRATION = "concentration"
    MASS = "mass"
    VOLUME = "volume"
    COUNT = "count"


class Unit(str, Enum):
    """Supported units."""

    SPECIFIC_GRAVITY = "sg"
    PH = "ph"
    BRIX = "brix"
    PLATO = "plato"
    CELSIUS = "c"
    FAHRENHEIT = "f"
    PERCENT = "percent"
    ABV = "abv"
    PPM = "ppm"
    GRAMS = "g"
    KILOGRAMS = "kg"
    OUNCES = "oz"
    POUNDS = "lb"
    LITERS = "l"
    MILLILITERS = "ml"
    GALLONS = "gal"
    QUARTS = "qt"
    PINTS = "pt"
    FLUID_OUNCES = "fl_oz"
    COUNT = "count"

    @property
    def symbol(self) -> str:
        """Display symbol, e.g. "°Bx"."""
        return UNIT_SYMBOLS[self]

    @property
    def precision(self) -> int:
        """Decimal places used when rendering a value in this unit."""
        return UNIT_PRECISION[self]

    @property
    def dimension(self) -> Dimension:
        """The physical dimension this unit belongs to."""
        return UNIT_DIMENSIONS[self]

    def __str__(self) -> str:
        return self.symbol


UNIT_SYMBOLS: dict[Unit, str] = {
    Unit.SPECIFIC_GRAVITY: "SG",
    Unit.PH: "pH",
    Unit.BRIX: "°Bx",
    Unit.PLATO: "°P",
    Unit.CELSIUS: "°C",
    Unit.FAHRENHEIT: "°F",
    Unit.PERCENT: "%",
    Unit.ABV: "% ABV",
    Unit.PPM: "ppm",
    Unit.GRAMS: "g",
    Unit.KILOGRAMS: "kg",
    Unit.OUNCES: "oz",
    Unit.POUNDS: "lb",
    Unit.LITERS: "L",
    Unit.MILLILITERS: "mL",
    Unit.GALLONS: "gal",
    Unit.QUARTS: "qt",
    Unit.PINTS: "pt",
    Unit.FLUID_OUNCES: "fl oz",
    Unit.COUNT: "count",
}

UNIT_PRECISION: dict[Unit, int] = {
    Unit.SPECIFIC_GRAVITY: 4,
    Unit.PH: 3,
    Unit.BRIX: 2,
    Unit.PLATO: 2,
    Unit.CELSIUS: 1,
    Unit.FAHRENHEIT: 1,
    Unit.PERCENT: 2,
    Unit.ABV: 2,
    Unit.PPM: 1,
    Unit.GRAMS: 2,
    Unit.KILOGRAMS: 2,
    Unit.OUNCES: 2,
    Unit.POUNDS: 2,
    Unit.LITERS: 2,
    Unit.MILLILITERS: 2,
    Unit.GALLONS: 2,
    Unit.QUARTS: 2,
    Unit.PINTS: 2,
    Unit.FLUID_OUNCES: 2,
    Unit.COUNT: 0,
}

# Display places for counts that are not whole, e.g. bottles left after losses
FRACTIONAL_COUNT_PRECISION = 2

UNIT_DIMENSIONS: dict[Unit, Dimension] = {
    Unit.SPECIFIC_GRAVITY: Dimension.GRAVITY,
    Unit.PH: Dimension.ACIDITY,
    Unit.BRIX: Dimension.SUGAR,
    Unit.PLATO: Dimension.SUGAR,
    Unit.CELSIUS: Dimension.TEMPERATURE,
    Unit.FAHRENHEIT: Dimension.TEMPERATURE,
    Unit.PERCENT: Dimension.RATIO,
    Unit.ABV: Dimension.RATIO,
    Unit.PPM: Dimension.CONCENTRATION,
    Unit.GRAMS: Dimension.MASS,
    Unit.KILOGRAMS: Dimension.MASS,
    Unit.OUNCES: Dimension.MASS,
    Unit.POUNDS: Dimension.MASS,
    Unit.LITERS: Dimension.VOLUME,
    Unit.MILLILITERS: Dimension.VOLUME,
    Unit.GALLONS: Dimension.VOLUME,
    Unit.QUARTS: Dimension.VOLUME,
    Unit.PINTS: Dimension.VOLUME,
    Unit.FLUID_OUNCES: Dimension.VOLUME,
    Unit.COUNT: Dimension.COUNT,
}

VOLUME_UNITS = frozenset(u for u, d in UNIT_DIMENSIONS.items() if d is Dimension.VOLUME)
MASS_UNITS = frozenset(u for u, d in UNIT_DIMENSIONS.items() if d is Dimension.MASS)
