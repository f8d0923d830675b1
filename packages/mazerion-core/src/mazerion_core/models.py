"""
Value and envelope models for calculations.

All models use Pydantic v2. A Measurement is range-checked whenever it is
built, so an out-of-range value cannot be represented. CalcInput is the
request a caller assembles from loosely-typed form fields; CalcResult is
the immutable response a calculator hands back.
"""

import re
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from mazerion_core.conversions import (
    Number,
    check_magnitude,
    convert,
    quantize,
    to_decimal,
)
from mazerion_core.exceptions import MissingInputError, ParseError, ValidationError
from mazerion_core.units import (
    FRACTIONAL_COUNT_PRECISION,
    MASS_UNITS,
    VOLUME_UNITS,
    Unit,
)
from mazerion_core.validation import validate_unit

# Plain ASCII numerals only: no digit separators, no inf/nan
DECIMAL_PATTERN = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)
INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)


class Measurement(BaseModel):
    """
    A decimal value tagged with its unit.

    Use the smart constructors (Measurement.sg, Measurement.brix, ...);
    every construction path checks the value against the bounds for
    its unit and raises ValidationError when it falls outside them.
    """

    model_config = ConfigDict(frozen=True)

    value: Decimal = Field(..., description="Exact decimal value")
    unit: Unit = Field(..., description="Unit the value is expressed in")

    @model_validator(mode="after")
    def _check_range(self) -> "Measurement":
        validate_unit(self.value, self.unit)
        return self

    @classmethod
    def of(cls, value: Number, unit: Unit) -> "Measurement":
        """Build a measurement in any unit, applying that unit's bounds."""
        value = to_decimal(value)
        # Checked here as well so non-finite input surfaces as our ValidationError
        validate_unit(value, unit)
        return cls(value=value, unit=unit)

    @classmethod
    def sg(cls, value: Number) -> "Measurement":
        """Specific gravity, 0.600 to 2.000."""
        return cls.of(value, Unit.SPECIFIC_GRAVITY)

    @classmethod
    def brix(cls, value: Number) -> "Measurement":
        """Degrees Brix, 0 to 70."""
        return cls.of(value, Unit.BRIX)

    @classmethod
    def plato(cls, value: Number) -> "Measurement":
        """Degrees Plato, 0 to 70."""
        return cls.of(value, Unit.PLATO)

    @classmethod
    def ph(cls, value: Number) -> "Measurement":
        """pH, 1.5 to 8.5."""
        return cls.of(value, Unit.PH)

    @classmethod
    def celsius(cls, value: Number) -> "Measurement":
        """Temperature in Celsius, -5 to 100."""
        return cls.of(value, Unit.CELSIUS)

    @classmethod
    def fahrenheit(cls, value: Number) -> "Measurement":
        """Temperature in Fahrenheit, 23 to 212."""
        return cls.of(value, Unit.FAHRENHEIT)

    @classmethod
    def percent(cls, value: Number) -> "Measurement":
        return cls.of(value, Unit.PERCENT)

    @classmethod
    def abv(cls, value: Number) -> "Measurement":
        return cls.of(value, Unit.ABV)

    @classmethod
    def ppm(cls, value: Number) -> "Measurement":
        return cls.of(value, Unit.PPM)

    @classmethod
    def volume(cls, value: Number, unit: Unit = Unit.LITERS) -> "Measurement":
        """A non-negative volume in any volume unit."""
        if unit not in VOLUME_UNITS:
            raise ValidationError(f"{unit.value} is not a volume unit")
        return cls.of(value, unit)

    @classmethod
    def mass(cls, value: Number, unit: Unit = Unit.GRAMS) -> "Measurement":
        """A non-negative mass in any mass unit."""
        if unit not in MASS_UNITS:
            raise ValidationError(f"{unit.value} is not a mass unit")
        return cls.of(value, unit)

    @classmethod
    def liters(cls, value: Number) -> "Measurement":
        return cls.volume(value, Unit.LITERS)

    @classmethod
    def grams(cls, value: Number) -> "Measurement":
        return cls.mass(value, Unit.GRAMS)

    @classmethod
    def count(cls, value: Number) -> "Measurement":
        """A non-negative count of discrete things (bottles, cases, cells)."""
        return cls.of(value, Unit.COUNT)

    def to(self, unit: Unit) -> "Measurement":
        """
        Convert to another unit of the same dimension.

        Raises:
            UnitConversionError: If the units measure different things
            ValidationError: If the converted value is out of range
        """
        return Measurement.of(convert(self.value, self.unit, unit), unit)

    def formatted(self) -> str:
        """
        Value rounded to the unit's display precision, with its symbol.

        Fractional counts keep FRACTIONAL_COUNT_PRECISION places so 21.64
        bottles is not shown as 22.
        """
        places = self.unit.precision
        if self.unit == Unit.COUNT and self.value != self.value.to_integral_value():
            places = FRACTIONAL_COUNT_PRECISION
        return f"{quantize(self.value, places)} {self.unit.symbol}"

    def __str__(self) -> str:
        return f"{self.value} {self.unit.symbol}"


class CalcInput(BaseModel):
    """
    Parameters and measurements for one calculation request.

    Built with chained add_param / add_measurement calls. Lookups return
    the first entry that matches; duplicates are kept.
    """

    params: list[tuple[str, str]] = Field(
        default_factory=list,
        description="(name, raw value) pairs as entered by the user",
    )
    measurements: list[Measurement] = Field(
        default_factory=list,
        description="Pre-validated typed values",
    )

    @classmethod
    def from_mapping(cls, fields: dict[str, Any]) -> "CalcInput":
        """Build an input from form fields; None values are skipped."""
        calc_input = cls()
        for name, value in fields.items():
            if value is not None:
                calc_input.add_param(name, value)
        return calc_input

    def add_param(self, name: str, value: Any) -> "CalcInput":
        self.params.append((name, str(value)))
        return self

    def add_measurement(self, measurement: Measurement) -> "CalcInput":
        self.measurements.append(measurement)
        return self

    @property
    def is_empty(self) -> bool:
        return not self.params and not self.measurements

    def get_param(self, name: str) -> str | None:
        """Raw text of the first parameter called `name`, or None."""
        for key, value in self.params:
            if key == name:
                return value
        return None

    def require_param(self, name: str) -> str:
        """
        Raw text of a required parameter.

        Raises:
            MissingInputError: If absent or blank
        """
        raw = self.get_param(name)
        if raw is None or not raw.strip():
            raise MissingInputError(name)
        return raw

    def get_decimal(self, name: str, default: Number | None = None) -> Decimal:
        """
        Parse a parameter as an exact decimal.

        Args:
            name: Parameter name
            default: Value used when the parameter is absent or blank

        Returns:
            The parsed value

        Raises:
            MissingInputError: If absent and no default is given
            ParseError: If present but not a plain number, or outside
                the supported magnitude
        """
        raw = self.get_param(name)
        if raw is None or not raw.strip():
            if default is None:
                raise MissingInputError(name)
            return to_decimal(default)

        text = raw.strip()
        if not DECIMAL_PATTERN.fullmatch(text):
            raise ParseError(f"Invalid {name}: {raw!r}")
        return check_magnitude(Decimal(text), name)

    def get_int(self, name: str, default: int | None = None) -> int:
        """
        Parse a parameter as a whole number.

        Raises:
            MissingInputError: If absent and no default is given
            ParseError: If present but not a whole number
        """
        raw = self.get_param(name)
        if raw is None or not raw.strip():
            if default is None:
                raise MissingInputError(name)
            return default

        text = raw.strip()
        if not INTEGER_PATTERN.fullmatch(text):
            raise ParseError(f"Invalid {name}: {raw!r} is not a whole number")
        return int(text)

    def get_measurement(self, unit: Unit) -> Measurement:
        """
        First measurement in the given unit.

        Raises:
            MissingInputError: If there is none
        """
        for measurement in self.measurements:
            if measurement.unit == unit:
                return measurement
        raise MissingInputError(f"No measurement with unit {unit.symbol}")

    def find_measurement(self, unit: Unit) -> Measurement | None:
        for measurement in self.measurements:
            if measurement.unit == unit:
                return measurement
        return None


class CalcResult(BaseModel):
    """
    Outcome of a successful calculation.

    Metadata rows are rendered verbatim and in order as a report. A row
    with an empty label and value is a spacer; a row with an empty value
    is a section header. The with_* methods return a new result.
    """

    model_config = ConfigDict(frozen=True)

    output: Measurement = Field(..., description="Primary result")
    metadata: tuple[tuple[str, str], ...] = Field(
        default=(),
        description="Ordered (label, value) report rows",
    )
    warnings: tuple[str, ...] = Field(
        default=(),
        description="Advisory messages, in the order they were raised",
    )

    def with_meta(self, label: str, value: Any) -> "CalcResult":
        return self.model_copy(
            update={"metadata": (*self.metadata, (label, str(value)))}
        )

    def with_spacer(self) -> "CalcResult":
        return self.with_meta("", "")

    def with_warning(self, message: str) -> "CalcResult":
        return self.model_copy(update={"warnings": (*self.warnings, message)})

    def with_optional_warning(self, message: str | None) -> "CalcResult":
        """Attach the message from an advisory check, if it produced one."""
        if message is None:
            return self
        return self.with_warning(message)

    def report_lines(self) -> list[str]:
        """Metadata as printable lines, preserving order and spacer rows."""
        lines = []
        for label, value in self.metadata:
            if not value:
                lines.append(label)
            else:
                lines.append(f"{label}: {value}")
        return lines

    def to_dict(self) -> dict[str, Any]:
        """JSON-safe representation; decimals are kept as strings."""
        return {
            "output": {
                "value": str(self.output.value),
                "unit": self.output.unit.value,
                "symbol": self.output.unit.symbol,
                "formatted": self.output.formatted(),
            },
            "metadata": [[label, value] for label, value in self.metadata],
            "warnings": list(self.warnings),
        }
