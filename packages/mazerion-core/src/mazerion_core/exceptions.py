"""
Exception types for mazerion-core.

All exceptions inherit from MazerionError for easy catching of any
library-related errors. Calculators raise only the calculation kinds
(MissingInputError, ParseError, ValidationError, CalculationError);
DatabaseError is reserved for persistence collaborators.
"""


class MazerionError(Exception):
    """Base exception for all mazerion-core errors."""

    kind = "Error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


class MissingInputError(MazerionError):
    """Raised when a required parameter or measurement is absent."""

    kind = "Missing input"

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name


class ValidationError(MazerionError):
    """Raised when a value is parseable but outside its sane range."""

    kind = "Validation error"


class CalculationError(MazerionError):
    """Raised when a calculation cannot be carried out."""

    kind = "Calculation error"


class ParseError(CalculationError):
    """Raised when a parameter is present but not parseable as a number."""

    kind = "Parse error"


class UnitConversionError(CalculationError):
    """Raised when a unit conversion fails."""

    kind = "Unit conversion error"


class DatabaseError(MazerionError):
    """Raised by persistence collaborators."""

    kind = "Database error"


class ConfigurationError(MazerionError):
    """Raised when configuration is invalid or missing."""

    kind = "Config error"


class RegistrationError(MazerionError):
    """Raised when a calculator cannot be registered (duplicate id, bad category)."""

    kind = "Registration error"
