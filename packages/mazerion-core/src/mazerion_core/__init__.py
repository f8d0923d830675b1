"""
mazerion-core: Calculator plugin core for brewing and mead making.

Provides range-checked decimal measurements, the calculation
request/response envelope, the calculator contract and the registry
that lets callers find calculators by id.
"""

from mazerion_core.models import (
    Measurement,
    CalcInput,
    CalcResult,
)
from mazerion_core.units import (
    Unit,
    Dimension,
)
from mazerion_core.validation import (
    Category,
    VALID_CATEGORIES,
    validate_category,
)
from mazerion_core.protocols import Calculator
from mazerion_core.registry import (
    CalculatorRegistry,
    register_calculator,
    get_default_registry,
    get_calculator,
    list_calculator_ids,
    calculator_count,
)
from mazerion_core.exceptions import (
    MazerionError,
    MissingInputError,
    ParseError,
    ValidationError,
    CalculationError,
    UnitConversionError,
    DatabaseError,
    ConfigurationError,
    RegistrationError,
)

__version__ = "0.1.0"

__all__ = [
    # Models
    "Measurement",
    "CalcInput",
    "CalcResult",
    # Units
    "Unit",
    "Dimension",
    # Validation
    "Category",
    "VALID_CATEGORIES",
    "validate_category",
    # Contract and registry
    "Calculator",
    "CalculatorRegistry",
    "register_calculator",
    "get_default_registry",
    "get_calculator",
    "list_calculator_ids",
    "calculator_count",
    # Exceptions
    "MazerionError",
    "MissingInputError",
    "ParseError",
    "ValidationError",
    "CalculationError",
    "UnitConversionError",
    "DatabaseError",
    "ConfigurationError",
    "RegistrationError",
]
