"""
Abstract contract for calculator implementations.

A calculator is a named, pluggable strategy for one brewing formula.
Callers never import concrete calculator classes; they look them up by
id in a CalculatorRegistry and talk to them only through this contract.
"""

from abc import ABC, abstractmethod
from typing import ClassVar

from mazerion_core.exceptions import MissingInputError
from mazerion_core.models import CalcInput, CalcResult


class Calculator(ABC):
    """
    Base class for all calculators.

    Subclasses set the descriptive class attributes and implement
    calculate(). The id is the registry key and a stable external
    reference, so it must never change once published.

    Implemented by: everything in mazerion_core.calculators
    """

    id: ClassVar[str]
    name: ClassVar[str]
    category: ClassVar[str]
    description: ClassVar[str]

    @abstractmethod
    def calculate(self, calc_input: CalcInput) -> CalcResult:
        """
        Run the calculation.

        Args:
            calc_input: Parameters and measurements for this request

        Returns:
            The result envelope

        Raises:
            MissingInputError: A required parameter is absent
            ParseError: A parameter is present but not a number
            ValidationError: A value is outside its sane range
            CalculationError: The formula cannot be evaluated
        """
        ...

    def validate(self, calc_input: CalcInput) -> None:
        """
        Cheap pre-flight check a caller may run before calculate().

        The default only rejects an empty input. Calculators that parse
        their input into a typed structure should override this to run
        that parse, so validate() reports everything calculate() would.
        """
        if calc_input.is_empty:
            raise MissingInputError("No measurements or parameters provided")

    def summary(self) -> dict[str, str]:
        """Descriptive fields for menus and listings."""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "description": self.description,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self.id!r})"
