"""
Calculator registry - maps calculator ids to calculator instances.

Calculator modules mark their class with @register_calculator, which
records it in the module-level CATALOGUE when the module is imported.
The catalogue holds classes only. A CalculatorRegistry is built from it
once at startup (get_default_registry() is the composition root) and is
read-only from then on, so lookups from several threads need no locking.

Duplicate ids are programming errors and raise RegistrationError; an
existing entry is never overwritten.
"""

import logging
from collections.abc import Iterator
from functools import lru_cache

from mazerion_core.exceptions import RegistrationError, ValidationError
from mazerion_core.protocols import Calculator
from mazerion_core.validation import VALID_CATEGORIES, validate_category

logger = logging.getLogger(__name__)

CATALOGUE: dict[str, type[Calculator]] = {}


def register_calculator(cls: type[Calculator]) -> type[Calculator]:
    """
    Class decorator recording a calculator in the catalogue.

    Raises:
        RegistrationError: If the class is not a Calculator, has no id,
            or another class already claimed its id
    """
    if not (isinstance(cls, type) and issubclass(cls, Calculator)):
        raise RegistrationError(f"{cls!r} is not a Calculator subclass")

    calc_id = getattr(cls, "id", None)
    if not calc_id:
        raise RegistrationError(f"{cls.__name__} does not define an id")

    existing = CATALOGUE.get(calc_id)
    if existing is not None and existing is not cls:
        raise RegistrationError(
            f"Calculator id '{calc_id}' already registered by {existing.__name__}"
        )

    CATALOGUE[calc_id] = cls
    return cls


class CalculatorRegistry:
    """
    Lookup table from calculator id to calculator instance.

    Populate it with register() (or from_catalogue()) before handing it
    out; it is never modified afterwards.
    """

    def __init__(self) -> None:
        self._calculators: dict[str, Calculator] = {}

    @classmethod
    def from_catalogue(
        cls,
        catalogue: dict[str, type[Calculator]] | None = None,
    ) -> "CalculatorRegistry":
        """
        Instantiate every catalogued calculator once.

        Args:
            catalogue: Classes to register (defaults to CATALOGUE)

        Returns:
            A populated registry
        """
        registry = cls()
        for calc_cls in (CATALOGUE if catalogue is None else catalogue).values():
            registry.register(calc_cls())
        return registry

    def register(self, calculator: Calculator) -> None:
        """
        Add a calculator.

        Raises:
            RegistrationError: On a duplicate id or an unknown category
        """
        if calculator.id in self._calculators:
            raise RegistrationError(
                f"Duplicate calculator id '{calculator.id}' "
                f"({type(self._calculators[calculator.id]).__name__} and "
                f"{type(calculator).__name__})"
            )
        try:
            validate_category(calculator.category)
        except ValidationError as e:
            raise RegistrationError(f"{calculator.id}: {e.message}") from e

        self._calculators[calculator.id] = calculator
        logger.debug("Registered calculator %s (%s)", calculator.id, calculator.category)

    def get(self, calc_id: str) -> Calculator | None:
        """Calculator registered under `calc_id`, or None."""
        return self._calculators.get(calc_id)

    def require(self, calc_id: str) -> Calculator:
        """
        Calculator registered under `calc_id`.

        Raises:
            KeyError: If nothing is registered under that id
        """
        calculator = self.get(calc_id)
        if calculator is None:
            raise KeyError(
                f"No calculator registered for id: {calc_id}. "
                f"Available: {self.ids()}"
            )
        return calculator

    def ids(self) -> list[str]:
        """All registered ids, sorted."""
        return sorted(self._calculators)

    def categories(self) -> list[str]:
        """Categories that have at least one calculator, in menu order."""
        present = {c.category for c in self._calculators.values()}
        return [c for c in VALID_CATEGORIES if c in present]

    def by_category(self) -> dict[str, list[Calculator]]:
        """Calculators grouped by category, each group sorted by name."""
        grouped: dict[str, list[Calculator]] = {}
        for category in self.categories():
            grouped[category] = sorted(
                (c for c in self._calculators.values() if c.category == category),
                key=lambda c: c.name,
            )
        return grouped

    def summaries(self, category: str | None = None) -> list[dict[str, str]]:
        """Menu entries, optionally restricted to one category."""
        return [
            calc.summary()
            for group, calcs in self.by_category().items()
            if category is None or group == category
            for calc in calcs
        ]

    def __contains__(self, calc_id: object) -> bool:
        return calc_id in self._calculators

    def __len__(self) -> int:
        return len(self._calculators)

    def __iter__(self) -> Iterator[Calculator]:
        return iter(self._calculators.values())


@lru_cache(maxsize=1)
def get_default_registry() -> CalculatorRegistry:
    """
    The process-wide registry of built-in calculators.

    Built on first use from the catalogue, after importing the built-in
    calculator modules; the same instance is returned afterwards.
    """
    import mazerion_core.calculators  # noqa: F401

    registry = CalculatorRegistry.from_catalogue()
    logger.info("Calculator registry ready with %d calculators", len(registry))
    return registry


def get_calculator(calc_id: str) -> Calculator | None:
    """Look up a built-in calculator by id."""
    return get_default_registry().get(calc_id)


def list_calculator_ids() -> list[str]:
    """List all built-in calculator ids."""
    return get_default_registry().ids()


def calculator_count() -> int:
    """Number of built-in calculators."""
    return len(get_default_registry())
