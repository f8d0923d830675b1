"""
MCP tool definitions for the Mazerion calculators.

The tool functions registered with FastMCP are thin wrappers; the work
happens in the module-level functions below, which take the registry
explicitly. This is the only layer that catches MazerionError: errors
become {"ok": False, ...} responses carrying the error text and nothing
else, so a failed request never returns stale metadata or warnings.
"""

import logging
from typing import Any

from fastmcp import FastMCP

from mazerion_core.conversions import convert, to_decimal
from mazerion_core.exceptions import MazerionError
from mazerion_core.matching import search_calculators, suggest_calculator_ids
from mazerion_core.models import CalcInput
from mazerion_core.registry import CalculatorRegistry, get_default_registry
from mazerion_core.validation import VALID_CATEGORIES

from mcp_mazerion.config import get_config

logger = logging.getLogger(__name__)

Params = dict[str, str | int | float | None]


def _error(exc: MazerionError) -> dict[str, Any]:
    return {"ok": False, "error_kind": type(exc).__name__, "error": str(exc)}


def _not_found(registry: CalculatorRegistry, calculator_id: str) -> dict[str, Any]:
    logger.info("Unknown calculator requested: %s", calculator_id)
    return {
        "ok": False,
        "error_kind": "NotFound",
        "error": f"No calculator registered for id: {calculator_id}",
        "suggestions": suggest_calculator_ids(registry, calculator_id),
    }


def list_calculator_menu(
    registry: CalculatorRegistry,
    category: str | None = None,
) -> dict[str, Any]:
    """Calculators grouped by category, for building menus."""
    if category is not None and category not in VALID_CATEGORIES:
        return {
            "ok": False,
            "error_kind": "ValidationError",
            "error": f"Unknown category '{category}'. Must be one of: {', '.join(VALID_CATEGORIES)}",
        }

    return {
        "ok": True,
        "count": len(registry),
        "categories": {
            group: [calc.summary() for calc in calcs]
            for group, calcs in registry.by_category().items()
            if category is None or group == category
        },
    }


def find_calculators(
    registry: CalculatorRegistry,
    query: str,
    threshold: float,
    limit: int,
) -> list[dict[str, Any]]:
    """Fuzzy search over calculator names and ids."""
    return [
        {**calc.summary(), "confidence": round(confidence, 3)}
        for calc, confidence in search_calculators(registry, query, threshold, limit)
    ]


def describe(registry: CalculatorRegistry, calculator_id: str) -> dict[str, Any]:
    calculator = registry.get(calculator_id)
    if calculator is None:
        return _not_found(registry, calculator_id)
    return {"ok": True, **calculator.summary()}


def validate_params(
    registry: CalculatorRegistry,
    calculator_id: str,
    params: Params | None,
) -> dict[str, Any]:
    """Run a calculator's pre-flight check without calculating."""
    calculator = registry.get(calculator_id)
    if calculator is None:
        return _not_found(registry, calculator_id)

    try:
        calculator.validate(CalcInput.from_mapping(params or {}))
    except MazerionError as e:
        logger.debug("Validation failed for %s: %s", calculator_id, e)
        return _error(e)
    return {"ok": True, "calculator_id": calculator_id}


def run(
    registry: CalculatorRegistry,
    calculator_id: str,
    params: Params | None,
) -> dict[str, Any]:
    """
    Run a calculator on form-style parameters.

    Args:
        registry: Where to find the calculator
        calculator_id: Registry id
        params: Parameter names to raw values

    Returns:
        {"ok": True, output, metadata, warnings, report} on success,
        {"ok": False, error_kind, error} on failure
    """
    calculator = registry.get(calculator_id)
    if calculator is None:
        return _not_found(registry, calculator_id)

    try:
        result = calculator.calculate(CalcInput.from_mapping(params or {}))
    except MazerionError as e:
        logger.debug("Calculation failed for %s: %s", calculator_id, e)
        return _error(e)

    return {
        "ok": True,
        "calculator_id": calculator_id,
        **result.to_dict(),
        "report": result.report_lines(),
    }


def convert_value(value: str, from_unit: str, to_unit: str) -> dict[str, Any]:
    """Exact decimal conversion between two units of the same dimension."""
    try:
        converted = convert(to_decimal(value), from_unit, to_unit)
    except MazerionError as e:
        return _error(e)
    return {"ok": True, "value": str(converted), "unit": to_unit.lower()}


def register_tools(mcp: FastMCP, registry: CalculatorRegistry | None = None) -> None:
    """Register all Mazerion MCP tools."""

    def _registry() -> CalculatorRegistry:
        return registry if registry is not None else get_default_registry()

    @mcp.tool()
    def list_calculators(category: str | None = None) -> dict:
        """
        List available calculators grouped by category.

        Args:
            category: Only list this category (Basic, Advanced, Brewing, Beer,
                Finishing, Mead Styles, Utilities)
        """
        return list_calculator_menu(_registry(), category)

    @mcp.tool()
    def search_calculators_by_name(query: str) -> list[dict]:
        """
        Find calculators by approximate name, e.g. "racking loss" or "brix".

        Args:
            query: What to look for
        """
        config = get_config()
        return find_calculators(
            _registry(), query, config.search_threshold, config.search_limit
        )

    @mcp.tool()
    def describe_calculator(calculator_id: str) -> dict:
        """
        Get the name, category and description of one calculator.

        Args:
            calculator_id: Calculator id, e.g. "abv"
        """
        return describe(_registry(), calculator_id)

    @mcp.tool()
    def validate_calculation(calculator_id: str, params: dict | None = None) -> dict:
        """
        Check parameters for a calculator without running it.

        Args:
            calculator_id: Calculator id
            params: Parameter names to values, e.g. {"og": "1.100", "fg": "1.010"}
        """
        return validate_params(_registry(), calculator_id, params)

    @mcp.tool()
    def run_calculation(calculator_id: str, params: dict | None = None) -> dict:
        """
        Run a calculator.

        Args:
            calculator_id: Calculator id
            params: Parameter names to values, e.g.
                {"initial_volume": "5", "loss_rate_percent": "5", "num_rackings": "3"}

        Returns the output measurement, the report rows in order, and any
        warnings; or the error message if the input was rejected.
        """
        return run(_registry(), calculator_id, params)

    @mcp.tool()
    def convert_units(value: str, from_unit: str, to_unit: str) -> dict:
        """
        Convert a value between units of the same kind.

        Args:
            value: Number to convert, as text to keep it exact
            from_unit: Source unit (l, ml, gal, qt, pt, fl_oz, g, kg, oz, lb, c, f)
            to_unit: Target unit
        """
        return convert_value(value, from_unit, to_unit)
