"""
Fuzzy lookup of calculators by user-typed names.

Uses RapidFuzz so "rackng loss" or "brix sg" still find the right
calculator, with a small alias table for the phrases brewers actually use.
"""

from collections.abc import Callable
from typing import TypeVar

from rapidfuzz import fuzz, process

from mazerion_core.protocols import Calculator
from mazerion_core.registry import CalculatorRegistry

T = TypeVar("T")


def match_string(
    query: str,
    candidates: list[str],
    threshold: float = 0.7,
    limit: int = 5,
) -> list[tuple[str, float]]:
    """
    Match a query string against candidates using fuzzy matching.

    Uses token_sort_ratio, which tolerates word order ("sg to brix" vs
    "brix to sg").

    Args:
        query: The string to search for
        candidates: List of strings to match against
        threshold: Minimum match score (0.0 to 1.0)
        limit: Maximum number of results to return

    Returns:
        List of (match, confidence) tuples above threshold, best first
    """
    if not candidates:
        return []

    if not query or not query.strip():
        return []

    results = process.extract(
        query,
        candidates,
        scorer=fuzz.token_sort_ratio,
        processor=str.lower,
        limit=limit,
    )

    return [
        (match, score / 100)
        for match, score, _ in results
        if score / 100 >= threshold
    ]


def match_objects(
    query: str,
    candidates: list[T],
    key: Callable[[T], str],
    threshold: float = 0.7,
    limit: int = 5,
) -> list[tuple[T, float]]:
    """
    Match a query string against objects using a key function.

    Args:
        query: The string to search for
        candidates: Objects to match against
        key: Extracts the string to match from each object
        threshold: Minimum match score (0.0 to 1.0)
        limit: Maximum number of results to return

    Returns:
        List of (object, confidence) tuples above threshold
    """
    if not candidates:
        return []

    if not query or not query.strip():
        return []

    string_to_objs: dict[str, list[T]] = {}
    for obj in candidates:
        string_to_objs.setdefault(key(obj), []).append(obj)

    results: list[tuple[T, float]] = []
    for match_str, confidence in match_string(
        query, list(string_to_objs), threshold, limit
    ):
        for obj in string_to_objs[match_str]:
            results.append((obj, confidence))
            if len(results) >= limit:
                return results

    return results


# Everyday phrases mapped to calculator ids
CALCULATOR_ALIASES: dict[str, str] = {
    "alcohol": "abv",
    "alcohol by volume": "abv",
    "og fg": "abv",
    "refractometer brix": "brix_to_sg",
    "temperature correction": "sg_correction",
    "hydrometer temperature": "sg_correction",
    "water to add": "dilution",
    "lower abv": "dilution",
    "lees loss": "racking_losses",
    "racking": "racking_losses",
    "bottle count": "gallons_to_bottles",
    "how many bottles": "gallons_to_bottles",
}


def search_calculators(
    registry: CalculatorRegistry,
    query: str,
    threshold: float = 0.6,
    limit: int = 5,
) -> list[tuple[Calculator, float]]:
    """
    Find calculators whose name, id or alias resembles the query.

    Exact ids and exact aliases score 1.0 and come first.

    Args:
        registry: Where to look
        query: What the user typed
        threshold: Minimum match score (0.0 to 1.0)
        limit: Maximum number of results

    Returns:
        (calculator, confidence) tuples, best first, each calculator once
    """
    if not query or not query.strip():
        return []

    needle = query.strip().lower()
    best: dict[str, tuple[Calculator, float]] = {}

    def offer(calc: Calculator | None, score: float) -> None:
        if calc is None:
            return
        if calc.id not in best or best[calc.id][1] < score:
            best[calc.id] = (calc, score)

    offer(registry.get(needle), 1.0)
    offer(registry.get(CALCULATOR_ALIASES.get(needle, "")), 1.0)

    calculators = list(registry)
    for calc, score in match_objects(
        query, calculators, lambda c: c.name, threshold, limit
    ):
        offer(calc, score)
    for calc, score in match_objects(
        query, calculators, lambda c: c.id.replace("_", " "), threshold, limit
    ):
        offer(calc, score)
    for alias, score in match_string(query, list(CALCULATOR_ALIASES), threshold, limit):
        offer(registry.get(CALCULATOR_ALIASES[alias]), score)

    ranked = sorted(best.values(), key=lambda pair: (-pair[1], pair[0].id))
    return ranked[:limit]


def suggest_calculator_ids(
    registry: CalculatorRegistry,
    query: str,
    limit: int = 3,
) -> list[str]:
    """
    Suggest ids for a mistyped calculator id.

    Uses a low threshold since this feeds "did you mean" hints.
    """
    return [calc.id for calc, _ in search_calculators(registry, query, 0.4, limit)]
