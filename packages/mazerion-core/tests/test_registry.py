"""
Tests for the calculator registry and catalogue.
"""

import pytest
from mazerion_core import registry as registry_module
from mazerion_core.calculators import RackingLossCalculator
from mazerion_core.exceptions import MissingInputError, RegistrationError
from mazerion_core.models import CalcInput, CalcResult, Measurement
from mazerion_core.protocols import Calculator
from mazerion_core.registry import (
    CalculatorRegistry,
    calculator_count,
    get_calculator,
    get_default_registry,
    list_calculator_ids,
    register_calculator,
)

BUILTIN_IDS = {
    "abv",
    "brix_to_sg",
    "dilution",
    "gallons_to_bottles",
    "racking_losses",
    "sg_correction",
}


class CountCalculator(Calculator):
    id = "count_params"
    name = "Count Parameters"
    category = "Utilities"
    description = "Counts the parameters it was given"

    def calculate(self, calc_input):
        return CalcResult(output=Measurement.count(len(calc_input.params)))


class AnotherCountCalculator(CountCalculator):
    name = "Another Counter"


class AlphaCalculator(CountCalculator):
    id = "alpha"
    name = "Alpha"
    category = "Basic"


class BadCategoryCalculator(CountCalculator):
    id = "bad_category"
    category = "Misc"


class TestCalculatorContract:
    """Tests for Calculator defaults."""

    def test_default_validate_rejects_empty(self):
        with pytest.raises(MissingInputError):
            CountCalculator().validate(CalcInput())

    def test_default_validate_accepts_params(self):
        CountCalculator().validate(CalcInput().add_param("x", "1"))

    def test_summary(self):
        assert CountCalculator().summary() == {
            "id": "count_params",
            "name": "Count Parameters",
            "category": "Utilities",
            "description": "Counts the parameters it was given",
        }


class TestCalculatorRegistry:
    """Tests for CalculatorRegistry."""

    @pytest.fixture
    def registry(self):
        registry = CalculatorRegistry()
        registry.register(CountCalculator())
        registry.register(AlphaCalculator())
        return registry

    def test_get(self, registry):
        assert registry.get("alpha").name == "Alpha"
        assert registry.get("missing") is None

    def test_require(self, registry):
        assert registry.require("count_params").id == "count_params"
        with pytest.raises(KeyError) as exc:
            registry.require("missing")
        assert "alpha" in str(exc.value)

    def test_duplicate_id_raises(self, registry):
        with pytest.raises(RegistrationError):
            registry.register(AnotherCountCalculator())
        assert registry.get("count_params").name == "Count Parameters"

    def test_unknown_category_raises(self, registry):
        with pytest.raises(RegistrationError):
            registry.register(BadCategoryCalculator())
        assert "bad_category" not in registry

    def test_ids_sorted(self, registry):
        assert registry.ids() == ["alpha", "count_params"]

    def test_categories_in_menu_order(self, registry):
        assert registry.categories() == ["Basic", "Utilities"]

    def test_by_category(self, registry):
        grouped = registry.by_category()
        assert [c.id for c in grouped["Basic"]] == ["alpha"]
        assert [c.id for c in grouped["Utilities"]] == ["count_params"]

    def test_summaries_filter(self, registry):
        assert [s["id"] for s in registry.summaries("Basic")] == ["alpha"]
        assert len(registry.summaries()) == 2

    def test_dunders(self, registry):
        assert "alpha" in registry
        assert len(registry) == 2
        assert {c.id for c in registry} == {"alpha", "count_params"}

    def test_from_catalogue(self):
        registry = CalculatorRegistry.from_catalogue({"alpha": AlphaCalculator})
        assert registry.ids() == ["alpha"]


class TestRegisterCalculator:
    """Tests for the @register_calculator decorator."""

    @pytest.fixture(autouse=True)
    def empty_catalogue(self, monkeypatch):
        catalogue = {}
        monkeypatch.setattr(registry_module, "CATALOGUE", catalogue)
        return catalogue

    def test_records_class(self, empty_catalogue):
        assert register_calculator(CountCalculator) is CountCalculator
        assert empty_catalogue == {"count_params": CountCalculator}

    def test_same_class_twice_is_harmless(self, empty_catalogue):
        register_calculator(CountCalculator)
        register_calculator(CountCalculator)
        assert len(empty_catalogue) == 1

    def test_id_collision_raises(self, empty_catalogue):
        register_calculator(CountCalculator)
        with pytest.raises(RegistrationError):
            register_calculator(AnotherCountCalculator)
        assert empty_catalogue["count_params"] is CountCalculator

    def test_not_a_calculator(self):
        with pytest.raises(RegistrationError):
            register_calculator(dict)

    def test_missing_id(self):
        class Nameless(Calculator):
            name = "Nameless"
            category = "Basic"
            description = ""

            def calculate(self, calc_input):
                raise NotImplementedError

        with pytest.raises(RegistrationError):
            register_calculator(Nameless)


class TestDefaultRegistry:
    """Tests for the built-in calculator set."""

    def test_cached(self):
        assert get_default_registry() is get_default_registry()

    def test_builtins_present(self):
        assert BUILTIN_IDS <= set(list_calculator_ids())
        assert calculator_count() == len(list_calculator_ids())

    def test_every_id_resolves_to_itself(self):
        registry = get_default_registry()
        for calc_id in registry.ids():
            assert registry.require(calc_id).id == calc_id

    def test_get_calculator(self):
        assert isinstance(get_calculator("racking_losses"), RackingLossCalculator)
        assert get_calculator("nope") is None

    def test_categories_are_valid(self):
        registry = get_default_registry()
        assert set(registry.categories()) == {"Basic", "Utilities"}
