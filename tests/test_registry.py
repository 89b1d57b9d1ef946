"""Tests for the unit registry."""

import threading

import pytest
from unitconvert.core.dimension import BaseDimension, Dimension
from unitconvert.core.errors import (
    DuplicateUnitError,
    InvalidDefinitionError,
    MalformedDefinitionError,
    UnknownUnitError,
)
from unitconvert.core.registry import UnitRegistry
from unitconvert.core.unit import Unit


@pytest.fixture
def registry():
    return UnitRegistry.with_builtin_units()


@pytest.fixture
def bare_registry():
    reg = UnitRegistry()
    reg.add_definition("m = [L]")
    reg.add_definition("s = [T]")
    return reg


class TestInitialize:
    def test_catalog_loaded(self, registry):
        for symbol in ("m", "ft", "cm", "yd", "s", "kg", "K", "degC", "J", "Pa"):
            assert symbol in registry

    def test_base_units_have_unit_scale(self, registry):
        for symbol in ("m", "kg", "s", "A", "K", "mol", "cd", "rad"):
            unit = registry.resolve(symbol)
            assert unit.scale_to_base == 1.0
            assert unit.offset_to_base == 0.0
            assert unit.dimension.is_base

    def test_idempotent(self, registry):
        count = len(registry)
        registry.initialize()
        assert len(registry) == count

    def test_canonical_units(self, registry):
        assert registry.canonical_unit(Dimension.of(BaseDimension.LENGTH)) == "m"
        assert registry.canonical_unit(Dimension.of(BaseDimension.MASS)) == "kg"
        assert registry.canonical_unit(Dimension(length=1, time=-1)) is None

    def test_base_expression(self, registry):
        joule = registry.resolve("J")
        assert registry.base_expression(joule.dimension) == "m^2*kg/s^2"
        assert registry.base_expression(registry.resolve("Hz").dimension) == "1/s"
        assert registry.base_expression(registry.resolve("ft").dimension) == "m"
        assert registry.base_expression(registry.resolve("percent").dimension) == "1"

    def test_independent_registries(self):
        a = UnitRegistry.with_builtin_units()
        b = UnitRegistry.with_builtin_units()
        a.add_definition("football_field = 100 yd")
        assert "football_field" in a
        assert "football_field" not in b


class TestResolve:
    def test_exact(self, registry):
        ft = registry.resolve("ft")
        assert ft.scale_to_base == pytest.approx(0.3048)

    def test_unknown(self, registry):
        with pytest.raises(UnknownUnitError) as exc:
            registry.resolve("glorp")
        assert exc.value.symbol == "glorp"
        assert "glorp" in str(exc.value)

    def test_unknown_is_lookup_error(self, registry):
        with pytest.raises(LookupError):
            registry.resolve("glorp")

    def test_resolve_is_exact_only(self, registry):
        with pytest.raises(UnknownUnitError):
            registry.resolve("kPa")

    def test_lookup_si_prefix(self, registry):
        assert registry.lookup("kPa").scale_to_base == pytest.approx(1e3)
        assert registry.lookup("Mm").scale_to_base == pytest.approx(1e6)
        assert registry.lookup("us").scale_to_base == pytest.approx(1e-6)
        assert registry.lookup("kilometer").scale_to_base == pytest.approx(1e3)

    def test_lookup_two_letter_prefix(self, registry):
        assert registry.lookup("dam").scale_to_base == pytest.approx(10.0)

    def test_lookup_prefers_exact(self, registry):
        # "min" is minutes, not milli-inches
        assert registry.lookup("min").scale_to_base == 60.0

    def test_lookup_prefix_disabled(self):
        reg = UnitRegistry.with_builtin_units(try_si_prefixes=False)
        with pytest.raises(UnknownUnitError):
            reg.lookup("kPa")

    def test_lookup_unknown_after_prefix(self, registry):
        with pytest.raises(UnknownUnitError):
            registry.lookup("kglorp")


class TestRegister:
    def test_register(self, registry):
        unit = Unit("smoot", Dimension(length=1), 1.7018)
        registry.register(unit)
        assert registry.resolve("smoot") is unit

    def test_duplicate_leaves_registry_unchanged(self, registry):
        original = registry.resolve("ft")
        count = len(registry)
        with pytest.raises(DuplicateUnitError) as exc:
            registry.register(Unit("ft", Dimension(length=1), 1.0))
        assert exc.value.symbol == "ft"
        assert registry.resolve("ft") is original
        assert len(registry) == count

    def test_duplicate_definition(self, registry):
        with pytest.raises(DuplicateUnitError):
            registry.add_definition("ft = 1 m")
        assert registry.resolve("ft").scale_to_base == pytest.approx(0.3048)

    def test_zero_scale(self, registry):
        with pytest.raises(InvalidDefinitionError):
            registry.register(Unit("nothing", Dimension(length=1), 0.0))
        assert "nothing" not in registry

    def test_infinite_scale(self, registry):
        with pytest.raises(InvalidDefinitionError):
            registry.register(Unit("huge", Dimension(length=1), float("inf")))

    def test_zero_scale_definition(self, registry):
        with pytest.raises(InvalidDefinitionError):
            registry.add_definition("nothing = 0 m")

    def test_blank_symbol(self, registry):
        with pytest.raises(InvalidDefinitionError):
            registry.register(Unit(" ", Dimension(length=1)))

    def test_define(self, registry):
        unit = registry.define("football_field", 100, "yd")
        assert unit.scale_to_base == pytest.approx(91.44)
        assert unit.dimension == Dimension(length=1)

    def test_define_dangling_reference(self, registry):
        with pytest.raises(InvalidDefinitionError) as exc:
            registry.define("glorp", 3, "blarg")
        assert isinstance(exc.value.__cause__, UnknownUnitError)
        assert "glorp" not in registry

    def test_add_definition(self, registry):
        unit = registry.add_definition("football_field = 100 yd")
        assert registry.resolve("football_field") is unit
        assert unit.scale_to_base == pytest.approx(91.44)

    def test_add_definition_malformed(self, registry):
        with pytest.raises(MalformedDefinitionError):
            registry.add_definition("football_field 100 yd")

    def test_add_definition_unknown_rhs(self, registry):
        with pytest.raises(UnknownUnitError):
            registry.add_definition("glorp = 3 blarg")

    def test_second_base_unit_for_dimension(self, bare_registry):
        with pytest.raises(InvalidDefinitionError):
            bare_registry.add_definition("metre = [L]")
        assert "metre" not in bare_registry

    def test_bare_registry(self, bare_registry):
        bare_registry.add_definition("km = 1000 m")
        bare_registry.add_definition("kph = km / (60 * 60 s)")
        kph = bare_registry.resolve("kph")
        assert kph.dimension == Dimension(length=1, time=-1)
        assert kph.scale_to_base == pytest.approx(1000 / 3600)


class TestLoadDefinitions:
    def test_comments_and_blank_lines(self, bare_registry):
        added = bare_registry.load_definitions([
            "# lengths",
            "",
            "cm = 0.01 m   # centimeter",
            "   ",
            "in = 2.54 cm",
        ])
        assert [u.symbol for u in added] == ["cm", "in"]
        assert bare_registry.resolve("in").scale_to_base == pytest.approx(0.0254)

    def test_failure_rolls_back(self, bare_registry):
        count = len(bare_registry)
        with pytest.raises(InvalidDefinitionError) as exc:
            bare_registry.load_definitions([
                "cm = 0.01 m",
                "T_dim = [THETA]",
                "bad = 1 nope",
            ])
        assert exc.value.line == 3
        assert isinstance(exc.value.__cause__, UnknownUnitError)
        assert len(bare_registry) == count
        assert "cm" not in bare_registry
        assert bare_registry.canonical_unit(Dimension(temperature=1)) is None

    def test_out_of_range_line_rolls_back(self, registry):
        count = len(registry)
        with pytest.raises(InvalidDefinitionError) as exc:
            registry.load_definitions(["smoot = 1.7018 m", "huge = km^200"])
        assert exc.value.line == 2
        assert "smoot" not in registry
        assert len(registry) == count

    def test_unexpected_exception_rolls_back(self, bare_registry, monkeypatch):
        apply = bare_registry.add_definition

        def flaky(text):
            if text.startswith("boom"):
                raise RuntimeError("disk on fire")
            return apply(text)

        monkeypatch.setattr(bare_registry, "add_definition", flaky)
        count = len(bare_registry)
        with pytest.raises(RuntimeError):
            bare_registry.load_definitions(["cm = 0.01 m", "boom = 1 m"])
        assert "cm" not in bare_registry
        assert len(bare_registry) == count

    def test_load_file(self, bare_registry, tmp_path):
        path = tmp_path / "units.txt"
        path.write_text("ft = 0.3048 m\nyd = 3 ft\n", encoding="utf-8")
        added = bare_registry.load_file(path)
        assert len(added) == 2
        assert bare_registry.resolve("yd").scale_to_base == pytest.approx(0.9144)


class TestConcurrency:
    def test_parallel_registration(self, registry):
        count = len(registry)
        errors = []

        def worker(n):
            try:
                for i in range(25):
                    registry.add_definition(f"unit_{n}_{i} = {i + 1} m")
                    registry.lookup("km")
            except Exception as e:  # surfaced below
                errors.append(e)

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        assert len(registry) == count + 8 * 25
        assert registry.resolve("unit_7_24").scale_to_base == 25.0

    def test_racing_duplicates(self, registry):
        results = []

        def worker():
            try:
                registry.add_definition("contested = 2 m")
                results.append("ok")
            except DuplicateUnitError:
                results.append("dup")

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results.count("ok") == 1
        assert results.count("dup") == 7
