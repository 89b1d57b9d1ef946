"""Tests for dimension vectors and unit arithmetic."""

import pytest
from unitconvert.core.dimension import (
    BaseDimension,
    Composition,
    Dimension,
    DIMENSIONLESS,
    compose,
    equals,
)
from unitconvert.core.errors import OffsetUnitError
from unitconvert.core.unit import Unit

LENGTH = Dimension.of(BaseDimension.LENGTH)
TIME = Dimension.of(BaseDimension.TIME)
MASS = Dimension.of(BaseDimension.MASS)


class TestDimension:
    def test_of_base(self):
        assert LENGTH == Dimension(length=1)
        assert Dimension.of(BaseDimension.ANGLE).angle == 1

    def test_compose_add(self):
        assert compose(LENGTH, TIME, Composition.ADD) == Dimension(length=1, time=1)

    def test_compose_subtract(self):
        assert compose(LENGTH, TIME, Composition.SUBTRACT) == Dimension(length=1, time=-1)

    def test_operators_match_compose(self):
        assert LENGTH * TIME == compose(LENGTH, TIME, Composition.ADD)
        assert LENGTH / TIME == compose(LENGTH, TIME, Composition.SUBTRACT)

    def test_power(self):
        assert (LENGTH / TIME) ** 2 == Dimension(length=2, time=-2)
        assert LENGTH ** 0 == DIMENSIONLESS

    def test_equals(self):
        assert equals(MASS * LENGTH / TIME ** 2, Dimension(mass=1, length=1, time=-2))
        assert not equals(LENGTH, TIME)

    def test_division_by_self_is_dimensionless(self):
        assert (LENGTH / LENGTH).is_dimensionless

    def test_is_base(self):
        assert LENGTH.is_base
        assert not (LENGTH * LENGTH).is_base
        assert not (LENGTH / TIME).is_base
        assert not DIMENSIONLESS.is_base

    def test_str(self):
        assert str(LENGTH / TIME) == "[L T^-1]"
        assert str(DIMENSIONLESS) == "[1]"

    def test_hashable(self):
        table = {LENGTH: "m"}
        assert table[Dimension(length=1)] == "m"

    def test_tuple_round_trip(self):
        dim = Dimension(length=2, mass=1, time=-3, current=-1)
        assert Dimension.from_tuple(dim.as_tuple()) == dim
        assert len(dim.as_tuple()) == len(BaseDimension)


class TestUnitArithmetic:
    meter = Unit("m", LENGTH)
    second = Unit("s", TIME)
    foot = Unit("ft", LENGTH, 0.3048)
    celsius = Unit("degC", Dimension(temperature=1), 1.0, 273.15)

    def test_multiply(self):
        area = self.foot * self.foot
        assert area.dimension == LENGTH ** 2
        assert area.scale_to_base == pytest.approx(0.3048 ** 2)
        assert area.symbol == "ft*ft"

    def test_divide(self):
        speed = self.foot / self.second
        assert speed.dimension == LENGTH / TIME
        assert speed.scale_to_base == pytest.approx(0.3048)

    def test_power(self):
        assert (self.foot ** 3).scale_to_base == pytest.approx(0.3048 ** 3)
        assert self.foot ** 1 is self.foot

    def test_offset_unit_cannot_multiply(self):
        with pytest.raises(OffsetUnitError):
            self.celsius * self.meter
        with pytest.raises(OffsetUnitError):
            self.meter / self.celsius
        with pytest.raises(OffsetUnitError):
            self.celsius ** 2

    def test_offset_unit_scaled_by_number(self):
        scaled = self.celsius * Unit.number(2.0)
        assert scaled.scale_to_base == 2.0
        assert scaled.offset_to_base == 273.15

    def test_shifted(self):
        kelvin = Unit("K", Dimension(temperature=1))
        celsius = kelvin.shifted(-273.15)
        assert celsius.to_base(0.0) == pytest.approx(273.15)
        assert celsius.from_base(373.15) == pytest.approx(100.0)

    def test_validity(self):
        assert self.foot.is_valid
        assert not Unit("zero", LENGTH, 0.0).is_valid
        assert not Unit("inf", LENGTH, float("inf")).is_valid
        assert not Unit("nan", LENGTH, 1.0, float("nan")).is_valid
