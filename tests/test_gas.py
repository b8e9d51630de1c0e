import math

import pytest

from divedeco.gas import Gas, PartialPressures
from divedeco.units import Depth


def test_valid_gas_air():
    air = Gas(0.21, 0.0)
    assert air.o2 == 0.21
    assert air.n2 == 0.79
    assert air.he == 0.0


def test_valid_gas_tmx():
    tmx = Gas(0.18, 0.35)
    assert tmx.o2 == 0.18
    assert tmx.he == 0.35
    assert tmx.n2 == 0.47


def test_air_constructor():
    assert Gas.air() == Gas(0.21, 0.0)


@pytest.mark.parametrize("o2, he", [(1.1, 0.0), (-3.0, 0.0), (0.5, 0.51), (0.2, -0.1)])
def test_invalid_gas(o2, he):
    with pytest.raises(ValueError):
        Gas(o2, he)


def test_partial_pressures_air():
    air = Gas(0.21, 0.0)
    assert air.partial_pressures(Depth.from_meters(10.0), 1000) == PartialPressures(
        o2=0.42, n2=1.58, he=0.0
    )


def test_partial_pressures_tmx():
    tmx = Gas(0.21, 0.35)
    assert tmx.partial_pressures(Depth.from_meters(10.0), 1000) == PartialPressures(
        o2=0.42, he=0.70, n2=0.88
    )


def test_inspired_partial_pressures():
    air = Gas(0.21, 0.0)
    assert air.inspired_partial_pressures(
        Depth.from_meters(10.0), 1000
    ) == PartialPressures(o2=0.406833, n2=1.530467, he=0.0)


def test_inspired_lower_than_ambient():
    gas = Gas(0.32, 0.0)
    depth = Depth.from_meters(20.0)
    inspired = gas.inspired_partial_pressures(depth, 1013)
    ambient = gas.partial_pressures(depth, 1013)
    assert inspired.o2 < ambient.o2
    assert inspired.n2 < ambient.n2


def test_gas_pressures_compound_at_one_bar():
    gas = Gas(0.21, 0.35)
    pressures = gas.gas_pressures_compound(1.0)
    assert pressures == PartialPressures(o2=gas.o2, n2=gas.n2, he=gas.he)


@pytest.mark.parametrize(
    "o2, he, max_ppo2, expected_mod",
    [
        (0.21, 0.0, 1.4, 56.66666666666666),
        (0.50, 0.0, 1.6, 22.0),
        (0.21, 0.35, 1.4, 56.66666666666666),
        (0.0, 0.0, 1.4, math.inf),
    ],
)
def test_mod(o2, he, max_ppo2, expected_mod):
    assert Gas(o2, he).max_operating_depth(max_ppo2) == Depth.from_meters(expected_mod)


@pytest.mark.parametrize(
    "depth, o2, he, expected_end",
    [
        (60.0, 0.21, 0.40, 32.0),
        (0.0, 0.21, 0.40, 0.0),
        (40.0, 0.21, 0.0, 40.0),
    ],
)
def test_end(depth, o2, he, expected_end):
    tmx = Gas(o2, he)
    assert tmx.equivalent_narcotic_depth(Depth.from_meters(depth)) == Depth.from_meters(
        expected_end
    )


def test_id():
    assert Gas(0.32, 0.0).id() == "32/0"
    assert Gas(0.21, 0.35).id() == "21/35"


def test_str_matches_id():
    tmx = Gas(0.21, 0.35)
    assert str(tmx) == tmx.id()


def test_gas_equality_and_hash():
    a = Gas(0.5, 0.0)
    b = Gas(0.5, 0.0)
    assert a == b
    assert hash(a) == hash(b)
    assert a != Gas.air()
    assert len({a, b, Gas.air()}) == 2


def test_fractions_sum_to_one():
    gas = Gas(0.18, 0.45)
    assert math.isclose(gas.o2 + gas.he + gas.n2, 1.0)