import pytest

from divedeco.config import BuhlmannConfig, CeilingType
from divedeco.deco import (
    CurrentGasNotInListError,
    Deco,
    DecoCalculationError,
    DecoStage,
    DecoStageType,
    EmptyGasListError,
)
from divedeco.gas import Gas
from divedeco.model import BuhlmannModel
from divedeco.units import Depth, Time

AIR = Gas(0.21, 0.0)
EAN50 = Gas(0.5, 0.0)
EAN36 = Gas(0.36, 0.0)
OXYGEN = Gas(1.0, 0.0)


def model_default():
    return BuhlmannModel(BuhlmannConfig())


def model_gf(gf_low, gf_high):
    return BuhlmannModel(BuhlmannConfig().with_gradient_factors(gf_low, gf_high))


def first_deco_stop_depth(runtime):
    return next(
        (s.start_depth for s in runtime.deco_stages if s.stage_type is DecoStageType.DECO_STOP),
        None,
    )


def assert_stages_eq(stages, expected):
    assert len(stages) == len(expected)
    for actual, exp in zip(stages, expected):
        assert actual.stage_type == exp.stage_type
        assert actual.start_depth == exp.start_depth
        assert actual.end_depth == exp.end_depth
        assert actual.duration == exp.duration
        assert actual.gas == exp.gas


@pytest.mark.parametrize(
    "ceiling, expected",
    [(0.0, 0.0), (2.0, 3.0), (2.999, 3.0), (3.0, 3.0), (3.00001, 6.0), (12.0, 12.0)],
)
def test_ceiling_rounding(ceiling, expected):
    assert Deco().deco_stop_depth(Depth.from_meters(ceiling)) == Depth.from_meters(expected)


@pytest.mark.parametrize(
    "depth, current, mixes, expected",
    [
        (10.0, AIR, [AIR], None),
        (10.0, AIR, [AIR, EAN50], EAN50),
        (30.0, AIR, [AIR, EAN50], EAN50),
        (20.0, AIR, [AIR, EAN50, OXYGEN], EAN50),
        (5.5, EAN50, [AIR, EAN50, OXYGEN], OXYGEN),
        (30.0, AIR, [AIR, Gas(0.5, 0.2)], Gas(0.5, 0.2)),
    ],
)
def test_next_switch_gas(depth, current, mixes, expected):
    result = Deco().next_switch_gas(Depth.from_meters(depth), current, mixes, 1000)
    assert result == expected


def test_err_on_empty_gas_mixes():
    with pytest.raises(EmptyGasListError) as exc:
        Deco().calc(model_default(), [])
    assert str(exc.value) == "At least one available gas mix required"
    assert isinstance(exc.value, DecoCalculationError)


def test_err_on_gas_mixes_without_current_mix():
    model = model_default()
    model.record_travel_with_rate(Depth.from_meters(40.0), 10.0, AIR)
    with pytest.raises(CurrentGasNotInListError):
        Deco().calc(model, [EAN50, Gas(0.21, 0.35)])


def test_deco_ascent_no_deco():
    model = model_default()
    model.record(Depth.from_meters(20.0), Time.from_minutes(5.0), AIR)
    runtime = model.deco([AIR])
    assert len(runtime.deco_stages) == 1
    assert runtime.tts == Time.from_minutes(2.0)


def test_deco_single_gas():
    model = BuhlmannModel(BuhlmannConfig().with_deco_ascent_rate(9.0))
    model.record(Depth.from_meters(40.0), Time.from_minutes(20.0), AIR)
    runtime = model.deco([AIR])
    assert runtime.tts == Time.from_seconds(754.0)
    m = Depth.from_meters
    s = Time.from_seconds
    expected = [
        DecoStage(DecoStageType.ASCENT, m(40.0), m(6.0), s(226.0), AIR),
        DecoStage(DecoStageType.DECO_STOP, m(6.0), m(6.0), s(88.0), AIR),
        DecoStage(DecoStageType.ASCENT, m(6.0), m(3.0), s(20.0), AIR),
        DecoStage(DecoStageType.DECO_STOP, m(3.0), m(3.0), s(400.0), AIR),
        DecoStage(DecoStageType.ASCENT, m(3.0), m(0.0), s(20.0), AIR),
    ]
    assert_stages_eq(runtime.deco_stages, expected)


def test_deco_multi_gas():
    model = BuhlmannModel(BuhlmannConfig().with_deco_ascent_rate(9.0))
    model.record(Depth.from_meters(40.0), Time.from_minutes(20.0), AIR)
    runtime = model.deco([AIR, EAN50])
    m = Depth.from_meters
    s = Time.from_seconds
    expected = [
        DecoStage(DecoStageType.ASCENT, m(40.0), m(22.0), s(120.0), AIR),
        DecoStage(DecoStageType.GAS_SWITCH, m(22.0), m(22.0), Time.zero(), EAN50),
        DecoStage(DecoStageType.ASCENT, m(22.0), m(6.0), s(106.0), EAN50),
        DecoStage(DecoStageType.DECO_STOP, m(6.0), m(6.0), s(34.0), EAN50),
        DecoStage(DecoStageType.ASCENT, m(6.0), m(3.0), s(20.0), EAN50),
        DecoStage(DecoStageType.DECO_STOP, m(3.0), m(3.0), s(291.0), EAN50),
        DecoStage(DecoStageType.ASCENT, m(3.0), m(0.0), s(20.0), EAN50),
    ]
    assert_stages_eq(runtime.deco_stages, expected)
    assert runtime.tts == Time.from_seconds(591.0)


def test_deco_with_deco_mod_at_bottom():
    model = BuhlmannModel(BuhlmannConfig().with_deco_ascent_rate(9.0))
    model.record(Depth.from_meters(30.0), Time.from_minutes(30.0), AIR)
    runtime = model.deco([AIR, EAN36])
    m = Depth.from_meters
    s = Time.from_seconds
    expected = [
        DecoStage(DecoStageType.GAS_SWITCH, m(30.0), m(30.0), Time.zero(), EAN36),
        DecoStage(DecoStageType.ASCENT, m(30.0), m(3.0), s(180.0), EAN36),
        DecoStage(DecoStageType.DECO_STOP, m(3.0), m(3.0), s(268.0), EAN36),
        DecoStage(DecoStageType.ASCENT, m(3.0), m(0.0), s(20.0), EAN36),
    ]
    assert_stages_eq(runtime.deco_stages, expected)
    assert runtime.tts == Time.from_seconds(468.0)


def test_tts_delta():
    model = model_gf(30, 70)
    mixes = [AIR, EAN50]
    model.record(Depth.from_meters(40.0), Time.from_minutes(20.0), AIR)
    deco_1 = model.deco(mixes)
    model.record(Depth.from_meters(40.0), Time.from_minutes(5.0), AIR)
    deco_2 = model.deco(mixes)
    assert deco_1.tts_at_5 == deco_2.tts
    assert deco_1.tts_delta_at_5 == deco_2.tts - deco_1.tts


@pytest.mark.parametrize("ceiling_type", [CeilingType.ACTUAL, CeilingType.ADAPTIVE])
def test_runtime_on_missed_stop(ceiling_type):
    mixes = [AIR, EAN50]
    config = (
        BuhlmannConfig().with_ceiling_type(ceiling_type).with_gradient_factors(30, 70)
    )
    model = BuhlmannModel(config)
    model.record(Depth.from_meters(40.0), Time.from_minutes(30.0), AIR)
    model.record(Depth.from_meters(22.0), Time.zero(), AIR)
    initial_stop = first_deco_stop_depth(model.deco(mixes))

    model.record(Depth.from_meters(20.0), Time.zero(), AIR)
    between_stop = first_deco_stop_depth(model.deco(mixes))

    model.record(Depth.from_meters(15.0), Time.zero(), AIR)
    below_stop = first_deco_stop_depth(model.deco(mixes))

    assert initial_stop == between_stop
    assert initial_stop == below_stop


def test_deco_runtime_integrity():
    config = (
        BuhlmannConfig()
        .with_gradient_factors(30, 70)
        .with_ceiling_type(CeilingType.ADAPTIVE)
    )
    model = BuhlmannModel(config)
    model.record(Depth.from_meters(40.0), Time.from_minutes(20.0), AIR)
    stages = model.deco([AIR, EAN50, OXYGEN]).deco_stages
    assert len(stages) > 1
    eps = 1e-9
    for prev, nxt in zip(stages, stages[1:]):
        if nxt.stage_type is DecoStageType.DECO_STOP:
            stop_m = nxt.start_depth.as_meters()
            prev_end = prev.end_depth.as_meters()
            assert abs(stop_m - round(stop_m / 3.0) * 3.0) < eps
            assert prev_end >= stop_m - eps
            assert prev_end - stop_m < 3.0 - eps
        else:
            assert abs(nxt.start_depth.as_meters() - prev.end_depth.as_meters()) < eps
        if prev.stage_type is DecoStageType.GAS_SWITCH:
            mod = prev.gas.max_operating_depth(1.6)
            assert prev.start_depth.as_meters() <= mod.as_meters() + eps


def test_direct_calc_matches_model_deco():
    model = BuhlmannModel(BuhlmannConfig().with_deco_ascent_rate(9.0))
    model.record(Depth.from_meters(40.0), Time.from_minutes(20.0), AIR)
    runtime = Deco().calc(model.fork(), [AIR])
    assert runtime.tts == Time.from_seconds(754.0)
    assert model.dive_state().depth == Depth.from_meters(40.0)
    assert sum((s.duration for s in runtime.deco_stages), Time.zero()) == runtime.tts