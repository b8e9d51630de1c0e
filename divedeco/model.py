"""Buhlmann ZH-L16C decompression model with gradient factors."""

from __future__ import annotations

import copy
import math
from dataclasses import dataclass, field, replace
from typing import Iterable

from .compartment import ZHL_16C_N2_16A_HE_VALUES, Compartment, Supersaturation
from .config import BuhlmannConfig, CeilingType
from .deco import Deco, DecoRuntime
from .gas import Gas
from .ox_tox import OxTox, RecordData
from .units import Depth, Time

NDL_CUT_OFF_MINS = 99


@dataclass
class DiveState:
    """Snapshot of the dive: depth, elapsed time, current gas and oxygen exposure."""

    depth: Depth
    time: Time
    gas: Gas
    ox_tox: OxTox


@dataclass
class _ModelState:
    depth: Depth = field(default_factory=Depth.zero)
    time: Time = field(default_factory=Time.zero)
    gas: Gas = field(default_factory=Gas.air)
    gf_low_depth: Depth | None = None
    ox_tox: OxTox = field(default_factory=OxTox)


def _saturating_u8(value: float) -> int:
    """Truncate a float into the 0-255 range, NaN becoming 0."""
    if math.isnan(value) or value <= 0.0:
        return 0
    if value >= 255.0:
        return 255
    return int(value)


def _float_div(numerator: float, denominator: float) -> float:
    """Division following IEEE rules for a zero denominator."""
    if denominator == 0.0:
        if numerator == 0.0 or math.isnan(numerator):
            return math.nan
        sign = math.copysign(1.0, numerator) * math.copysign(1.0, denominator)
        return math.copysign(math.inf, sign)
    return numerator / denominator


class BuhlmannModel:
    """Tissue loading model tracking a dive and deriving NDL, ceiling and deco."""

    def __init__(self, config: BuhlmannConfig | None = None) -> None:
        config = BuhlmannConfig() if config is None else config
        config.validate()
        self._config = config
        self._state = _ModelState()
        self._sim = False
        self._compartments = [
            Compartment(no, params, config)
            for no, params in enumerate(ZHL_16C_N2_16A_HE_VALUES, start=1)
        ]

    @property
    def config(self) -> BuhlmannConfig:
        return self._config

    @property
    def is_sim(self) -> bool:
        """Whether this model is a simulation fork of another one."""
        return self._sim

    def fork(self) -> BuhlmannModel:
        """Independent copy of the model flagged as a simulation."""
        forked = copy.deepcopy(self)
        forked._sim = True
        return forked

    def record(self, depth: Depth, time: Time, gas: Gas) -> None:
        """Record a segment held at a constant depth."""
        self._validate_depth(depth)
        self._state.depth = depth
        self._state.gas = gas
        self._state.time = self._state.time + time
        self._recalculate(RecordData(depth, time, gas))

    def record_travel(self, target_depth: Depth, time: Time, gas: Gas) -> None:
        """Record a linear ascent or descent in one-second steps."""
        self._validate_depth(target_depth)
        self._state.gas = gas
        steps = time.as_seconds()
        step_count = 0 if math.isnan(steps) else max(int(steps), 0)
        if step_count:
            distance = target_depth - self._state.depth
            step = Depth.from_meters(distance.as_meters() / time.as_seconds())
            current_depth = self._state.depth
            one_second = Time.from_seconds(1.0)
            for _ in range(step_count):
                self._state.time = self._state.time + one_second
                current_depth = current_depth + step
                self._recalculate(RecordData(current_depth, one_second, gas))
        self._state.depth = target_depth

    def record_travel_with_rate(
        self, target_depth: Depth, rate: float, gas: Gas
    ) -> None:
        """Record a linear ascent or descent at a rate in meters per minute."""
        self._validate_depth(target_depth)
        distance = abs((target_depth - self._state.depth).as_meters())
        self.record_travel(target_depth, Time.from_seconds(distance / rate * 60.0), gas)

    def ndl(self) -> Time:
        """No-decompression limit in whole minutes, capped at 99."""
        if self.in_deco():
            return Time.zero()
        sim_model = self.fork()
        interval = Time.from_minutes(1.0)
        for minute in range(NDL_CUT_OFF_MINS):
            sim_model.record(self._state.depth, interval, self._state.gas)
            if sim_model.in_deco():
                return interval * minute
        return Time.from_minutes(NDL_CUT_OFF_MINS)

    def ceiling(self) -> Depth:
        """Current decompression ceiling."""
        ceiling_type = CeilingType.ACTUAL if self._sim else self._config.ceiling_type
        if ceiling_type is CeilingType.ACTUAL:
            ceiling = self._leading_comp().ceiling()
        else:
            ceiling = self._adaptive_ceiling()
        if self._config.round_ceiling:
            ceiling = Depth.from_meters(math.ceil(ceiling.as_meters()))
        return ceiling

    def _adaptive_ceiling(self) -> Depth:
        sim_model = self.fork()
        sim_gas = sim_model.dive_state().gas
        calculated = sim_model.ceiling()
        while True:
            sim_depth = sim_model.dive_state().depth
            if math.isnan(sim_depth.as_meters()):
                raise ArithmeticError("Simulation depth incomparable to surface")
            if sim_depth <= Depth.zero() or sim_depth <= calculated:
                return calculated
            sim_model.record_travel_with_rate(
                calculated, self._config.deco_ascent_rate, sim_gas
            )
            calculated = sim_model.ceiling()

    def deco(self, gas_mixes: Iterable[Gas]) -> DecoRuntime:
        """Decompression runtime to the surface using the given gas mixes."""
        return Deco().calc(self.fork(), gas_mixes)

    def dive_state(self) -> DiveState:
        state = self._state
        return DiveState(
            depth=state.depth,
            time=state.time,
            gas=state.gas,
            ox_tox=replace(state.ox_tox),
        )

    def cns(self) -> float:
        """Central nervous system oxygen toxicity, in percent."""
        return self._state.ox_tox.cns

    def otu(self) -> float:
        """Pulmonary oxygen toxicity units."""
        return self._state.ox_tox.otu

    def in_deco(self) -> bool:
        """Whether a direct ascent to the surface is no longer allowed."""
        if self._config.ceiling_type is CeilingType.ACTUAL:
            return self.ceiling() > Depth.zero()
        runtime = self.deco([self._state.gas])
        return len(runtime.deco_stages) > 1

    def supersaturation(self) -> Supersaturation:
        """Highest GF99 and surface GF over all compartments."""
        gf_99 = 0.0
        gf_surf = 0.0
        for comp in self._compartments:
            current = comp.supersaturation(self._config.surface_pressure, self._state.depth)
            gf_99 = max(gf_99, current.gf_99) if current.gf_99 > gf_99 else gf_99
            gf_surf = current.gf_surf if current.gf_surf > gf_surf else gf_surf
        return Supersaturation(gf_99=gf_99, gf_surf=gf_surf)

    def tissues(self) -> list[Compartment]:
        """Copies of the tissue compartments."""
        return copy.deepcopy(self._compartments)

    def update_config(self, new_config: BuhlmannConfig) -> None:
        """Replace the config, raising ConfigValidationError if it is invalid."""
        new_config.validate()
        self._config = new_config

    def calc_max_sloped_gf(self, gf: tuple[int, int], depth: Depth) -> int:
        """Gradient factor allowed at a depth on the GF low/high slope."""
        gf_low, gf_high = gf
        if not self.ceiling() > Depth.zero():
            return gf_high

        gf_low_depth = self._state.gf_low_depth
        if gf_low_depth is None:
            gf_low_depth = self._first_gf_low_depth(gf_low)
            self._state.gf_low_depth = gf_low_depth

        if depth > gf_low_depth:
            return gf_low
        return self.gf_slope_point(gf, gf_low_depth, depth)

    def _first_gf_low_depth(self, gf_low: int) -> Depth:
        surface_pressure_bar = self._config.surface_pressure / 1000.0
        fraction = gf_low / 100.0
        max_depth = 0.0
        for comp in self._compartments:
            _, a_weighted, b_weighted = comp.weighted_zhl_params(comp.he_ip, comp.n2_ip)
            max_amb_p = (comp.total_ip - fraction * a_weighted) / (
                1.0 - fraction + fraction / b_weighted
            )
            max_depth = max(max_depth, max(10.0 * (max_amb_p - surface_pressure_bar), 0.0))
        return Depth.from_meters(max_depth)

    def gf_slope_point(
        self, gf: tuple[int, int], gf_low_depth: Depth, depth: Depth
    ) -> int:
        """Gradient factor interpolated between GF low depth and the surface."""
        gf_low, gf_high = gf
        rate = _float_div(float(gf_high - gf_low), gf_low_depth.as_meters())
        slope_point = float(gf_high) - rate * depth.as_meters()
        return _saturating_u8(slope_point)

    def _leading_comp(self) -> Compartment:
        return max(self._compartments, key=lambda comp: comp.min_tolerable_amb_pressure)

    def _recalculate(self, record: RecordData) -> None:
        self._recalculate_compartments(record)
        if not self._sim:
            self._state.ox_tox.recalculate(record, self._config.surface_pressure)

    def _recalculate_compartments(self, record: RecordData) -> None:
        surface_pressure = self._config.surface_pressure
        gf_low, gf_high = self._config.gf
        for comp in self._compartments:
            comp.recalculate(record, gf_high, surface_pressure)

        if gf_high == gf_low:
            return
        max_gf = self.calc_max_sloped_gf(self._config.gf, record.depth)
        recalc_record = RecordData(record.depth, Time.zero(), record.gas)
        if not self._sim and self._config.recalc_all_tissues_m_values:
            for comp in self._compartments:
                comp.recalculate(recalc_record, max_gf, surface_pressure)
        else:
            self._leading_comp().recalculate(recalc_record, max_gf, surface_pressure)

    @staticmethod
    def _validate_depth(depth: Depth) -> None:
        if depth < Depth.zero():
            raise ValueError(f"Invalid depth [{depth}]")


BuehlmannModel = BuhlmannModel