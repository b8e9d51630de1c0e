"""Decompression schedule simulation: ascents, stops and gas switches."""

from __future__ import annotations

import copy
import enum
import math
from dataclasses import dataclass, field, replace
from typing import Any, Iterable

from .gas import Gas
from .units import Depth, Time

DEFAULT_CEILING_WINDOW = 3.0
DEFAULT_MAX_END_DEPTH = 30.0
DECO_GAS_MAX_PPO2 = 1.6


class _DecoAction(enum.Enum):
    ASCENT_TO_CEIL = "ascent_to_ceil"
    ASCENT_TO_GAS_SWITCH_DEPTH = "ascent_to_gas_switch_depth"
    SWITCH_GAS = "switch_gas"
    STOP = "stop"


class DecoStageType(enum.Enum):
    """Kind of a stage in a decompression runtime."""

    ASCENT = "ascent"
    DECO_STOP = "deco_stop"
    GAS_SWITCH = "gas_switch"


@dataclass(frozen=True)
class DecoStage:
    """One stage of a decompression runtime."""

    stage_type: DecoStageType
    start_depth: Depth
    end_depth: Depth
    duration: Time
    gas: Gas


@dataclass
class DecoRuntime:
    """Planned stages with the time to surface and its projection five minutes ahead."""

    deco_stages: list[DecoStage] = field(default_factory=list)
    tts: Time = field(default_factory=Time.zero)
    tts_at_5: Time = field(default_factory=Time.zero)
    tts_delta_at_5: Time = field(default_factory=Time.zero)


class DecoCalculationError(ValueError):
    """Decompression could not be calculated from the given gas mixes."""


class EmptyGasListError(DecoCalculationError):
    """No gas mixes were supplied."""

    def __init__(self) -> None:
        super().__init__("At least one available gas mix required")


class CurrentGasNotInListError(DecoCalculationError):
    """The gas currently breathed is missing from the supplied mixes."""

    def __init__(self) -> None:
        super().__init__(
            "Avaibalbe gas mixes must include current gas mix used by deco model"
        )


class _MissedDecoStop(Exception):
    """The diver is shallower than the required deco stop."""


class Deco:
    """Runs a decompression model forward to the surface, collecting stages."""

    def __init__(self, sim: bool = False) -> None:
        self.deco_stages: list[DecoStage] = []
        self.tts = Time.zero()
        self.sim = sim

    def fork(self) -> Deco:
        forked = Deco(sim=True)
        forked.deco_stages = list(self.deco_stages)
        forked.tts = self.tts
        return forked

    def calc(self, deco_model: Any, gas_mixes: Iterable[Gas]) -> DecoRuntime:
        """Simulate the ascent of a copy of the model and return its runtime."""
        gas_mixes = list(gas_mixes)
        self._validate_gas_mixes(deco_model, gas_mixes)

        sim_model = copy.deepcopy(deco_model)
        ascent_rate = sim_model.config.deco_ascent_rate
        while True:
            pre_state = sim_model.dive_state()
            pre_depth, pre_time, pre_gas = pre_state.depth, pre_state.time, pre_state.gas
            ceiling = sim_model.ceiling()

            try:
                action, switch_gas = self._next_deco_action(sim_model, ceiling, gas_mixes)
            except _MissedDecoStop:
                # move to the expected stop and rerun the calculation from there
                sim_model.record(self.deco_stop_depth(ceiling), Time.zero(), pre_gas)
                return self.calc(sim_model, gas_mixes)

            if action is None:
                break

            if action is _DecoAction.ASCENT_TO_CEIL:
                sim_model.record_travel_with_rate(
                    self.deco_stop_depth(ceiling), ascent_rate, pre_gas
                )
                state = sim_model.dive_state()
                self._register_deco_stage(
                    DecoStage(
                        DecoStageType.ASCENT,
                        pre_depth,
                        state.depth,
                        state.time - pre_time,
                        state.gas,
                    )
                )
            elif action is _DecoAction.ASCENT_TO_GAS_SWITCH_DEPTH:
                if switch_gas is not None:
                    sim_model.record_travel_with_rate(
                        switch_gas.max_operating_depth(DECO_GAS_MAX_PPO2),
                        ascent_rate,
                        pre_gas,
                    )
                    post_ascent = sim_model.dive_state()
                    self._register_deco_stage(
                        DecoStage(
                            DecoStageType.ASCENT,
                            pre_depth,
                            post_ascent.depth,
                            post_ascent.time - pre_time,
                            pre_gas,
                        )
                    )
                    sim_model.record(post_ascent.depth, Time.zero(), switch_gas)
                    post_switch = sim_model.dive_state()
                    self._register_deco_stage(
                        DecoStage(
                            DecoStageType.GAS_SWITCH,
                            post_ascent.depth,
                            post_switch.depth,
                            Time.zero(),
                            switch_gas,
                        )
                    )
            elif action is _DecoAction.SWITCH_GAS:
                sim_model.record(pre_depth, Time.zero(), switch_gas)
                self._register_deco_stage(
                    DecoStage(
                        DecoStageType.GAS_SWITCH,
                        pre_depth,
                        pre_depth,
                        Time.zero(),
                        switch_gas,
                    )
                )
            else:
                stop_depth = self.deco_stop_depth(ceiling)
                sim_model.record(pre_depth, Time.from_seconds(1.0), pre_gas)
                state = sim_model.dive_state()
                self._register_deco_stage(
                    DecoStage(
                        DecoStageType.DECO_STOP,
                        stop_depth,
                        stop_depth,
                        state.time - pre_time,
                        state.gas,
                    )
                )

        tts = self.tts
        tts_at_5 = Time.zero()
        tts_delta_at_5 = Time.zero()
        if not self.sim:
            nested_model = copy.deepcopy(deco_model)
            nested_state = nested_model.dive_state()
            nested_model.record(nested_state.depth, Time.from_minutes(5.0), nested_state.gas)
            nested_runtime = Deco(sim=True).calc(nested_model, gas_mixes)
            tts_at_5 = nested_runtime.tts
            tts_delta_at_5 = tts_at_5 - tts

        return DecoRuntime(
            deco_stages=list(self.deco_stages),
            tts=tts,
            tts_at_5=tts_at_5,
            tts_delta_at_5=tts_delta_at_5,
        )

    def _next_deco_action(
        self, sim_model: Any, ceiling: Depth, gas_mixes: list[Gas]
    ) -> tuple[_DecoAction | None, Gas | None]:
        state = sim_model.dive_state()
        current_depth, current_gas = state.depth, state.gas
        surface_pressure = sim_model.config.surface_pressure

        if current_depth <= Depth.zero():
            return None, None

        if math.isnan(ceiling.as_meters()):
            raise ArithmeticError("Ceiling and depth uncomparable")

        if ceiling <= Depth.zero():
            return _DecoAction.ASCENT_TO_CEIL, None

        if current_depth < self.deco_stop_depth(ceiling):
            raise _MissedDecoStop()

        switch_gas = self.next_switch_gas(
            current_depth, current_gas, gas_mixes, surface_pressure
        )
        if switch_gas is not None:
            gas_mod = switch_gas.max_operating_depth(DECO_GAS_MAX_PPO2)
            gas_end = switch_gas.equivalent_narcotic_depth(current_depth)
            if (
                switch_gas != current_gas
                and current_depth <= gas_mod
                and gas_end <= Depth.from_meters(DEFAULT_MAX_END_DEPTH)
            ):
                return _DecoAction.SWITCH_GAS, switch_gas

        if current_depth - ceiling <= Depth.from_meters(DEFAULT_CEILING_WINDOW):
            return _DecoAction.STOP, None

        if (
            switch_gas is not None
            and switch_gas.max_operating_depth(DECO_GAS_MAX_PPO2) >= ceiling
        ):
            return _DecoAction.ASCENT_TO_GAS_SWITCH_DEPTH, switch_gas
        return _DecoAction.ASCENT_TO_CEIL, None

    def next_switch_gas(
        self,
        current_depth: Depth,
        current_gas: Gas,
        gas_mixes: Iterable[Gas],
        surface_pressure: int,
    ) -> Gas | None:
        """The leanest mix that is richer in oxygen than the current one, if any."""
        current_o2 = current_gas.partial_pressures(current_depth, surface_pressure).o2
        candidates = [
            gas
            for gas in gas_mixes
            if gas.partial_pressures(current_depth, surface_pressure).o2 > current_o2
        ]
        candidates.sort(key=lambda gas: gas.gas_pressures_compound(1.0).o2)
        return candidates[0] if candidates else None

    def _register_deco_stage(self, stage: DecoStage) -> None:
        if self.deco_stages and self.deco_stages[-1].stage_type == stage.stage_type:
            last = self.deco_stages[-1]
            self.deco_stages[-1] = replace(
                last, duration=last.duration + stage.duration, end_depth=stage.end_depth
            )
        else:
            self.deco_stages.append(stage)
        self.tts = self.tts + stage.duration

    def deco_stop_depth(self, ceiling: Depth) -> Depth:
        """Ceiling rounded down to the bottom of its deco stop window."""
        windows = math.ceil(ceiling.as_meters() / DEFAULT_CEILING_WINDOW)
        return Depth.from_meters(DEFAULT_CEILING_WINDOW * windows)

    @staticmethod
    def _validate_gas_mixes(deco_model: Any, gas_mixes: list[Gas]) -> None:
        if not gas_mixes:
            raise EmptyGasListError()
        if deco_model.dive_state().gas not in gas_mixes:
            raise CurrentGasNotInListError()