"""Buhlmann ZH-L16C tissue compartments and their coefficients."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from .config import BuhlmannConfig
from .gas import Gas
from .ox_tox import RecordData
from .units import Depth, Time


class ZHLParams(NamedTuple):
    """Half-times and a/b coefficients of one compartment for N2 and He."""

    n2_half_time: float
    n2_a: float
    n2_b: float
    he_half_time: float
    he_a: float
    he_b: float


ZHL_16C_N2_16A_HE_VALUES: tuple[ZHLParams, ...] = (
    ZHLParams(4.0, 1.2599, 0.5050, 1.51, 1.7424, 0.4245),
    ZHLParams(8.0, 1.0, 0.6514, 3.02, 1.3830, 0.5747),
    ZHLParams(12.5, 0.8618, 0.7222, 4.72, 1.1919, 0.6527),
    ZHLParams(18.5, 0.7562, 0.7825, 6.99, 1.0458, 0.7223),
    ZHLParams(27.0, 0.6200, 0.8126, 10.21, 0.9220, 0.7582),
    ZHLParams(38.3, 0.5043, 0.8434, 14.48, 0.8205, 0.7957),
    ZHLParams(54.3, 0.4410, 0.8693, 20.53, 0.7305, 0.8279),
    ZHLParams(77.0, 0.4000, 0.8910, 29.11, 0.6502, 0.8553),
    ZHLParams(109.0, 0.3750, 0.9092, 41.2, 0.5950, 0.8757),
    ZHLParams(146.0, 0.3500, 0.9222, 55.19, 0.5545, 0.8903),
    ZHLParams(187.0, 0.3295, 0.9319, 70.69, 0.5333, 0.8997),
    ZHLParams(239.0, 0.3065, 0.9403, 90.34, 0.5189, 0.9073),
    ZHLParams(305.0, 0.2835, 0.9477, 115.29, 0.5181, 0.9122),
    ZHLParams(390.0, 0.2610, 0.9544, 147.42, 0.5176, 0.9171),
    ZHLParams(498.0, 0.2480, 0.9602, 188.24, 0.5172, 0.9217),
    ZHLParams(635.0, 0.2327, 0.9653, 240.03, 0.5119, 0.9267),
)


@dataclass(frozen=True)
class Supersaturation:
    """Supersaturation as percent of M-value: at current depth and at the surface."""

    gf_99: float
    gf_surf: float


def _weighted(he_param: float, he_pp: float, n2_param: float, n2_pp: float) -> float:
    return ((he_param * he_pp) + (n2_param * n2_pp)) / (he_pp + n2_pp)


def _gf_adjusted(
    params: tuple[float, float, float], max_gf: int
) -> tuple[float, float, float]:
    half_time, a_coeff, b_coeff = params
    fraction = max_gf / 100.0
    a_adjusted = a_coeff * fraction
    b_adjusted = b_coeff / (fraction - (fraction * b_coeff) + b_coeff)
    return half_time, a_adjusted, b_adjusted


def _haldane_delta(
    inspired: float, load: float, time: Time, half_time: float
) -> float:
    factor = 1.0 - 2.0 ** (-time.as_minutes() / half_time)
    return (inspired - load) * factor


@dataclass(init=False)
class Compartment:
    """A single tissue compartment tracking its inert gas loading."""

    no: int
    min_tolerable_amb_pressure: float
    he_ip: float
    n2_ip: float
    total_ip: float
    m_value_raw: float
    m_value_calc: float
    params: ZHLParams
    model_config: BuhlmannConfig

    def __init__(self, no: int, params: ZHLParams, model_config: BuhlmannConfig) -> None:
        pressures = Gas.air().inspired_partial_pressures(
            Depth.zero(), model_config.surface_pressure
        )
        self.no = no
        self.params = ZHLParams(*params)
        self.model_config = model_config
        self.n2_ip = pressures.n2
        self.he_ip = pressures.he
        self.total_ip = self.he_ip + self.n2_ip
        self.m_value_raw = self.m_value(Depth.zero(), model_config.surface_pressure, 100)
        self.m_value_calc = self.m_value_raw
        _, gf_high = model_config.gf
        self.min_tolerable_amb_pressure = self.tolerable_amb_pressure(gf_high)

    def recalculate(self, record: RecordData, max_gf: int, surface_pressure: int) -> None:
        """Apply a dive segment to the tissue loading and tolerances."""
        inspired = record.gas.inspired_partial_pressures(record.depth, surface_pressure)
        he_delta = _haldane_delta(
            inspired.he, self.he_ip, record.time, self.params.he_half_time
        )
        n2_delta = _haldane_delta(
            inspired.n2, self.n2_ip, record.time, self.params.n2_half_time
        )
        he_final = self.he_ip + he_delta
        n2_final = self.n2_ip + n2_delta

        self.he_ip = he_final
        self.n2_ip = n2_final
        self.total_ip = he_final + n2_final
        self.m_value_raw = self.m_value(record.depth, surface_pressure, 100)
        self.m_value_calc = self.m_value(record.depth, surface_pressure, max_gf)
        self.min_tolerable_amb_pressure = self.tolerable_amb_pressure(max_gf)

    def ceiling(self) -> Depth:
        """Tissue ceiling as a depth, never shallower than the surface."""
        ceil = (
            self.min_tolerable_amb_pressure
            - (self.model_config.surface_pressure / 1000.0)
        ) * 10.0
        return Depth.from_meters(max(ceil, 0.0))

    def supersaturation(self, surface_pressure: int, depth: Depth) -> Supersaturation:
        p_surf = surface_pressure / 1000.0
        p_amb = p_surf + (depth.as_meters() / 10.0)
        m_value_surf = self.m_value(Depth.zero(), surface_pressure, 100)
        gf_99 = ((self.total_ip - p_amb) / (self.m_value_raw - p_amb)) * 100.0
        gf_surf = ((self.total_ip - p_surf) / (m_value_surf - p_surf)) * 100.0
        return Supersaturation(gf_99=gf_99, gf_surf=gf_surf)

    def m_value(self, depth: Depth, surface_pressure: int, max_gf: int) -> float:
        """M-value at a depth, scaled by the gradient factor."""
        weighted = self.weighted_zhl_params(self.he_ip, self.n2_ip)
        _, a_adjusted, b_adjusted = _gf_adjusted(weighted, max_gf)
        p_surf = surface_pressure / 1000.0
        p_amb = p_surf + (depth.as_meters() / 10.0)
        return a_adjusted + (p_amb / b_adjusted)

    def tolerable_amb_pressure(self, max_gf: int) -> float:
        """Minimum tolerable ambient pressure for the given gradient factor."""
        weighted = self.weighted_zhl_params(self.he_ip, self.n2_ip)
        _, a_adjusted, b_adjusted = _gf_adjusted(weighted, max_gf)
        return (self.total_ip - a_adjusted) * b_adjusted

    def weighted_zhl_params(
        self, he_pp: float, n2_pp: float
    ) -> tuple[float, float, float]:
        """Half-time, a and b weighted by the He/N2 proportions."""
        p = self.params
        return (
            _weighted(p.he_half_time, he_pp, p.n2_half_time, n2_pp),
            _weighted(p.he_a, he_pp, p.n2_a, n2_pp),
            _weighted(p.he_b, he_pp, p.n2_b, n2_pp),
        )