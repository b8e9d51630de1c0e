"""Oxygen toxicity tracking: CNS percentage and pulmonary OTU."""

from __future__ import annotations

from dataclasses import dataclass

from .gas import Gas
from .units import Depth, Time

CNS_ELIMINATION_HALF_TIME_MINUTES = 90.0
CNS_LIMIT_OVER_MAX_PPO2_SECONDS = 400.0
OTU_EQUATION_EXPONENT = -0.8333


@dataclass(frozen=True)
class RecordData:
    """A single dive segment: a depth held for a time on a gas."""

    depth: Depth
    time: Time
    gas: Gas


@dataclass(frozen=True)
class CnsCoefficients:
    """A row of the CNS exposure table: ppO2 range with its time-limit line."""

    low: float
    high: float
    slope: int
    intercept: int

    def __contains__(self, pp_o2: float) -> bool:
        return self.low <= pp_o2 <= self.high

    def time_limit_minutes(self, pp_o2: float) -> float:
        """Exposure time limit in minutes for the given ppO2."""
        return float(self.slope) * pp_o2 + float(self.intercept)


CNS_COEFFICIENTS: tuple[CnsCoefficients, ...] = (
    CnsCoefficients(0.5, 0.6, -1800, 1800),
    CnsCoefficients(0.6, 0.7, -1500, 1620),
    CnsCoefficients(0.7, 0.8, -1200, 1410),
    CnsCoefficients(0.8, 0.9, -900, 1170),
    CnsCoefficients(0.9, 1.1, -600, 900),
    CnsCoefficients(1.1, 1.5, -300, 570),
    CnsCoefficients(1.5, 1.65, -750, 1245),
)


def cns_coefficients(pp_o2: float) -> CnsCoefficients | None:
    """Table row for a ppO2, ranges taken as exclusive at their lower bound."""
    return next(
        (row for row in CNS_COEFFICIENTS if pp_o2 != row.low and pp_o2 in row),
        None,
    )


@dataclass
class OxTox:
    """Accumulated CNS (percent) and OTU exposure."""

    cns: float = 0.0
    otu: float = 0.0

    def recalculate(self, record: RecordData, surface_pressure: int) -> None:
        """Update both CNS and OTU with a dive segment."""
        self.recalculate_cns(record, surface_pressure)
        self.recalculate_otu(record, surface_pressure)

    def recalculate_cns(self, record: RecordData, surface_pressure: int) -> None:
        pp_o2 = record.gas.inspired_partial_pressures(record.depth, surface_pressure).o2
        row = cns_coefficients(pp_o2)
        if row is not None:
            t_lim = row.time_limit_minutes(pp_o2)
            self.cns += (record.time.as_seconds() / (t_lim * 60.0)) * 100.0
        elif record.depth == Depth.zero() and pp_o2 <= 0.5:
            factor = 2.0 ** (record.time.as_minutes() / CNS_ELIMINATION_HALF_TIME_MINUTES)
            self.cns /= factor
        elif pp_o2 > 1.6:
            self.cns += (
                record.time.as_seconds() / CNS_LIMIT_OVER_MAX_PPO2_SECONDS
            ) * 100.0

    def recalculate_otu(self, record: RecordData, surface_pressure: int) -> None:
        pp_o2 = record.gas.inspired_partial_pressures(record.depth, surface_pressure).o2
        if pp_o2 <= 0.5:
            # at exactly 0.5 the base is infinite and the power vanishes
            return
        self.otu += record.time.as_minutes() * (0.5 / (pp_o2 - 0.5)) ** OTU_EQUATION_EXPONENT