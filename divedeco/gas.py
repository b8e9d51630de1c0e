"""Breathing gas mixes and their partial pressures."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass

from .units import Depth, round_half_away

# alveolar water vapor pressure assuming 47 mm Hg at 37C
ALVEOLI_WATER_VAPOR_PRESSURE = 0.0627


@dataclass(frozen=True, order=True)
class PartialPressures:
    """Partial pressures of the gas components, in bar."""

    o2: float
    n2: float
    he: float


class InertGas(enum.Enum):
    """Inert gases tracked by the tissue model."""

    HELIUM = "helium"
    NITROGEN = "nitrogen"


@dataclass(frozen=True, init=False)
class Gas:
    """A gas mix given by its oxygen and helium fractions."""

    o2: float
    he: float
    n2: float

    def __init__(self, o2: float, he: float) -> None:
        if not 0.0 <= o2 <= 1.0:
            raise ValueError("Invalid O2 partial pressure")
        if not 0.0 <= he <= 1.0:
            raise ValueError(f"Invalid He partial pressure [{he}]")
        if o2 + he > 1.0:
            raise ValueError("Invalid partial pressures, can't exceed 1ATA in total")
        object.__setattr__(self, "o2", float(o2))
        object.__setattr__(self, "he", float(he))
        object.__setattr__(
            self, "n2", round_half_away((1.0 - (o2 + he)) * 100.0) / 100.0
        )

    @classmethod
    def air(cls) -> Gas:
        return cls(0.21, 0.0)

    def id(self) -> str:
        """Short name of the mix as O2/He percentages."""
        return f"{self.o2 * 100.0:.0f}/{self.he * 100.0:.0f}"

    def __str__(self) -> str:
        return self.id()

    def partial_pressures(self, depth: Depth, surface_pressure: int) -> PartialPressures:
        """Partial pressures of the mix at a depth."""
        gas_pressure = surface_pressure / 1000.0 + depth.as_meters() / 10.0
        return self.gas_pressures_compound(gas_pressure)

    def inspired_partial_pressures(
        self, depth: Depth, surface_pressure: int
    ) -> PartialPressures:
        """Alveolar partial pressures, net of water vapor pressure."""
        gas_pressure = (
            surface_pressure / 1000.0 + depth.as_meters() / 10.0
        ) - ALVEOLI_WATER_VAPOR_PRESSURE
        return self.gas_pressures_compound(gas_pressure)

    def gas_pressures_compound(self, gas_pressure: float) -> PartialPressures:
        return PartialPressures(
            o2=self.o2 * gas_pressure,
            n2=self.n2 * gas_pressure,
            he=self.he * gas_pressure,
        )

    def max_operating_depth(self, pp_o2_limit: float) -> Depth:
        """Maximum operating depth for the given ppO2 limit."""
        if self.o2 == 0.0:
            ratio = math.copysign(math.inf, pp_o2_limit) if pp_o2_limit else math.nan
        else:
            ratio = pp_o2_limit / self.o2
        return Depth.from_meters(10.0 * (ratio - 1.0))

    def equivalent_narcotic_depth(self, depth: Depth) -> Depth:
        """Equivalent narcotic depth, never shallower than the surface."""
        end = (depth + Depth.from_meters(10.0)) * Depth.from_meters(
            1.0 - self.he
        ) - Depth.from_meters(10.0)
        return max(end, Depth.zero())