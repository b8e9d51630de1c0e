"""Configuration of the Buhlmann decompression model."""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace

GF_RANGE_ERR_MSG = "GF values have to be in 1-100 range"
GF_ORDER_ERR_MSG = "GFLow can't be higher than GFHigh"
SURFACE_PRESSURE_ERR_MSG = "Surface pressure must be in milibars in 500-1500 range"
DECO_ASCENT_RATE_ERR_MSG = "Ascent rate must in 1-30 m/s range"


class CeilingType(enum.Enum):
    """How the decompression ceiling is computed."""

    ACTUAL = "actual"
    ADAPTIVE = "adaptive"


class NDLType(enum.Enum):
    """How the no-decompression limit is computed."""

    ACTUAL = "actual"  # consider off-gassing during ascent
    BY_CEILING = "by_ceiling"  # NDL ends once the ceiling is below the surface


class ConfigValidationError(ValueError):
    """A configuration field holds an invalid value."""

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"Config error [{field}]: {reason}")
        self.field = field
        self.reason = reason


@dataclass(frozen=True)
class BuhlmannConfig:
    """Model settings: gradient factors, surface pressure, ascent rate and ceiling handling."""

    gf: tuple[int, int] = (100, 100)
    surface_pressure: int = 1013
    deco_ascent_rate: float = 10.0
    ceiling_type: CeilingType = CeilingType.ACTUAL
    round_ceiling: bool = False
    recalc_all_tissues_m_values: bool = True

    def validate(self) -> None:
        """Raise ConfigValidationError if any field is out of range."""
        gf_low, gf_high = self.gf
        if not (1 <= gf_low <= 100 and 1 <= gf_high <= 100):
            raise ConfigValidationError("gf", GF_RANGE_ERR_MSG)
        if gf_low > gf_high:
            raise ConfigValidationError("gf", GF_ORDER_ERR_MSG)
        if not 500 <= self.surface_pressure <= 1500:
            raise ConfigValidationError("surface_pressure", SURFACE_PRESSURE_ERR_MSG)
        if not 1.0 <= self.deco_ascent_rate <= 30.0:
            raise ConfigValidationError("deco_ascent_rate", DECO_ASCENT_RATE_ERR_MSG)

    def with_gradient_factors(self, gf_low: int, gf_high: int) -> BuhlmannConfig:
        return replace(self, gf=(int(gf_low), int(gf_high)))

    def with_surface_pressure(self, surface_pressure: int) -> BuhlmannConfig:
        return replace(self, surface_pressure=int(surface_pressure))

    def with_deco_ascent_rate(self, deco_ascent_rate: float) -> BuhlmannConfig:
        return replace(self, deco_ascent_rate=float(deco_ascent_rate))

    def with_ceiling_type(self, ceiling_type: CeilingType) -> BuhlmannConfig:
        return replace(self, ceiling_type=ceiling_type)

    def with_round_ceiling(self, round_ceiling: bool) -> BuhlmannConfig:
        return replace(self, round_ceiling=bool(round_ceiling))

    def with_all_m_values_recalculated(
        self, recalc_all_tissues_m_values: bool
    ) -> BuhlmannConfig:
        return replace(self, recalc_all_tissues_m_values=bool(recalc_all_tissues_m_values))