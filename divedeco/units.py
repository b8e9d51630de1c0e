"""Depth and time quantities with unit conversions."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from decimal import Decimal
from numbers import Real

_FEET_PER_METER = 3.28084
_METERS_PER_FOOT = 0.3048


def round_half_away(value: float) -> float:
    """Round to the nearest integer, halves away from zero."""
    if not math.isfinite(value):
        return value
    magnitude = abs(value)
    whole = math.floor(magnitude)
    if magnitude - whole >= 0.5:
        whole += 1
    return math.copysign(float(whole), value)


def _format_float(value: float) -> str:
    """Shortest plain decimal form of a float, integers without a fraction."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


class Units(enum.Enum):
    """Measurement systems a depth can be expressed in."""

    METRIC = "metric"
    IMPERIAL = "imperial"


@dataclass(frozen=True, order=True)
class Depth:
    """A depth, stored in meters."""

    m: float = 0.0

    @classmethod
    def zero(cls) -> Depth:
        return cls(0.0)

    @classmethod
    def from_meters(cls, value: float) -> Depth:
        return cls(float(value))

    @classmethod
    def from_feet(cls, value: float) -> Depth:
        return cls(float(value) * _METERS_PER_FOOT)

    @classmethod
    def from_units(cls, value: float, units: Units) -> Depth:
        if units is Units.METRIC:
            return cls.from_meters(value)
        return cls.from_feet(value)

    def to_units(self, units: Units) -> float:
        if units is Units.METRIC:
            return self.as_meters()
        return self.as_feet()

    def as_meters(self) -> float:
        return self.m

    def as_feet(self) -> float:
        return self.m * _FEET_PER_METER

    def __add__(self, other: Depth) -> Depth:
        if not isinstance(other, Depth):
            return NotImplemented
        return Depth(self.m + other.m)

    def __sub__(self, other: Depth) -> Depth:
        if not isinstance(other, Depth):
            return NotImplemented
        return Depth(self.m - other.m)

    def __mul__(self, other: Depth | float) -> Depth:
        if isinstance(other, Depth):
            return Depth(self.m * other.m)
        if isinstance(other, Real):
            return Depth(self.m * other)
        return NotImplemented

    def __truediv__(self, other: Depth | float) -> Depth:
        if isinstance(other, Depth):
            return Depth(self.m / other.m)
        if isinstance(other, Real):
            return Depth(self.m / other)
        return NotImplemented

    def __str__(self) -> str:
        return f"{_format_float(self.as_meters())}m \\ {_format_float(self.as_feet())}ft"


@dataclass(frozen=True, order=True)
class Time:
    """A duration, stored in seconds."""

    s: float = 0.0

    @classmethod
    def zero(cls) -> Time:
        return cls(0.0)

    @classmethod
    def from_seconds(cls, value: float) -> Time:
        return cls(float(value))

    @classmethod
    def from_minutes(cls, value: float) -> Time:
        return cls(float(value) * 60.0)

    def as_seconds(self) -> float:
        return self.s

    def as_minutes(self) -> float:
        return self.s / 60.0

    def __add__(self, other: Time) -> Time:
        if not isinstance(other, Time):
            return NotImplemented
        return Time(self.s + other.s)

    def __sub__(self, other: Time) -> Time:
        if not isinstance(other, Time):
            return NotImplemented
        return Time(self.s - other.s)

    def __mul__(self, other: Time | float) -> Time:
        if isinstance(other, Time):
            return Time(self.s * other.s)
        if isinstance(other, Real):
            return Time(self.s * other)
        return NotImplemented

    def __truediv__(self, other: Time | float) -> Time:
        if isinstance(other, Time):
            return Time(self.s / other.s)
        if isinstance(other, Real):
            return Time(self.s / other)
        return NotImplemented