from __future__ import annotations

from enum import Enum

from ..exceptions import ConfigurationError


class DistanceUnit(str, Enum):
    M = "m"
    KM = "km"


class FrequencyUnit(str, Enum):
    MHZ = "MHz"
    GHZ = "GHz"


def km_to_m(value: float) -> float:
    return value * 1000.0


def m_to_km(value: float) -> float:
    return value / 1000.0


def ghz_to_mhz(value: float) -> float:
    return value * 1000.0


def mhz_to_ghz(value: float) -> float:
    return value / 1000.0


def _distance_unit(unit) -> DistanceUnit:
    try:
        return DistanceUnit(unit)
    except ValueError:
        raise ConfigurationError("distance unit", unit) from None


def _frequency_unit(unit) -> FrequencyUnit:
    try:
        return FrequencyUnit(unit)
    except ValueError:
        raise ConfigurationError("frequency unit", unit) from None


def to_canonical_distance(value: float, unit: DistanceUnit) -> float:
    """Convert a displayed distance to meters."""
    return km_to_m(value) if _distance_unit(unit) is DistanceUnit.KM else value


def from_canonical_distance(value_m: float, unit: DistanceUnit) -> float:
    """Convert meters to the display unit, rounded the way the sliders show it."""
    if _distance_unit(unit) is DistanceUnit.KM:
        return round(m_to_km(value_m), 2)
    return value_m


def to_canonical_frequency(value: float, unit: FrequencyUnit) -> float:
    """Convert a displayed frequency to MHz."""
    return ghz_to_mhz(value) if _frequency_unit(unit) is FrequencyUnit.GHZ else value


def from_canonical_frequency(value_mhz: float, unit: FrequencyUnit) -> float:
    if _frequency_unit(unit) is FrequencyUnit.GHZ:
        return round(mhz_to_ghz(value_mhz), 2)
    return value_mhz
