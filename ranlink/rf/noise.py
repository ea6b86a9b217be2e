"""Occupied bandwidth and thermal noise floor."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Union

from ..exceptions import ConfigurationError
from .models import LteBandwidth, Numerology
from .utils import log10

# Thermal noise spectral density at 290 K
THERMAL_NOISE_DENSITY_DBM_HZ = -174.0
SUBCARRIERS_PER_RB = 12
LTE_SUBCARRIER_SPACING_HZ = 15_000.0

SUBCARRIER_SPACING_HZ: Dict[Numerology, float] = {
    Numerology.N0: 15_000.0,
    Numerology.N1: 30_000.0,
    Numerology.N2: 60_000.0,
    Numerology.N3: 120_000.0,
    Numerology.N4: 240_000.0,
}

LTE_RESOURCE_BLOCKS: Dict[LteBandwidth, int] = {
    LteBandwidth.BW1_4: 6,
    LteBandwidth.BW3: 15,
    LteBandwidth.BW5: 25,
    LteBandwidth.BW10: 50,
    LteBandwidth.BW15: 75,
    LteBandwidth.BW20: 100,
}


@dataclass(frozen=True)
class NoiseFloor:
    subcarrier_count: int
    bandwidth_hz: float
    thermal_noise_dbm: float


def subcarrier_spacing_hz(numerology: Union[Numerology, int]) -> float:
    try:
        return SUBCARRIER_SPACING_HZ[Numerology(numerology)]
    except ValueError:
        raise ConfigurationError("numerology", numerology) from None


def lte_resource_blocks(bandwidth: Union[LteBandwidth, float]) -> int:
    try:
        return LTE_RESOURCE_BLOCKS[LteBandwidth(bandwidth)]
    except ValueError:
        raise ConfigurationError("LTE bandwidth", bandwidth) from None


def subcarrier_count(resource_blocks: int) -> int:
    return SUBCARRIERS_PER_RB * resource_blocks


def occupied_bandwidth_hz(resource_blocks: int, spacing_hz: float) -> float:
    return subcarrier_count(resource_blocks) * spacing_hz


def thermal_noise_dbm(bandwidth_hz: float) -> float:
    """Thermal noise power kTB in dBm.

    Undefined for a non-positive bandwidth: returns -inf for 0 and NaN below.
    """
    return THERMAL_NOISE_DENSITY_DBM_HZ + 10.0 * log10(bandwidth_hz)


def compute_noise_floor(
    resource_blocks_or_bandwidth: Union[int, LteBandwidth],
    spacing_hz: float = LTE_SUBCARRIER_SPACING_HZ,
) -> NoiseFloor:
    """Noise floor for an NR resource-block allocation or an LTE channel bandwidth.

    Args:
        resource_blocks_or_bandwidth: RB count (NR) or an ``LteBandwidth`` member,
            which is mapped to its fixed RB count
        spacing_hz: Subcarrier spacing; LTE always uses 15 kHz

    Returns:
        NoiseFloor with subcarrier count, occupied bandwidth and noise power
    """
    if isinstance(resource_blocks_or_bandwidth, LteBandwidth):
        rb = lte_resource_blocks(resource_blocks_or_bandwidth)
        spacing_hz = LTE_SUBCARRIER_SPACING_HZ
    else:
        rb = resource_blocks_or_bandwidth
    bandwidth_hz = occupied_bandwidth_hz(rb, spacing_hz)
    return NoiseFloor(
        subcarrier_count=subcarrier_count(rb),
        bandwidth_hz=bandwidth_hz,
        thermal_noise_dbm=thermal_noise_dbm(bandwidth_hz),
    )
