"""Propagation loss models.

5G NR uses the 3GPP TR 38.901 NLOS models (UMa, UMi, RMa), which work on the
3D distance with the carrier frequency in GHz. LTE uses the Okumura-Hata and
COST 231 Hata empirical models, which work on the distance in km with the
carrier frequency in MHz.

All logarithms go through :func:`ranlink.rf.utils.log10`, so a non-positive
distance, frequency or height produces NaN/inf instead of an exception.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from math import hypot, pi
from typing import Callable, Dict

from ..exceptions import ConfigurationError
from .models import LtePropagationModel, NrPropagationModel
from .units import m_to_km, mhz_to_ghz
from .utils import log10

logger = logging.getLogger(__name__)

SPEED_OF_LIGHT_M_S = 3e8  # rounded, as in TR 38.901 breakpoint formulas
COST231_THRESHOLD_MHZ = 1500.0


@dataclass(frozen=True)
class LinkGeometry:
    """Base station / terminal geometry for a single link.

    Attributes:
        distance_m: Ground (2D) distance in meters
        tx_height_m: Base station antenna height in meters
        rx_height_m: Terminal antenna height in meters
        frequency_mhz: Carrier frequency in MHz
    """
    distance_m: float
    tx_height_m: float
    rx_height_m: float
    frequency_mhz: float

    @property
    def height_difference_m(self) -> float:
        return self.tx_height_m - self.rx_height_m

    @property
    def distance_3d_m(self) -> float:
        return hypot(self.distance_m, self.height_difference_m)

    @property
    def frequency_ghz(self) -> float:
        return mhz_to_ghz(self.frequency_mhz)


# ---------------------------------------------------------------------------
# 5G NR: 3GPP TR 38.901
# ---------------------------------------------------------------------------

def uma_breakpoint_m(g: LinkGeometry) -> float:
    return 4 * (g.tx_height_m - 1) * (g.rx_height_m - 1) * (g.frequency_ghz * 1e9) / SPEED_OF_LIGHT_M_S


def rma_breakpoint_m(g: LinkGeometry) -> float:
    return 2 * pi * g.tx_height_m * g.rx_height_m * (g.frequency_ghz * 1e9) / SPEED_OF_LIGHT_M_S


def uma_nlos_db(g: LinkGeometry) -> float:
    """Urban macro NLOS.

    The near-field slope (PL1) applies up to and including the breakpoint
    distance; PL2 applies beyond it. The two branches meet at d2D == dBP.
    """
    d3d = g.distance_3d_m
    fc = g.frequency_ghz
    d_bp = uma_breakpoint_m(g)
    if g.distance_m <= d_bp:
        return 28.0 + 22 * log10(d3d) + 20 * log10(fc)
    return (
        28.0 + 40 * log10(d3d) + 20 * log10(fc)
        - 18 * log10(hypot(d_bp, g.height_difference_m))
    )


def umi_nlos_db(g: LinkGeometry) -> float:
    """Urban micro (street canyon) NLOS; single slope, no breakpoint."""
    return 36.7 * log10(g.distance_3d_m) + 22.7 + 26 * log10(g.frequency_ghz)


def rma_nlos_db(g: LinkGeometry) -> float:
    """Rural macro NLOS with the two-slope breakpoint."""
    d3d = g.distance_3d_m
    fc = g.frequency_ghz
    h_bs = g.tx_height_m
    h_ut = g.rx_height_m
    d_bp = rma_breakpoint_m(g)
    height_correction = 10.5 - 0.2 * (h_ut - 1.5) - 0.2 * (h_bs - 35)
    if g.distance_m <= d_bp:
        return 20 * log10(40 * pi * d3d * fc / 3) + height_correction
    return (
        40 * log10(d3d) - 20 * log10(d_bp)
        + 20 * log10(40 * pi * d_bp * fc / 3)
        + height_correction
    )


NR_MODELS: Dict[NrPropagationModel, Callable[[LinkGeometry], float]] = {
    NrPropagationModel.UMA_NLOS: uma_nlos_db,
    NrPropagationModel.UMI_NLOS: umi_nlos_db,
    NrPropagationModel.RMA_NLOS: rma_nlos_db,
}


# ---------------------------------------------------------------------------
# LTE: Hata family
# ---------------------------------------------------------------------------

def mobile_height_correction_db(frequency_mhz: float, rx_height_m: float) -> float:
    """a(hR) for small/medium cities."""
    fc = frequency_mhz
    return (1.1 * log10(fc) - 0.7) * rx_height_m - (1.56 * log10(fc) - 0.8)


def _hata_db(g: LinkGeometry, intercept: float, frequency_slope: float) -> float:
    fc = g.frequency_mhz
    h_te = g.tx_height_m
    return (
        intercept + frequency_slope * log10(fc) - 13.82 * log10(h_te)
        - mobile_height_correction_db(fc, g.rx_height_m)
        + (44.9 - 6.55 * log10(h_te)) * log10(m_to_km(g.distance_m))
    )


def okumura_hata_urban_db(g: LinkGeometry) -> float:
    return _hata_db(g, 69.55, 26.16)


def okumura_hata_suburban_db(g: LinkGeometry) -> float:
    return okumura_hata_urban_db(g) - 2 * log10(g.frequency_mhz / 28) ** 2 - 5.4


def cost231_hata_urban_db(g: LinkGeometry) -> float:
    # +3 dB metropolitan-centre correction
    return _hata_db(g, 46.3, 33.9) + 3


def cost231_hata_suburban_db(g: LinkGeometry) -> float:
    return _hata_db(g, 46.3, 33.9)


LTE_MODELS: Dict[LtePropagationModel, Callable[[LinkGeometry], float]] = {
    LtePropagationModel.OKUMURA_HATA_URBAN: okumura_hata_urban_db,
    LtePropagationModel.OKUMURA_HATA_SUBURBAN: okumura_hata_suburban_db,
    LtePropagationModel.COST231_HATA_URBAN: cost231_hata_urban_db,
    LtePropagationModel.COST231_HATA_SUBURBAN: cost231_hata_suburban_db,
}

_SUBURBAN_MODELS = (
    LtePropagationModel.OKUMURA_HATA_SUBURBAN,
    LtePropagationModel.COST231_HATA_SUBURBAN,
)


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

def coerce_nr_model(tag) -> NrPropagationModel:
    if isinstance(tag, NrPropagationModel):
        return tag
    try:
        return NrPropagationModel(tag)
    except ValueError:
        raise ConfigurationError("NR propagation model", tag) from None


def coerce_lte_model(tag) -> LtePropagationModel:
    if isinstance(tag, LtePropagationModel):
        return tag
    try:
        return LtePropagationModel(tag)
    except ValueError:
        raise ConfigurationError("LTE propagation model", tag) from None


def nr_path_loss_db(model, geometry: LinkGeometry) -> float:
    """Propagation loss in dB for a 5G NR model.

    Raises:
        ConfigurationError: if ``model`` is not an NR propagation model
    """
    model = coerce_nr_model(model)
    loss = NR_MODELS[model](geometry)
    logger.debug("%s: d2D=%.1f m -> %.2f dB", model.value, geometry.distance_m, loss)
    return loss


def lte_path_loss_db(model, geometry: LinkGeometry) -> float:
    """Propagation loss in dB for an LTE model, floored at 0 dB.

    A non-positive distance short-circuits to 0 dB.

    Raises:
        ConfigurationError: if ``model`` is not an LTE propagation model
    """
    model = coerce_lte_model(model)
    if m_to_km(geometry.distance_m) <= 0:
        return 0.0
    loss = LTE_MODELS[model](geometry)
    logger.debug("%s: d=%.3f km -> %.2f dB", model.value, m_to_km(geometry.distance_m), loss)
    return 0.0 if loss < 0 else loss


def auto_select_model_family(frequency_mhz: float, current_model) -> LtePropagationModel:
    """Pick the Hata family that matches the carrier frequency.

    COST 231 applies from 1500 MHz upwards and Okumura-Hata below it. The
    urban/suburban choice of ``current_model`` is kept.
    """
    current_model = coerce_lte_model(current_model)
    suburban = current_model in _SUBURBAN_MODELS
    if frequency_mhz >= COST231_THRESHOLD_MHZ:
        selected = LtePropagationModel.COST231_HATA_SUBURBAN if suburban else LtePropagationModel.COST231_HATA_URBAN
    else:
        selected = LtePropagationModel.OKUMURA_HATA_SUBURBAN if suburban else LtePropagationModel.OKUMURA_HATA_URBAN
    if selected is not current_model:
        logger.info("Switching LTE model %s -> %s at %.0f MHz", current_model.value, selected.value, frequency_mhz)
    return selected
