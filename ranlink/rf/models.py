from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple, Union


class LinkDirection(str, Enum):
    """Transmission direction: terminal to base station, or the reverse."""
    UL = "UL"
    DL = "DL"


class Numerology(int, Enum):
    """5G NR numerology index; selects the subcarrier spacing."""
    N0 = 0  # 15 kHz
    N1 = 1  # 30 kHz
    N2 = 2  # 60 kHz
    N3 = 3  # 120 kHz
    N4 = 4  # 240 kHz


class LteBandwidth(float, Enum):
    """LTE channel bandwidth in MHz."""
    BW1_4 = 1.4
    BW3 = 3.0
    BW5 = 5.0
    BW10 = 10.0
    BW15 = 15.0
    BW20 = 20.0


class NrPropagationModel(str, Enum):
    """3GPP TR 38.901 NLOS path loss models."""
    UMA_NLOS = "Urban Macro 3D-UMa NLOS"
    UMI_NLOS = "Urban Micro 3D-UMi NLOS"
    RMA_NLOS = "Rural Macro 3D-RMa NLOS"


class LtePropagationModel(str, Enum):
    """Hata-family empirical path loss models."""
    OKUMURA_HATA_URBAN = "Okumura-Hata Urban"
    OKUMURA_HATA_SUBURBAN = "Okumura-Hata Suburban"
    COST231_HATA_URBAN = "COST 231 Hata Urban"
    COST231_HATA_SUBURBAN = "COST 231 Hata Suburban"


class CoverageType(str, Enum):
    OUTDOOR = "Outdoor"
    INDOOR = "Indoor"


class ChannelStatus(str, Enum):
    PASS = "Pass"
    FAIL = "Fail"


@dataclass(frozen=True)
class Margins:
    """Fixed dB allowances added on top of the propagation loss.

    Attributes:
        body_loss_db: Obstruction by the user's body
        slow_fading_margin_db: Shadowing allowance
        foliage_loss_db: Attenuation through vegetation
        rain_ice_margin_db: Precipitation allowance
        interference_margin_db: Other-cell interference allowance
        coverage_type: Outdoor or Indoor
        building_penetration_loss_db: Wall loss, only counted for Indoor coverage
    """
    body_loss_db: float = 0.0
    slow_fading_margin_db: float = 0.0
    foliage_loss_db: float = 0.0
    rain_ice_margin_db: float = 0.0
    interference_margin_db: float = 0.0
    coverage_type: CoverageType = CoverageType.OUTDOOR
    building_penetration_loss_db: float = 0.0


@dataclass(frozen=True)
class NrCalculatorInput:
    """Complete input snapshot for a 5G NR link budget.

    Canonical units: meters, MHz, dB/dBm/dBi. No range checks happen here;
    the engine accepts any finite real and reports undefined results as NaN.
    """
    cell_radius_m: float
    frequency_mhz: float
    link_direction: LinkDirection
    num_resource_blocks: int
    numerology: Numerology

    # gNodeB
    gnodeb_noise_figure_db: float
    gnodeb_tx_power_dbm: float
    target_sinr_db: float
    gnodeb_cable_loss_db: float
    gnodeb_antenna_gain_dbi: float
    gnodeb_antenna_height_m: float

    # UT
    ut_tx_power_dbm: float
    ut_cable_loss_db: float
    ut_antenna_gain_dbi: float
    ut_antenna_height_m: float

    propagation_model: NrPropagationModel
    margins: Margins = field(default_factory=Margins)


@dataclass(frozen=True)
class LteCalculatorInput:
    """Complete input snapshot for an LTE link budget.

    The UE carries separate transmit (uplink) and receive (downlink) antenna gains.
    """
    cell_radius_m: float
    frequency_mhz: float
    link_direction: LinkDirection
    bandwidth: LteBandwidth

    # eNodeB
    enodeb_noise_figure_db: float
    enodeb_tx_power_dbm: float
    target_sinr_db: float
    enodeb_cable_loss_db: float
    enodeb_antenna_gain_dbi: float
    enodeb_antenna_height_m: float

    # UE
    ue_tx_power_dbm: float
    ue_cable_loss_db: float
    ue_antenna_gain_dbi: float
    ue_rx_antenna_gain_dbi: float
    ue_antenna_height_m: float

    propagation_model: LtePropagationModel
    margins: Margins = field(default_factory=Margins)


CalculatorInput = Union[NrCalculatorInput, LteCalculatorInput]


@dataclass(frozen=True)
class CalculationResult:
    """Immutable result snapshot of one evaluation."""
    subcarrier_count: int
    bandwidth_hz: float
    thermal_noise_dbm: float
    propagation_loss_db: float
    full_path_loss_db: float
    rx_sensitivity_dbm: float
    link_budget_dbm: float
    status: ChannelStatus
    antenna_height_difference_m: float
    ut_tx_power_per_subcarrier_dbm: float
    warnings: Tuple[str, ...] = ()

    @property
    def additional_losses_db(self) -> float:
        # body, fading, foliage, rain/ice, interference and building loss
        return self.full_path_loss_db - self.propagation_loss_db

    @property
    def link_margin_db(self) -> float:
        return self.link_budget_dbm - self.rx_sensitivity_dbm
