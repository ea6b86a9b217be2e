"""Vendor equipment presets, LTE band table and default calculator inputs."""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Dict

from ..exceptions import ConfigurationError
from ..rf.models import (
    CalculatorInput,
    CoverageType,
    LinkDirection,
    LteBandwidth,
    LteCalculatorInput,
    LtePropagationModel,
    Margins,
    Numerology,
    NrCalculatorInput,
    NrPropagationModel,
)


class Technology(str, Enum):
    NR = "nr"
    LTE = "lte"


class Vendor(str, Enum):
    CUSTOM = "Custom"
    ERICSSON = "Ericsson"
    HUAWEI = "Huawei"
    NOKIA = "Nokia"


# Typical equipment values, keyed by the input field they override
NR_VENDOR_PRESETS: Dict[Vendor, Dict[str, float]] = {
    Vendor.ERICSSON: {
        "gnodeb_noise_figure_db": 4.5,
        "gnodeb_tx_power_dbm": 46.0,  # ~40 W
        "gnodeb_cable_loss_db": 1.5,
        "gnodeb_antenna_gain_dbi": 18.0,
        "ut_tx_power_dbm": 23.0,
    },
    Vendor.HUAWEI: {
        "gnodeb_noise_figure_db": 5.0,
        "gnodeb_tx_power_dbm": 47.0,  # ~50 W
        "gnodeb_cable_loss_db": 1.2,
        "gnodeb_antenna_gain_dbi": 17.5,
        "ut_tx_power_dbm": 23.0,
    },
    Vendor.NOKIA: {
        "gnodeb_noise_figure_db": 4.8,
        "gnodeb_tx_power_dbm": 46.5,
        "gnodeb_cable_loss_db": 1.8,
        "gnodeb_antenna_gain_dbi": 18.5,
        "ut_tx_power_dbm": 23.0,
    },
}

LTE_VENDOR_PRESETS: Dict[Vendor, Dict[str, float]] = {
    Vendor.ERICSSON: {
        "enodeb_noise_figure_db": 4.0,
        "enodeb_tx_power_dbm": 46.0,
        "enodeb_cable_loss_db": 1.5,
        "enodeb_antenna_gain_dbi": 17.0,
        "ue_tx_power_dbm": 23.0,
    },
    Vendor.HUAWEI: {
        "enodeb_noise_figure_db": 4.5,
        "enodeb_tx_power_dbm": 46.0,
        "enodeb_cable_loss_db": 1.2,
        "enodeb_antenna_gain_dbi": 16.5,
        "ue_tx_power_dbm": 23.0,
    },
    Vendor.NOKIA: {
        "enodeb_noise_figure_db": 4.2,
        "enodeb_tx_power_dbm": 46.0,
        "enodeb_cable_loss_db": 1.8,
        "enodeb_antenna_gain_dbi": 17.2,
        "ue_tx_power_dbm": 23.0,
    },
}

# Centre frequencies in MHz
LTE_BANDS: Dict[str, float] = {
    "Band 28 (700 MHz)": 700.0,
    "Band 20 (800 MHz)": 800.0,
    "Band 3 (1800 MHz)": 1800.0,
    "Band 1 (2100 MHz)": 2100.0,
    "Band 7 (2600 MHz)": 2600.0,
}


def vendor_presets(technology: Technology) -> Dict[Vendor, Dict[str, float]]:
    try:
        technology = Technology(technology)
    except ValueError:
        raise ConfigurationError("technology", technology) from None
    return NR_VENDOR_PRESETS if technology is Technology.NR else LTE_VENDOR_PRESETS


def apply_vendor_preset(inputs: CalculatorInput, vendor) -> CalculatorInput:
    """Return a copy of ``inputs`` with the vendor's equipment values substituted.

    ``Vendor.CUSTOM`` returns the input unchanged.
    """
    try:
        vendor = Vendor(vendor)
    except ValueError:
        raise ConfigurationError("vendor", vendor) from None
    if vendor is Vendor.CUSTOM:
        return inputs
    if isinstance(inputs, NrCalculatorInput):
        table = NR_VENDOR_PRESETS
    elif isinstance(inputs, LteCalculatorInput):
        table = LTE_VENDOR_PRESETS
    else:
        raise ConfigurationError("calculator input", type(inputs).__name__)
    return dataclasses.replace(inputs, **table[vendor])


def default_nr_input() -> NrCalculatorInput:
    return NrCalculatorInput(
        cell_radius_m=700.0,
        frequency_mhz=3410.0,
        link_direction=LinkDirection.UL,
        num_resource_blocks=1,
        numerology=Numerology.N0,
        gnodeb_noise_figure_db=5.0,
        gnodeb_tx_power_dbm=46.0,
        target_sinr_db=-6.0,
        gnodeb_cable_loss_db=2.0,
        gnodeb_antenna_gain_dbi=17.0,
        gnodeb_antenna_height_m=23.0,
        ut_tx_power_dbm=23.0,
        ut_cable_loss_db=0.0,
        ut_antenna_gain_dbi=0.0,
        ut_antenna_height_m=1.5,
        propagation_model=NrPropagationModel.UMA_NLOS,
        margins=Margins(
            body_loss_db=3.0,
            slow_fading_margin_db=7.0,
            foliage_loss_db=8.5,
            rain_ice_margin_db=0.0,
            interference_margin_db=2.0,
            coverage_type=CoverageType.OUTDOOR,
            building_penetration_loss_db=20.0,
        ),
    )


def default_lte_input() -> LteCalculatorInput:
    return LteCalculatorInput(
        cell_radius_m=1000.0,
        frequency_mhz=1800.0,
        link_direction=LinkDirection.UL,
        bandwidth=LteBandwidth.BW10,
        enodeb_noise_figure_db=5.0,
        enodeb_tx_power_dbm=46.0,
        target_sinr_db=-5.0,
        enodeb_cable_loss_db=2.0,
        enodeb_antenna_gain_dbi=17.0,
        enodeb_antenna_height_m=30.0,
        ue_tx_power_dbm=23.0,
        ue_cable_loss_db=0.0,
        ue_antenna_gain_dbi=0.0,
        ue_rx_antenna_gain_dbi=0.0,
        ue_antenna_height_m=1.5,
        propagation_model=LtePropagationModel.COST231_HATA_URBAN,
        margins=Margins(
            body_loss_db=2.0,
            slow_fading_margin_db=8.0,
            foliage_loss_db=5.0,
            rain_ice_margin_db=0.0,
            interference_margin_db=3.0,
            coverage_type=CoverageType.OUTDOOR,
            building_penetration_loss_db=20.0,
        ),
    )
