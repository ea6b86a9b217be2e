from __future__ import annotations

import pytest

from ranlink.exceptions import ConfigurationError
from ranlink.services.presets import (
    LTE_BANDS,
    Technology,
    Vendor,
    apply_vendor_preset,
    default_lte_input,
    default_nr_input,
    vendor_presets,
)


def test_custom_vendor_keeps_input():
    inputs = default_nr_input()
    assert apply_vendor_preset(inputs, Vendor.CUSTOM) is inputs


def test_nr_vendor_preset_overrides_equipment_only():
    inputs = default_nr_input()
    ericsson = apply_vendor_preset(inputs, "Ericsson")
    assert ericsson.gnodeb_noise_figure_db == 4.5
    assert ericsson.gnodeb_cable_loss_db == 1.5
    assert ericsson.gnodeb_antenna_gain_dbi == 18.0
    assert ericsson.cell_radius_m == inputs.cell_radius_m
    assert ericsson.margins == inputs.margins
    assert inputs.gnodeb_noise_figure_db == 5.0


def test_lte_vendor_preset():
    huawei = apply_vendor_preset(default_lte_input(), Vendor.HUAWEI)
    assert huawei.enodeb_cable_loss_db == 1.2
    assert huawei.enodeb_antenna_gain_dbi == 16.5


def test_every_preset_names_input_fields():
    nr_fields = set(default_nr_input().__dataclass_fields__)
    lte_fields = set(default_lte_input().__dataclass_fields__)
    for values in vendor_presets(Technology.NR).values():
        assert set(values) <= nr_fields
    for values in vendor_presets("lte").values():
        assert set(values) <= lte_fields


def test_lte_bands_are_known_frequencies():
    assert LTE_BANDS["Band 3 (1800 MHz)"] == 1800.0
    assert sorted(LTE_BANDS.values()) == [700.0, 800.0, 1800.0, 2100.0, 2600.0]


def test_unknown_vendor_or_technology():
    with pytest.raises(ConfigurationError):
        apply_vendor_preset(default_nr_input(), "Acme")
    with pytest.raises(ConfigurationError):
        vendor_presets("wifi")
