from __future__ import annotations

import math

import pytest

from ranlink.exceptions import ConfigurationError
from ranlink.rf.models import LtePropagationModel, NrPropagationModel
from ranlink.rf.propagation import (
    LinkGeometry,
    auto_select_model_family,
    lte_path_loss_db,
    nr_path_loss_db,
    rma_breakpoint_m,
    uma_breakpoint_m,
)


def _geometry(distance_m, tx_height_m=23.0, rx_height_m=1.5, frequency_mhz=3410.0):
    return LinkGeometry(distance_m, tx_height_m, rx_height_m, frequency_mhz)


def test_uma_default_is_beyond_breakpoint():
    g = _geometry(700.0)
    assert uma_breakpoint_m(g) == pytest.approx(500.133333, abs=1e-5)
    assert nr_path_loss_db(NrPropagationModel.UMA_NLOS, g) == pytest.approx(103.876438, abs=1e-4)


def test_uma_continuous_at_breakpoint():
    d_bp = uma_breakpoint_m(_geometry(1.0))
    at = nr_path_loss_db(NrPropagationModel.UMA_NLOS, _geometry(d_bp))
    beyond = nr_path_loss_db(NrPropagationModel.UMA_NLOS, _geometry(d_bp * (1 + 1e-9)))
    assert beyond == pytest.approx(at, abs=1e-6)


def test_umi_reference():
    g = _geometry(200.0, tx_height_m=10.0, frequency_mhz=3500.0)
    assert nr_path_loss_db("Urban Micro 3D-UMi NLOS", g) == pytest.approx(121.307952, abs=1e-4)


def test_rma_both_branches():
    near = _geometry(500.0, tx_height_m=35.0, frequency_mhz=700.0)
    far = _geometry(5000.0, tx_height_m=35.0, frequency_mhz=700.0)
    assert rma_breakpoint_m(near) == pytest.approx(769.6902, abs=1e-3)
    assert nr_path_loss_db(NrPropagationModel.RMA_NLOS, near) == pytest.approx(93.842585, abs=1e-4)
    assert nr_path_loss_db(NrPropagationModel.RMA_NLOS, far) == pytest.approx(187.802923, abs=1e-4)


def test_cost231_urban_reference():
    g = _geometry(1000.0, tx_height_m=30.0, frequency_mhz=1800.0)
    assert lte_path_loss_db(LtePropagationModel.COST231_HATA_URBAN, g) == pytest.approx(139.196948, abs=1e-4)
    suburban = lte_path_loss_db(LtePropagationModel.COST231_HATA_SUBURBAN, g)
    assert suburban == pytest.approx(139.196948 - 3, abs=1e-4)


def test_okumura_hata_urban_reference():
    g = _geometry(2000.0, tx_height_m=30.0, frequency_mhz=900.0)
    assert lte_path_loss_db(LtePropagationModel.OKUMURA_HATA_URBAN, g) == pytest.approx(137.007025, abs=1e-4)
    assert lte_path_loss_db(LtePropagationModel.OKUMURA_HATA_SUBURBAN, g) < 137.007025


@pytest.mark.parametrize("model", list(NrPropagationModel))
def test_nr_models_increase_with_distance(model):
    distances = [50.0, 200.0, 500.0, 1000.0, 3000.0, 10000.0]
    losses = [nr_path_loss_db(model, _geometry(d, tx_height_m=25.0, frequency_mhz=3500.0)) for d in distances]
    assert losses == sorted(losses)


@pytest.mark.parametrize("model", list(LtePropagationModel))
def test_lte_models_increase_with_distance(model):
    distances = [500.0, 1000.0, 2000.0, 5000.0, 10000.0]
    losses = [lte_path_loss_db(model, _geometry(d, tx_height_m=30.0, frequency_mhz=1800.0)) for d in distances]
    assert losses == sorted(losses)


def test_lte_zero_distance_is_zero_loss():
    assert lte_path_loss_db(LtePropagationModel.COST231_HATA_URBAN, _geometry(0.0)) == 0.0


def test_lte_loss_floored_at_zero():
    # Sub-meter distance at low frequency drives the Hata formula negative
    g = _geometry(0.5, tx_height_m=200.0, rx_height_m=1.5, frequency_mhz=150.0)
    assert lte_path_loss_db(LtePropagationModel.OKUMURA_HATA_SUBURBAN, g) == 0.0


def test_nr_invalid_geometry_gives_nan():
    loss = nr_path_loss_db(NrPropagationModel.UMI_NLOS, _geometry(100.0, frequency_mhz=-5.0))
    assert math.isnan(loss)


def test_model_family_mismatch_is_rejected():
    with pytest.raises(ConfigurationError):
        nr_path_loss_db(LtePropagationModel.COST231_HATA_URBAN, _geometry(100.0))
    with pytest.raises(ConfigurationError) as exc:
        lte_path_loss_db("Free Space", _geometry(100.0))
    assert exc.value.tag == "Free Space"


@pytest.mark.parametrize(
    "frequency,current,expected",
    [
        (1800.0, LtePropagationModel.OKUMURA_HATA_URBAN, LtePropagationModel.COST231_HATA_URBAN),
        (1500.0, LtePropagationModel.OKUMURA_HATA_SUBURBAN, LtePropagationModel.COST231_HATA_SUBURBAN),
        (900.0, LtePropagationModel.COST231_HATA_URBAN, LtePropagationModel.OKUMURA_HATA_URBAN),
        (800.0, LtePropagationModel.COST231_HATA_SUBURBAN, LtePropagationModel.OKUMURA_HATA_SUBURBAN),
        (2600.0, LtePropagationModel.COST231_HATA_URBAN, LtePropagationModel.COST231_HATA_URBAN),
    ],
)
def test_auto_select_model_family(frequency, current, expected):
    assert auto_select_model_family(frequency, current) is expected


def test_hata_zero_base_station_height_gives_nan():
    g = LinkGeometry(1000.0, 0.0, 1.5, 900.0)
    assert math.isnan(lte_path_loss_db(LtePropagationModel.OKUMURA_HATA_URBAN, g))
    assert math.isnan(lte_path_loss_db(LtePropagationModel.COST231_HATA_SUBURBAN, g))


def test_geometry_does_not_overflow():
    g = _geometry(1e200, tx_height_m=1e200)
    assert math.isfinite(g.distance_3d_m)
    assert math.isfinite(nr_path_loss_db(NrPropagationModel.UMA_NLOS, g))
