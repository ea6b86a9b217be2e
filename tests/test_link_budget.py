from __future__ import annotations

import dataclasses

import pytest

from ranlink.rf.models import ChannelStatus, CoverageType, LinkDirection, Margins
from ranlink.services.link_budget import LinkBudgetEvaluator, StationSide

BASE_STATION = StationSide(tx_power_dbm=46.0, cable_loss_db=2.0, tx_antenna_gain_dbi=17.0, rx_antenna_gain_dbi=17.0)
TERMINAL = StationSide(tx_power_dbm=23.0, cable_loss_db=0.5, tx_antenna_gain_dbi=1.0, rx_antenna_gain_dbi=2.0)
MARGINS = Margins(
    body_loss_db=3.0,
    slow_fading_margin_db=7.0,
    foliage_loss_db=8.5,
    rain_ice_margin_db=1.0,
    interference_margin_db=2.0,
    building_penetration_loss_db=20.0,
)


def test_full_path_loss_sums_margins():
    assert LinkBudgetEvaluator.full_path_loss_db(100.0, MARGINS) == pytest.approx(121.5)


def test_indoor_adds_only_building_loss():
    outdoor = LinkBudgetEvaluator.evaluate(
        LinkDirection.UL, -121.0, 100.0, MARGINS, 5.0, -6.0, BASE_STATION, TERMINAL,
    )
    indoor_margins = dataclasses.replace(MARGINS, coverage_type=CoverageType.INDOOR)
    indoor = LinkBudgetEvaluator.evaluate(
        LinkDirection.UL, -121.0, 100.0, indoor_margins, 5.0, -6.0, BASE_STATION, TERMINAL,
    )
    assert indoor.full_path_loss_db - outdoor.full_path_loss_db == pytest.approx(20.0)
    assert outdoor.link_budget_dbm - indoor.link_budget_dbm == pytest.approx(20.0)
    assert indoor.rx_sensitivity_dbm == outdoor.rx_sensitivity_dbm


def test_uplink_and_downlink_formulas():
    ul = LinkBudgetEvaluator.link_budget_dbm(LinkDirection.UL, 120.0, BASE_STATION, TERMINAL)
    dl = LinkBudgetEvaluator.link_budget_dbm(LinkDirection.DL, 120.0, BASE_STATION, TERMINAL)
    assert ul == pytest.approx(23.0 - 0.5 + 1.0 - 120.0 + 17.0 - 2.0)
    assert dl == pytest.approx(46.0 - 2.0 + 17.0 - 120.0 + 2.0 - 0.5)


def test_swapping_sides_and_direction():
    ul = LinkBudgetEvaluator.evaluate(LinkDirection.UL, -121.0, 100.0, MARGINS, 5.0, -6.0, BASE_STATION, TERMINAL)
    swapped_bs = StationSide(23.0, 0.5, 1.0, 1.0)
    swapped_terminal = StationSide(46.0, 2.0, 17.0, 17.0)
    dl = LinkBudgetEvaluator.evaluate(LinkDirection.DL, -121.0, 100.0, MARGINS, 5.0, -6.0, swapped_bs, swapped_terminal)
    assert dl.full_path_loss_db == ul.full_path_loss_db
    assert dl.link_budget_dbm == pytest.approx(ul.link_budget_dbm)


def test_sensitivity_is_direction_independent():
    ul = LinkBudgetEvaluator.evaluate(LinkDirection.UL, -121.0, 100.0, MARGINS, 5.0, -6.0, BASE_STATION, TERMINAL)
    dl = LinkBudgetEvaluator.evaluate(LinkDirection.DL, -121.0, 100.0, MARGINS, 5.0, -6.0, BASE_STATION, TERMINAL)
    assert ul.rx_sensitivity_dbm == dl.rx_sensitivity_dbm == pytest.approx(-122.0)


def test_status_boundary_is_pass():
    assert LinkBudgetEvaluator.channel_status(-100.0, -100.0) is ChannelStatus.PASS
    assert LinkBudgetEvaluator.channel_status(-100.000001, -100.0) is ChannelStatus.FAIL
    assert LinkBudgetEvaluator.channel_status(-90.0, -100.0) is ChannelStatus.PASS


def test_nan_budget_fails():
    assert LinkBudgetEvaluator.channel_status(float("nan"), -100.0) is ChannelStatus.FAIL
