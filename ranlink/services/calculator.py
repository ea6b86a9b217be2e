"""Single entry point for link budget evaluation.

``evaluate`` is a pure function of its input snapshot: nothing is cached and
the input is never modified, so it is safe to call on every input change
and from several threads at once.
"""
from __future__ import annotations

import logging
from typing import List

from ..exceptions import ConfigurationError
from ..rf.models import (
    CalculationResult,
    CalculatorInput,
    LinkDirection,
    LteCalculatorInput,
    NrCalculatorInput,
)
from ..rf.noise import compute_noise_floor, lte_resource_blocks, subcarrier_spacing_hz
from ..rf.propagation import LinkGeometry, lte_path_loss_db, nr_path_loss_db
from ..rf.utils import is_finite, log10
from .link_budget import LinkBudgetEvaluator, StationSide

logger = logging.getLogger(__name__)


def _coerce_direction(direction) -> LinkDirection:
    try:
        return LinkDirection(direction)
    except ValueError:
        raise ConfigurationError("link direction", direction) from None


def _precondition_warnings(geometry: LinkGeometry, resource_blocks: int) -> List[str]:
    warnings = []
    if resource_blocks < 1:
        warnings.append("resource block count below 1: bandwidth is not positive")
    if geometry.distance_m <= 0:
        warnings.append("cell radius is not positive")
    if geometry.frequency_mhz <= 0:
        warnings.append("frequency is not positive")
    if geometry.tx_height_m <= 0 or geometry.rx_height_m <= 0:
        warnings.append("antenna heights must be positive")
    if geometry.height_difference_m < 0:
        warnings.append("base station antenna is below the terminal antenna")
    return warnings


def _build_result(noise, propagation_loss_db, budget, geometry, ut_tx_power_dbm, warnings) -> CalculationResult:
    result = CalculationResult(
        subcarrier_count=noise.subcarrier_count,
        bandwidth_hz=noise.bandwidth_hz,
        thermal_noise_dbm=noise.thermal_noise_dbm,
        propagation_loss_db=propagation_loss_db,
        full_path_loss_db=budget.full_path_loss_db,
        rx_sensitivity_dbm=budget.rx_sensitivity_dbm,
        link_budget_dbm=budget.link_budget_dbm,
        status=budget.status,
        antenna_height_difference_m=geometry.height_difference_m,
        ut_tx_power_per_subcarrier_dbm=ut_tx_power_dbm - 10 * log10(noise.subcarrier_count),
        warnings=tuple(warnings),
    )
    if warnings or not is_finite(result.propagation_loss_db, result.link_budget_dbm, result.rx_sensitivity_dbm):
        logger.warning("Link budget preconditions violated: %s", "; ".join(warnings) or "non-finite result")
    return result


def evaluate_nr(inputs: NrCalculatorInput) -> CalculationResult:
    """Evaluate a 5G NR link budget.

    Raises:
        ConfigurationError: for an unknown numerology, direction or propagation model
    """
    direction = _coerce_direction(inputs.link_direction)
    noise = compute_noise_floor(inputs.num_resource_blocks, subcarrier_spacing_hz(inputs.numerology))
    geometry = LinkGeometry(
        distance_m=inputs.cell_radius_m,
        tx_height_m=inputs.gnodeb_antenna_height_m,
        rx_height_m=inputs.ut_antenna_height_m,
        frequency_mhz=inputs.frequency_mhz,
    )
    propagation_loss = nr_path_loss_db(inputs.propagation_model, geometry)

    gnodeb = StationSide(
        tx_power_dbm=inputs.gnodeb_tx_power_dbm,
        cable_loss_db=inputs.gnodeb_cable_loss_db,
        tx_antenna_gain_dbi=inputs.gnodeb_antenna_gain_dbi,
        rx_antenna_gain_dbi=inputs.gnodeb_antenna_gain_dbi,
    )
    ut = StationSide(
        tx_power_dbm=inputs.ut_tx_power_dbm,
        cable_loss_db=inputs.ut_cable_loss_db,
        tx_antenna_gain_dbi=inputs.ut_antenna_gain_dbi,
        rx_antenna_gain_dbi=inputs.ut_antenna_gain_dbi,
    )
    budget = LinkBudgetEvaluator.evaluate(
        direction=direction,
        thermal_noise_dbm=noise.thermal_noise_dbm,
        propagation_loss_db=propagation_loss,
        margins=inputs.margins,
        base_station_noise_figure_db=inputs.gnodeb_noise_figure_db,
        target_sinr_db=inputs.target_sinr_db,
        base_station=gnodeb,
        terminal=ut,
    )
    warnings = _precondition_warnings(geometry, inputs.num_resource_blocks)
    return _build_result(noise, propagation_loss, budget, geometry, inputs.ut_tx_power_dbm, warnings)


def evaluate_lte(inputs: LteCalculatorInput) -> CalculationResult:
    """Evaluate an LTE link budget.

    The propagation model is used exactly as given; call
    :func:`ranlink.rf.propagation.auto_select_model_family` beforehand to
    follow the frequency.

    Raises:
        ConfigurationError: for an unknown bandwidth, direction or propagation model
    """
    direction = _coerce_direction(inputs.link_direction)
    resource_blocks = lte_resource_blocks(inputs.bandwidth)
    noise = compute_noise_floor(resource_blocks)
    geometry = LinkGeometry(
        distance_m=inputs.cell_radius_m,
        tx_height_m=inputs.enodeb_antenna_height_m,
        rx_height_m=inputs.ue_antenna_height_m,
        frequency_mhz=inputs.frequency_mhz,
    )
    propagation_loss = lte_path_loss_db(inputs.propagation_model, geometry)

    enodeb = StationSide(
        tx_power_dbm=inputs.enodeb_tx_power_dbm,
        cable_loss_db=inputs.enodeb_cable_loss_db,
        tx_antenna_gain_dbi=inputs.enodeb_antenna_gain_dbi,
        rx_antenna_gain_dbi=inputs.enodeb_antenna_gain_dbi,
    )
    ue = StationSide(
        tx_power_dbm=inputs.ue_tx_power_dbm,
        cable_loss_db=inputs.ue_cable_loss_db,
        tx_antenna_gain_dbi=inputs.ue_antenna_gain_dbi,
        rx_antenna_gain_dbi=inputs.ue_rx_antenna_gain_dbi,
    )
    budget = LinkBudgetEvaluator.evaluate(
        direction=direction,
        thermal_noise_dbm=noise.thermal_noise_dbm,
        propagation_loss_db=propagation_loss,
        margins=inputs.margins,
        base_station_noise_figure_db=inputs.enodeb_noise_figure_db,
        target_sinr_db=inputs.target_sinr_db,
        base_station=enodeb,
        terminal=ue,
    )
    warnings = _precondition_warnings(geometry, resource_blocks)
    return _build_result(noise, propagation_loss, budget, geometry, inputs.ue_tx_power_dbm, warnings)


def evaluate(inputs: CalculatorInput) -> CalculationResult:
    if isinstance(inputs, NrCalculatorInput):
        return evaluate_nr(inputs)
    if isinstance(inputs, LteCalculatorInput):
        return evaluate_lte(inputs)
    raise ConfigurationError("calculator input", type(inputs).__name__)
