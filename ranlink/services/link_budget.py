from __future__ import annotations

import logging
from dataclasses import dataclass

from ..rf.models import ChannelStatus, CoverageType, LinkDirection, Margins

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StationSide:
    """Equipment on one end of the link."""
    tx_power_dbm: float  # dBm
    cable_loss_db: float  # dB
    tx_antenna_gain_dbi: float  # dBi
    rx_antenna_gain_dbi: float  # dBi


@dataclass(frozen=True)
class LinkBudget:
    rx_sensitivity_dbm: float
    full_path_loss_db: float
    link_budget_dbm: float
    status: ChannelStatus


class LinkBudgetEvaluator:
    """Assembles the link budget and issues the pass/fail verdict"""

    @classmethod
    def building_loss_db(cls, margins: Margins) -> float:
        if margins.coverage_type == CoverageType.INDOOR:
            return margins.building_penetration_loss_db
        return 0.0

    @classmethod
    def full_path_loss_db(cls, propagation_loss_db: float, margins: Margins) -> float:
        """Propagation loss plus every margin (building loss only for indoor coverage)."""
        return (
            propagation_loss_db
            + margins.body_loss_db
            + margins.slow_fading_margin_db
            + margins.foliage_loss_db
            + margins.rain_ice_margin_db
            + margins.interference_margin_db
            + cls.building_loss_db(margins)
        )

    @classmethod
    def receiver_sensitivity_dbm(
        cls,
        base_station_noise_figure_db: float,
        thermal_noise_dbm: float,
        target_sinr_db: float,
    ) -> float:
        """
        Minimum received power that meets the target SINR.

        The base station noise figure is used for both directions; the input
        set carries no terminal noise figure.
        """
        return base_station_noise_figure_db + thermal_noise_dbm + target_sinr_db

    @classmethod
    def link_budget_dbm(
        cls,
        direction: LinkDirection,
        full_path_loss_db: float,
        base_station: StationSide,
        terminal: StationSide,
    ) -> float:
        """
        Received power after all gains and losses.

        Args:
            direction: UL (terminal transmits) or DL (base station transmits)
            full_path_loss_db: Propagation loss plus margins
            base_station: Base station equipment
            terminal: Terminal equipment

        Returns:
            Link budget in dBm
        """
        if direction == LinkDirection.UL:
            tx, rx = terminal, base_station
        else:
            tx, rx = base_station, terminal
        return (
            tx.tx_power_dbm - tx.cable_loss_db + tx.tx_antenna_gain_dbi
            - full_path_loss_db
            + rx.rx_antenna_gain_dbi - rx.cable_loss_db
        )

    @classmethod
    def channel_status(cls, link_budget_dbm: float, rx_sensitivity_dbm: float) -> ChannelStatus:
        # Inclusive: a budget exactly at sensitivity closes the link
        return ChannelStatus.PASS if link_budget_dbm >= rx_sensitivity_dbm else ChannelStatus.FAIL

    @classmethod
    def evaluate(
        cls,
        direction: LinkDirection,
        thermal_noise_dbm: float,
        propagation_loss_db: float,
        margins: Margins,
        base_station_noise_figure_db: float,
        target_sinr_db: float,
        base_station: StationSide,
        terminal: StationSide,
    ) -> LinkBudget:
        full_path_loss = cls.full_path_loss_db(propagation_loss_db, margins)
        sensitivity = cls.receiver_sensitivity_dbm(base_station_noise_figure_db, thermal_noise_dbm, target_sinr_db)
        budget = cls.link_budget_dbm(direction, full_path_loss, base_station, terminal)
        status = cls.channel_status(budget, sensitivity)
        logger.debug(
            "%s budget %.2f dBm vs sensitivity %.2f dBm -> %s",
            getattr(direction, "value", direction), budget, sensitivity, status.value,
        )
        return LinkBudget(
            rx_sensitivity_dbm=sensitivity,
            full_path_loss_db=full_path_loss,
            link_budget_dbm=budget,
            status=status,
        )
