from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field, model_validator

from ...rf.models import (
    CalculationResult,
    ChannelStatus,
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
from ...services.presets import Technology, Vendor


class MarginsSchema(BaseModel):
    body_loss_db: float = Field(0.0, description="Body loss in dB")
    slow_fading_margin_db: float = Field(0.0, description="Slow fading margin in dB")
    foliage_loss_db: float = Field(0.0, description="Foliage loss in dB")
    rain_ice_margin_db: float = Field(0.0, description="Rain/ice margin in dB")
    interference_margin_db: float = Field(0.0, description="Interference margin in dB")
    coverage_type: CoverageType = Field(CoverageType.OUTDOOR, description="Outdoor or Indoor")
    building_penetration_loss_db: float = Field(20.0, description="Building penetration loss in dB (Indoor only)")

    def to_margins(self) -> Margins:
        return Margins(**self.model_dump())


class NrEvaluateRequest(BaseModel):
    """5G NR link budget request.

    Range checks here keep the engine's logarithms defined.
    """
    cell_radius_m: float = Field(700.0, gt=0, description="Cell radius in meters")
    frequency_mhz: float = Field(3410.0, gt=0, description="Centre frequency in MHz")
    link_direction: LinkDirection = Field(LinkDirection.UL)
    num_resource_blocks: int = Field(1, ge=1, le=273, description="Number of resource blocks")
    numerology: Numerology = Field(Numerology.N0, description="Numerology index (0-4)")

    gnodeb_noise_figure_db: float = Field(5.0)
    gnodeb_tx_power_dbm: float = Field(46.0)
    target_sinr_db: float = Field(-6.0)
    gnodeb_cable_loss_db: float = Field(2.0)
    gnodeb_antenna_gain_dbi: float = Field(17.0)
    gnodeb_antenna_height_m: float = Field(23.0, gt=0)

    ut_tx_power_dbm: float = Field(23.0)
    ut_cable_loss_db: float = Field(0.0)
    ut_antenna_gain_dbi: float = Field(0.0)
    ut_antenna_height_m: float = Field(1.5, gt=0)

    propagation_model: NrPropagationModel = Field(NrPropagationModel.UMA_NLOS)
    margins: MarginsSchema = Field(default_factory=MarginsSchema)
    vendor: Vendor = Field(Vendor.CUSTOM, description="Vendor preset applied over the equipment values")

    def to_input(self) -> NrCalculatorInput:
        data = self.model_dump(exclude={"margins", "vendor"})
        return NrCalculatorInput(margins=self.margins.to_margins(), **data)


class LteEvaluateRequest(BaseModel):
    cell_radius_m: float = Field(1000.0, gt=0, description="Cell radius in meters")
    frequency_mhz: float = Field(1800.0, gt=0, description="Centre frequency in MHz")
    link_direction: LinkDirection = Field(LinkDirection.UL)
    bandwidth: LteBandwidth = Field(LteBandwidth.BW10, description="Channel bandwidth in MHz")

    enodeb_noise_figure_db: float = Field(5.0)
    enodeb_tx_power_dbm: float = Field(46.0)
    target_sinr_db: float = Field(-5.0)
    enodeb_cable_loss_db: float = Field(2.0)
    enodeb_antenna_gain_dbi: float = Field(17.0)
    enodeb_antenna_height_m: float = Field(30.0, gt=0)

    ue_tx_power_dbm: float = Field(23.0)
    ue_cable_loss_db: float = Field(0.0)
    ue_antenna_gain_dbi: float = Field(0.0, description="UE transmit antenna gain (uplink)")
    ue_rx_antenna_gain_dbi: float = Field(0.0, description="UE receive antenna gain (downlink)")
    ue_antenna_height_m: float = Field(1.5, gt=0)

    propagation_model: LtePropagationModel = Field(LtePropagationModel.COST231_HATA_URBAN)
    auto_select_model: bool = Field(True, description="Switch between Okumura-Hata and COST 231 by frequency")
    margins: MarginsSchema = Field(default_factory=MarginsSchema)
    vendor: Vendor = Field(Vendor.CUSTOM)

    def to_input(self) -> LteCalculatorInput:
        data = self.model_dump(exclude={"margins", "vendor", "auto_select_model"})
        return LteCalculatorInput(margins=self.margins.to_margins(), **data)


class EvaluateResponse(BaseModel):
    subcarrier_count: int
    bandwidth_hz: float
    thermal_noise_dbm: float
    propagation_loss_db: float
    full_path_loss_db: float
    rx_sensitivity_dbm: float
    link_budget_dbm: float
    link_margin_db: float
    status: ChannelStatus
    antenna_height_difference_m: float
    ut_tx_power_per_subcarrier_dbm: float
    propagation_model: str
    warnings: List[str] = []

    @classmethod
    def from_result(cls, result: CalculationResult, propagation_model) -> "EvaluateResponse":
        return cls(
            subcarrier_count=result.subcarrier_count,
            bandwidth_hz=result.bandwidth_hz,
            thermal_noise_dbm=result.thermal_noise_dbm,
            propagation_loss_db=result.propagation_loss_db,
            full_path_loss_db=result.full_path_loss_db,
            rx_sensitivity_dbm=result.rx_sensitivity_dbm,
            link_budget_dbm=result.link_budget_dbm,
            link_margin_db=result.link_margin_db,
            status=result.status,
            antenna_height_difference_m=result.antenna_height_difference_m,
            ut_tx_power_per_subcarrier_dbm=result.ut_tx_power_per_subcarrier_dbm,
            propagation_model=getattr(propagation_model, "value", str(propagation_model)),
            warnings=list(result.warnings),
        )


class PresetsResponse(BaseModel):
    technology: Technology
    vendors: Dict[str, Dict[str, float]]
    bands: Optional[Dict[str, float]] = None


class SuggestionsRequest(BaseModel):
    technology: Technology
    nr: Optional[NrEvaluateRequest] = None
    lte: Optional[LteEvaluateRequest] = None

    @model_validator(mode="after")
    def validate_payload(self) -> "SuggestionsRequest":
        if self.technology == Technology.NR and self.nr is None:
            raise ValueError("nr parameters are required for technology 'nr'")
        if self.technology == Technology.LTE and self.lte is None:
            raise ValueError("lte parameters are required for technology 'lte'")
        return self


class SuggestionItem(BaseModel):
    title: str
    description: str


class SuggestionsResponse(BaseModel):
    technology: Technology
    suggestions: List[SuggestionItem]
    evaluation: EvaluateResponse
