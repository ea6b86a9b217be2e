from __future__ import annotations

import dataclasses
from typing import Tuple

from ...rf.models import CalculationResult, LteCalculatorInput, NrCalculatorInput
from ...rf.propagation import auto_select_model_family
from ...services.calculator import evaluate_lte, evaluate_nr
from ...services.presets import apply_vendor_preset
from .schemas import LteEvaluateRequest, NrEvaluateRequest


def run_nr(req: NrEvaluateRequest) -> Tuple[NrCalculatorInput, CalculationResult]:
    inputs = apply_vendor_preset(req.to_input(), req.vendor)
    return inputs, evaluate_nr(inputs)


def run_lte(req: LteEvaluateRequest) -> Tuple[LteCalculatorInput, CalculationResult]:
    """Apply the vendor preset and, if requested, the frequency-driven model family switch."""
    inputs = apply_vendor_preset(req.to_input(), req.vendor)
    if req.auto_select_model:
        model = auto_select_model_family(inputs.frequency_mhz, inputs.propagation_model)
        inputs = dataclasses.replace(inputs, propagation_model=model)
    return inputs, evaluate_lte(inputs)
