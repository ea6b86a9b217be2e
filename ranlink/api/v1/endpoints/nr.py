from __future__ import annotations

from fastapi import APIRouter

from ..schemas import EvaluateResponse, NrEvaluateRequest
from ..utils import run_nr

router = APIRouter()


@router.post("/evaluate", response_model=EvaluateResponse)
def evaluate(req: NrEvaluateRequest) -> EvaluateResponse:
    """Evaluate a 5G NR link budget with a 3GPP TR 38.901 propagation model."""
    inputs, result = run_nr(req)
    return EvaluateResponse.from_result(result, inputs.propagation_model)
