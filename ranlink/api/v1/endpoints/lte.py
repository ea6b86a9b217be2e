from __future__ import annotations

from fastapi import APIRouter

from ..schemas import EvaluateResponse, LteEvaluateRequest
from ..utils import run_lte

router = APIRouter()


@router.post("/evaluate", response_model=EvaluateResponse)
def evaluate(req: LteEvaluateRequest) -> EvaluateResponse:
    """
    Evaluate an LTE link budget with a Hata-family propagation model.

    The response's ``propagation_model`` is the model actually used, which
    differs from the requested one when ``auto_select_model`` switched family.
    """
    inputs, result = run_lte(req)
    return EvaluateResponse.from_result(result, inputs.propagation_model)
