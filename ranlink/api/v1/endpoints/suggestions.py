from __future__ import annotations

from fastapi import APIRouter, Depends

from ....services.presets import Technology
from ....services.suggestions import SuggestionClient, summarize_lte, summarize_nr
from ..schemas import EvaluateResponse, SuggestionItem, SuggestionsRequest, SuggestionsResponse
from ..utils import run_lte, run_nr

router = APIRouter()


def get_suggestion_client() -> SuggestionClient:
    return SuggestionClient()


@router.post("/", response_model=SuggestionsResponse)
def get_suggestions(
    req: SuggestionsRequest,
    client: SuggestionClient = Depends(get_suggestion_client),
) -> SuggestionsResponse:
    """
    Evaluate the link and ask the external language model for three
    optimisation suggestions. Service failures surface as HTTP 502.
    """
    if req.technology == Technology.NR:
        inputs, result = run_nr(req.nr)
        summary = summarize_nr(inputs, result)
    else:
        inputs, result = run_lte(req.lte)
        summary = summarize_lte(inputs, result)

    suggestions = client.suggest(req.technology, summary)

    return SuggestionsResponse(
        technology=req.technology,
        suggestions=[SuggestionItem(title=s.title, description=s.description) for s in suggestions],
        evaluation=EvaluateResponse.from_result(result, inputs.propagation_model),
    )
