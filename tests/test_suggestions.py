from __future__ import annotations

import pytest
import requests

from ranlink.exceptions import SuggestionServiceError
from ranlink.services.calculator import evaluate
from ranlink.services.presets import Technology, default_lte_input, default_nr_input
from ranlink.services.suggestions import (
    USER_ERROR_MESSAGE,
    SuggestionClient,
    build_prompt,
    parse_suggestions,
    summarize_lte,
    summarize_nr,
)

ANSWER = """Here are three suggestions:

1. **Raise the antenna:** A higher mast lowers the path loss.
2. **Use a lower band:** Propagation loss grows with frequency.
3. Reduce the cell radius to close the link.
"""


class FakeResponse:
    def __init__(self, payload=None, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Error")

    def json(self):
        if self.payload is None:
            raise ValueError("no JSON")
        return self.payload


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


def _gemini_payload(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def test_nr_summary_uses_uplink_transmitter():
    inputs = default_nr_input()
    summary = summarize_nr(inputs, evaluate(inputs))
    assert summary.link_direction == "UL"
    assert summary.tx_power_dbm == "23"
    assert summary.rx_antenna_gain_dbi == "17"
    assert summary.other_losses_db == "20.50"
    assert summary.propagation_loss_db == "103.88"
    assert summary.status == "Pass"


def test_prompt_contains_formatted_values():
    inputs = default_lte_input()
    prompt = build_prompt(Technology.LTE, summarize_lte(inputs, evaluate(inputs)))
    assert "expert for LTE technology" in prompt
    assert "- Propagation Model: COST 231 Hata Urban" in prompt
    assert "- Final Link Budget: -119.20 dBm" in prompt
    assert "- Radio Channel Status: Fail" in prompt


def test_parse_numbered_answer():
    suggestions = parse_suggestions(ANSWER)
    assert [s.title for s in suggestions] == ["Raise the antenna", "Use a lower band", "Suggestion 3"]
    assert suggestions[0].description == "A higher mast lowers the path loss."
    assert suggestions[2].description == "Reduce the cell radius to close the link."


def test_parse_without_list():
    assert parse_suggestions("No numbered items here.") == []


def test_client_posts_prompt():
    session = FakeSession(FakeResponse(_gemini_payload(ANSWER)))
    client = SuggestionClient(api_key="secret", model="test-model", base_url="https://llm.example/v1/", session=session)
    inputs = default_nr_input()
    suggestions = client.suggest(Technology.NR, summarize_nr(inputs, evaluate(inputs)))
    assert len(suggestions) == 3
    url, kwargs = session.calls[0]
    assert url == "https://llm.example/v1/models/test-model:generateContent"
    assert kwargs["params"] == {"key": "secret"}
    assert "Target SINR: -6 dB" in kwargs["json"]["contents"][0]["parts"][0]["text"]


def test_client_without_key_does_not_call_out():
    session = FakeSession(FakeResponse(_gemini_payload(ANSWER)))
    client = SuggestionClient(api_key="", session=session)
    with pytest.raises(SuggestionServiceError) as exc:
        client.generate("prompt")
    assert str(exc.value) == USER_ERROR_MESSAGE
    assert session.calls == []


@pytest.mark.parametrize(
    "session",
    [
        FakeSession(error=requests.exceptions.Timeout("timed out")),
        FakeSession(FakeResponse({"error": "quota"}, status_code=429)),
        FakeSession(FakeResponse({"candidates": []})),
        FakeSession(FakeResponse(None)),
    ],
)
def test_client_failures_surface_user_message(session):
    client = SuggestionClient(api_key="secret", session=session)
    with pytest.raises(SuggestionServiceError, match="Failed to get suggestions"):
        client.generate("prompt")
