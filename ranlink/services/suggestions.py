"""AI optimisation suggestions from an external language-model service.

The engine supplies already computed, already formatted values; this module
only renders them into a prompt, sends it and splits the numbered answer
into suggestions. Failures never touch engine results.
"""
from __future__ import annotations

import logging
import re
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

import requests
from requests.adapters import HTTPAdapter, Retry

from ..core.config import settings
from ..exceptions import SuggestionServiceError
from ..rf.models import CalculationResult, LinkDirection, LteCalculatorInput, NrCalculatorInput
from .presets import Technology

logger = logging.getLogger(__name__)

USER_ERROR_MESSAGE = "Failed to get suggestions. Please check the API configuration."

_NUMBERED_LINE = re.compile(r"^\d+\.\s")
_NUMBER_PREFIX = re.compile(r"^\d+\.\s*")


@dataclass(frozen=True)
class SuggestionSummary:
    """Flattened, pre-formatted view of one evaluation."""
    link_direction: str
    cell_radius_m: str
    frequency_mhz: str
    propagation_model: str
    tx_power_dbm: str
    tx_antenna_gain_dbi: str
    rx_antenna_gain_dbi: str
    target_sinr_db: str
    other_losses_db: str
    propagation_loss_db: str
    full_path_loss_db: str
    rx_sensitivity_dbm: str
    link_budget_dbm: str
    status: str


@dataclass(frozen=True)
class Suggestion:
    title: str
    description: str


def _fmt(value: float) -> str:
    return f"{value:.2f}"


def _summarize(direction, radius, frequency, model, tx_power, tx_gain, rx_gain, sinr, result) -> SuggestionSummary:
    return SuggestionSummary(
        link_direction=LinkDirection(direction).value,
        cell_radius_m=f"{radius:g}",
        frequency_mhz=f"{frequency:g}",
        propagation_model=getattr(model, "value", str(model)),
        tx_power_dbm=f"{tx_power:g}",
        tx_antenna_gain_dbi=f"{tx_gain:g}",
        rx_antenna_gain_dbi=f"{rx_gain:g}",
        target_sinr_db=f"{sinr:g}",
        other_losses_db=_fmt(result.additional_losses_db),
        propagation_loss_db=_fmt(result.propagation_loss_db),
        full_path_loss_db=_fmt(result.full_path_loss_db),
        rx_sensitivity_dbm=_fmt(result.rx_sensitivity_dbm),
        link_budget_dbm=_fmt(result.link_budget_dbm),
        status=result.status.value,
    )


def summarize_nr(inputs: NrCalculatorInput, result: CalculationResult) -> SuggestionSummary:
    uplink = inputs.link_direction == LinkDirection.UL
    return _summarize(
        inputs.link_direction,
        inputs.cell_radius_m,
        inputs.frequency_mhz,
        inputs.propagation_model,
        inputs.ut_tx_power_dbm if uplink else inputs.gnodeb_tx_power_dbm,
        inputs.ut_antenna_gain_dbi if uplink else inputs.gnodeb_antenna_gain_dbi,
        inputs.gnodeb_antenna_gain_dbi if uplink else inputs.ut_antenna_gain_dbi,
        inputs.target_sinr_db,
        result,
    )


def summarize_lte(inputs: LteCalculatorInput, result: CalculationResult) -> SuggestionSummary:
    uplink = inputs.link_direction == LinkDirection.UL
    return _summarize(
        inputs.link_direction,
        inputs.cell_radius_m,
        inputs.frequency_mhz,
        inputs.propagation_model,
        inputs.ue_tx_power_dbm if uplink else inputs.enodeb_tx_power_dbm,
        inputs.ue_antenna_gain_dbi if uplink else inputs.enodeb_antenna_gain_dbi,
        inputs.enodeb_antenna_gain_dbi if uplink else inputs.ue_rx_antenna_gain_dbi,
        inputs.target_sinr_db,
        result,
    )


def build_prompt(technology: Technology, summary: SuggestionSummary) -> str:
    tech = Technology(technology).name
    s = summary
    return f"""Act as a senior radio network optimization expert for {tech} technology.
Analyze the following link budget calculation and provide three concise, actionable suggestions to improve the link budget, especially if the status is "Fail".
For each suggestion, briefly explain why it helps. Format the output as a numbered list.

Current Configuration:
- Link Direction: {s.link_direction}
- Cell Radius: {s.cell_radius_m} m
- Frequency: {s.frequency_mhz} MHz
- Propagation Model: {s.propagation_model}
- Transmitter Power: {s.tx_power_dbm} dBm
- Transmitter Antenna Gain: {s.tx_antenna_gain_dbi} dBi
- Receiver Antenna Gain: {s.rx_antenna_gain_dbi} dBi
- Target SINR: {s.target_sinr_db} dB
- Other losses (Body, Fading, Foliage, etc.): {s.other_losses_db} dB

Calculation Results:
- Path Loss: {s.propagation_loss_db} dB
- Full Path Loss: {s.full_path_loss_db} dB
- Reception Sensitivity: {s.rx_sensitivity_dbm} dBm
- Final Link Budget: {s.link_budget_dbm} dBm
- Radio Channel Status: {s.status}

Provide exactly three numbered suggestions. Each suggestion must start with a bolded title using markdown, like "**Suggestion Title:**".
"""


def parse_suggestions(text: str) -> List[Suggestion]:
    """Split a numbered markdown list into suggestions.

    Lines that are not numbered items are ignored. ``**Title:** text`` gives a
    title and description; an item without a bold title is named by position.
    """
    items = [
        _NUMBER_PREFIX.sub("", line.strip())
        for line in text.splitlines()
        if _NUMBERED_LINE.match(line)
    ]
    suggestions = []
    for index, item in enumerate(items, start=1):
        parts = item.split("**")
        title = parts[1] if len(parts) > 1 else f"Suggestion {index}"
        description = parts[2] if len(parts) > 2 else item
        suggestions.append(Suggestion(title=title.rstrip(":").strip(), description=re.sub(r"^:\s*", "", description).strip()))
    return suggestions


class SuggestionClient:
    """Client for a Gemini-compatible ``generateContent`` endpoint"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout_s: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.SUGGESTIONS_API_KEY
        self.model = model or settings.SUGGESTIONS_MODEL
        self.base_url = (base_url or settings.SUGGESTIONS_BASE_URL).rstrip("/")
        self.timeout_s = timeout_s or settings.SUGGESTIONS_TIMEOUT_S
        self.session = session or self._create_session()

    def _create_session(self) -> requests.Session:
        """Create a requests session with retry logic"""
        session = requests.Session()
        retry_strategy = Retry(
            total=settings.SUGGESTIONS_MAX_RETRIES,
            backoff_factor=1,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["POST"],
        )
        adapter = HTTPAdapter(max_retries=retry_strategy)
        session.mount("https://", adapter)
        session.mount("http://", adapter)
        return session

    @property
    def url(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    def generate(self, prompt: str) -> str:
        """Send the prompt and return the model's text answer"""
        if not self.api_key:
            logger.error("Suggestion service API key is not configured")
            raise SuggestionServiceError(USER_ERROR_MESSAGE)

        payload: Dict = {"contents": [{"parts": [{"text": prompt}]}]}
        try:
            response = self.session.post(
                self.url,
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout_s,
            )
            response.raise_for_status()
            data = response.json()
            return "".join(part.get("text", "") for part in data["candidates"][0]["content"]["parts"])
        except requests.exceptions.RequestException as e:
            logger.error(f"Suggestion request failed: {e}")
            raise SuggestionServiceError(USER_ERROR_MESSAGE) from e
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.error(f"Unexpected suggestion response format: {e}")
            raise SuggestionServiceError(USER_ERROR_MESSAGE) from e

    def suggest(self, technology: Technology, summary: SuggestionSummary) -> List[Suggestion]:
        prompt = build_prompt(technology, summary)
        logger.debug("Requesting suggestions: %s", asdict(summary))
        suggestions = parse_suggestions(self.generate(prompt))
        logger.info("Received %d suggestions", len(suggestions))
        return suggestions
