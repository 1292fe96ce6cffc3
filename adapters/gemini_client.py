# adapters/gemini_client.py
"""
Gemini enrichment with an offline fallback.

No key, HTTP failure or an unparseable answer all end in the deterministic
offline text from impact_engine.insights; callers always get a report.
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import requests

from impact_engine.insights import extract_recommendations, offline_analysis, offline_mitigation, summarize
from impact_engine.schemas import AnalysisReport, AsteroidData, ImpactPrediction, MitigationPlan
from impact_engine.utils import iso_z

log = logging.getLogger(__name__)

GEMINI_API_KEY = os.getenv("GEMINI_API_KEY")
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.0-flash")
GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

_PLACEHOLDER_KEYS = {"", "your_gemini_api_key_here", "your_actual_gemini_api_key_here"}


class GeminiClient:
    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, timeout: float = 20.0):
        self.api_key = api_key if api_key is not None else GEMINI_API_KEY
        self.model = model or GEMINI_MODEL
        self.timeout = timeout

    @property
    def enabled(self) -> bool:
        return bool(self.api_key) and self.api_key not in _PLACEHOLDER_KEYS

    def generate(self, prompt: str, temperature: float = 0.4, max_tokens: int = 1024) -> str:
        r = requests.post(
            GEMINI_URL.format(model=self.model),
            params={"key": self.api_key},
            json={
                "contents": [{"parts": [{"text": prompt}]}],
                "generationConfig": {"temperature": temperature, "maxOutputTokens": max_tokens},
            },
            timeout=self.timeout,
        )
        r.raise_for_status()
        text = (r.json().get("candidates") or [{}])[0].get("content", {}).get("parts", [{}])[0].get("text", "")
        if not text.strip():
            raise ValueError("empty Gemini response")
        return text

    def analyze(self, a: AsteroidData, prediction: Optional[ImpactPrediction] = None) -> AnalysisReport:
        offline = offline_analysis(a, prediction)
        if not self.enabled:
            return offline
        try:
            text = self.generate(_analysis_prompt(a, prediction))
        except Exception as e:
            log.warning("Gemini analysis failed for %r, using offline report: %s", a.name, e)
            return offline
        return AnalysisReport(
            analysis=text,
            # the label stays ours; the model only writes prose
            risk_level=offline.risk_level,
            recommendations=extract_recommendations(text) or offline.recommendations,
            timestamp=iso_z(datetime.now(timezone.utc)),
            source="gemini",
        )

    def mitigation(self, a: AsteroidData, prediction: Optional[ImpactPrediction] = None) -> MitigationPlan:
        if not self.enabled:
            return offline_mitigation(a, prediction)
        try:
            text = self.generate(_mitigation_prompt(a, prediction), temperature=0.3, max_tokens=2048)
            data = _json_block(text)
            data.setdefault("timestamp", iso_z(datetime.now(timezone.utc)))
            data["source"] = "gemini"
            return MitigationPlan.model_validate(data)
        except Exception as e:
            log.warning("Gemini mitigation failed for %r, using offline plan: %s", a.name, e)
            return offline_mitigation(a, prediction)


def _json_block(text: str) -> Dict[str, Any]:
    """Parse the first {...} block, tolerating ``` fences around it."""
    start, end = text.find("{"), text.rfind("}")
    if start < 0 or end <= start:
        raise ValueError("no JSON object in response")
    return json.loads(text[start:end + 1])


def _facts(a: AsteroidData, p: Optional[ImpactPrediction]) -> str:
    s = summarize(a)
    lines = [
        f"- Name: {s.name}",
        f"- Size: {s.size} (~{s.avg_diameter} m)",
        f"- Miss distance: {s.miss_distance_au:.6f} AU ({s.distance})",
        f"- Velocity: {s.velocity:.2f} km/s",
        f"- Approach date: {s.approach_date}",
        f"- Orbit class: {s.orbit_class}",
        f"- Potentially hazardous: {s.hazardous}",
    ]
    if p is not None:
        lines += [
            f"- Estimated impact probability: {p.impact_probability:.4f}",
            f"- Estimated energy: {p.impact_energy:.3f} MT TNT",
            f"- Affected radius: {p.affected_radius:.1f} km",
            f"- Model risk level: {p.risk_level}",
        ]
    return "\n".join(lines)


def _analysis_prompt(a: AsteroidData, p: Optional[ImpactPrediction]) -> str:
    return (
        "You are a planetary defense analyst. Write a short risk summary for this near-Earth object.\n\n"
        f"{_facts(a, p)}\n\n"
        "Cover physical characteristics, approach geometry and monitoring needs. "
        "End with recommendations as lines starting with '- '. Plain text, no markdown headers. "
        "State that the figures are educational approximations."
    )


def _mitigation_prompt(a: AsteroidData, p: Optional[ImpactPrediction]) -> str:
    return (
        "Propose planetary defense mitigation strategies for this object.\n\n"
        f"{_facts(a, p)}\n\n"
        "Respond with ONLY a JSON object with keys: strategies (list of {category, title, description, "
        "feasibility: high|medium|low, timeframe, effectiveness, requirements: [str], estimatedCost}), "
        "timeline (list of {phase, duration, description, priority: high|medium|low}), "
        "globalCoordination ([str]), publicPreparedness ([str])."
    )
