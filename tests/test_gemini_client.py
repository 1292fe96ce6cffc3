import json

import pytest
import requests

import adapters.gemini_client as gc
from adapters.gemini_client import GeminiClient, _json_block
from impact_engine import predict


class _Resp:
    def __init__(self, text):
        self.text = text

    def raise_for_status(self):
        pass

    def json(self):
        return {"candidates": [{"content": {"parts": [{"text": self.text}]}}]}


@pytest.fixture
def reply(monkeypatch):
    """Swap requests.post for a canned Gemini answer; returns the captured calls."""
    calls = []

    def install(text):
        def fake_post(url, params=None, json=None, timeout=None):
            calls.append({"url": url, "params": params, "json": json})
            return _Resp(text)
        monkeypatch.setattr(gc.requests, "post", fake_post)
        return calls
    return install


class TestEnabled:

    @pytest.mark.parametrize("key", [None, "", "your_gemini_api_key_here"])
    def test_disabled(self, monkeypatch, key):
        monkeypatch.setattr(gc, "GEMINI_API_KEY", None)
        assert not GeminiClient(api_key=key).enabled

    def test_enabled(self):
        assert GeminiClient(api_key="k").enabled


class TestAnalyze:

    def test_offline_without_key(self, monkeypatch, test_rock):
        monkeypatch.setattr(gc, "GEMINI_API_KEY", None)
        r = GeminiClient().analyze(test_rock)
        assert r.source == "offline"
        assert "TestRock" in r.analysis

    def test_gemini_answer(self, reply, test_rock):
        calls = reply("TestRock is a close approacher.\n- Schedule radar\n- Refine the orbit")
        r = GeminiClient(api_key="k", model="m").analyze(test_rock, predict(test_rock))
        assert r.source == "gemini"
        assert r.recommendations == ["Schedule radar", "Refine the orbit"]
        assert r.risk_level == "high"
        assert calls[0]["params"] == {"key": "k"}
        assert calls[0]["url"].endswith("/models/m:generateContent")
        assert "TestRock" in calls[0]["json"]["contents"][0]["parts"][0]["text"]

    def test_no_bullets_keeps_offline_recommendations(self, reply, test_rock):
        reply("Nothing to list.")
        r = GeminiClient(api_key="k").analyze(test_rock)
        assert len(r.recommendations) == 5

    def test_connection_error_falls_back(self, monkeypatch, test_rock):
        def boom(*a, **kw):
            raise requests.ConnectionError("down")
        monkeypatch.setattr(gc.requests, "post", boom)
        assert GeminiClient(api_key="k").analyze(test_rock).source == "offline"

    def test_empty_answer_falls_back(self, reply, test_rock):
        reply("   ")
        assert GeminiClient(api_key="k").analyze(test_rock).source == "offline"


class TestMitigation:

    PLAN = {
        "strategies": [{
            "category": "Kinetic Impactor", "title": "Impactor", "description": "Hit it.",
            "feasibility": "high", "timeframe": "2 years", "effectiveness": "80%",
            "requirements": ["Launcher"], "estimatedCost": "$400M",
        }],
        "timeline": [{"phase": "Plan", "duration": "1 year", "description": "Design", "priority": "high"}],
        "globalCoordination": ["IAWN"],
        "publicPreparedness": ["Drills"],
    }

    def test_fenced_json(self, reply, test_rock):
        reply("```json\n" + json.dumps(self.PLAN) + "\n```")
        plan = GeminiClient(api_key="k").mitigation(test_rock)
        assert plan.source == "gemini"
        assert plan.strategies[0].estimated_cost == "$400M"
        assert plan.timestamp

    def test_bad_json_falls_back(self, reply, test_rock):
        reply("I cannot help with that.")
        plan = GeminiClient(api_key="k").mitigation(test_rock)
        assert plan.source == "offline"
        assert len(plan.strategies) == 5

    def test_invalid_plan_falls_back(self, reply, test_rock):
        reply(json.dumps({"strategies": [{"feasibility": "certain"}]}))
        assert GeminiClient(api_key="k").mitigation(test_rock).source == "offline"


def test_json_block():
    assert _json_block('noise {"a": {"b": 1}} trailing') == {"a": {"b": 1}}
    with pytest.raises(ValueError):
        _json_block("no braces")
