"""
HTTP surface tests: FastAPI TestClient with the gateway dependency overridden.
"""

from __future__ import annotations

import json
import os
import sys

THIS_DIR = os.path.dirname(__file__)
PKG_ROOT = os.path.abspath(os.path.join(THIS_DIR, ".."))
if PKG_ROOT not in sys.path:
    sys.path.insert(0, PKG_ROOT)

import httpx
import pytest
from fastapi.testclient import TestClient
from conftest import FakeGateway

from sahay.domain.llm.errors import GatewayNotConfiguredError, RateLimitedError
from sahay.domain.llm.gateway import LLMGateway, get_gateway
from sahay.interfaces.http.main import app
from sahay.utils import http as http_utils

GREETING = {"role": "assistant", "content": "Namaste! How are you feeling today?"}


@pytest.fixture
def gateway():
    gw = FakeGateway()
    app.dependency_overrides[get_gateway] = lambda: gw
    yield gw
    app.dependency_overrides.clear()


@pytest.fixture
def client(gateway):
    return TestClient(app)


class TestHealth:
    def test_ping(self, client):
        assert client.get("/_/ping").json() == {"ok": True}

    def test_healthz(self, client):
        body = client.get("/health/healthz").json()
        assert body["ok"] is True
        assert body["gateway_configured"] is True
        assert body["keyword_counts"] == {"high": 7, "moderate": 8, "low": 8}


class TestSafetyRoutes:
    def test_classify_get(self, client):
        body = client.get("/safety/classify", params={"text": "I want to die"}).json()
        assert body["severity"] == "high"
        assert body["is_detected"] is True
        assert body["matched_keywords"] == ["want to die"]
        assert body["escalation"]["show_resources"] is True

    def test_classify_post_low(self, client):
        body = client.post("/safety/classify", json={"text": "I'm a burden"}).json()
        assert body["severity"] == "low"
        assert body["escalation"] == {
            "show_resources": False,
            "augment_prompt": False,
            "flag_message": False,
            "record": True,
        }

    def test_classify_empty(self, client):
        body = client.get("/safety/classify").json()
        assert body["severity"] == "none"
        assert body["matched_keywords"] == []

    def test_resources(self, client):
        items = client.get("/safety/resources").json()
        assert items[0]["name"] == "AASRA"
        assert items[0]["tel"] == "tel:+919152987821"

    def test_crisis_message(self, client):
        msg = client.get("/safety/crisis", params={"region": "UK"}).json()["message"]
        assert "Samaritans" in msg

    def test_panel_round_trip(self, client):
        opened = client.post("/safety/panel/observe", json={"panel": "idle", "text": "so hopeless"}).json()
        assert opened["panel"] == "flagged"
        assert opened["show_resources"] is True
        assert len(opened["resources"]) == 4

        closed = client.post("/safety/panel/dismiss", json={"panel": opened["panel"]}).json()
        assert closed == {"panel": "dismissed", "show_resources": False, "resources": []}

    def test_panel_rejects_unknown_state(self, client):
        r = client.post("/safety/panel/dismiss", json={"panel": "open"})
        assert r.status_code == 422
        assert r.json()["error"] == "validation_error"


class TestChatRoutes:
    def test_crisis_chat(self, client, gateway):
        gateway.replies.append("I'm here with you. Are you safe right now?")
        r = client.post("/chat", json={"messages": [GREETING, {"role": "user", "content": "I want to end my life"}]})
        assert r.status_code == 200
        body = r.json()
        assert body["reply"] == {
            "role": "assistant",
            "content": "I'm here with you. Are you safe right now?",
            "is_crisis": True,
        }
        assert body["classification"]["severity"] == "high"
        assert body["panel"] == "flagged"
        assert body["show_resources"] is True
        assert [x["name"] for x in body["resources"]][0] == "AASRA"
        assert body["created_at"].endswith("Z")
        assert "IMPORTANT: The user may be experiencing a mental health crisis." in gateway.calls[0]["system"]

    def test_calm_chat_keeps_panel(self, client, gateway):
        gateway.replies.append("Nice!")
        body = client.post(
            "/chat",
            json={"messages": [{"role": "user", "content": "Topped my quiz today"}], "panel": "dismissed"},
        ).json()
        assert body["panel"] == "dismissed"
        assert body["show_resources"] is False
        assert body["resources"] == []
        assert body["reply"]["is_crisis"] is False

    def test_last_message_from_assistant_is_400(self, client):
        r = client.post("/chat", json={"messages": [GREETING]})
        assert r.status_code == 400
        assert r.json()["error"] == "conversation_error"

    def test_empty_messages_is_422(self, client):
        assert client.post("/chat", json={"messages": []}).status_code == 422

    def test_rate_limit_maps_to_429(self, client, gateway):
        gateway.replies.append(RateLimitedError("upstream said 429"))
        r = client.post("/chat", json={"messages": [{"role": "user", "content": "hi"}]})
        assert r.status_code == 429
        body = r.json()
        assert body["error"] == "rate_limited"
        assert body["message"] == "We're experiencing high demand. Please try again in a minute."
        assert "upstream" not in body["message"]
        assert body["request_id"]

    def test_not_configured_maps_to_503(self, client, gateway):
        gateway.replies.append(GatewayNotConfiguredError("LLM_API_KEY not configured"))
        r = client.post("/chat", json={"messages": [{"role": "user", "content": "hi"}]})
        assert r.status_code == 503

    def test_summarize(self, client, gateway):
        gateway.replies.append(json.dumps({"reflection": "You showed up for yourself.", "action_items": ["Walk"]}))
        msgs = [GREETING, {"role": "user", "content": "stressed"}, {"role": "assistant", "content": "breathe"}]
        body = client.post("/chat/summarize", json={"messages": msgs}).json()
        assert body == {"reflection": "You showed up for yourself.", "action_items": ["Walk"], "degraded": False}

    def test_summarize_too_short(self, client):
        r = client.post("/chat/summarize", json={"messages": [GREETING]})
        assert r.status_code == 400
        assert "more conversation" in r.json()["message"]


class TestPlanRoutes:
    def test_pathway(self, client, gateway):
        gateway.replies.append(json.dumps({"pathway": [{"title": "Day 1", "actions": ["Rest"]}]}))
        body = client.post("/plans/pathway", json={"goal": "beat exam anxiety", "days": 1}).json()
        assert body == {"pathway": [{"title": "Day 1", "actions": ["Rest"]}], "degraded": False}

    def test_pathway_validation(self, client):
        assert client.post("/plans/pathway", json={"goal": "x", "days": 0}).status_code == 422

    def test_clarity_degraded(self, client, gateway):
        gateway.replies.append("I think you should follow your heart.")
        body = client.post("/plans/clarity", json={"career_prompt": "MBA or job?"}).json()
        assert body["degraded"] is True
        assert len(body["roadmap"]) == 2

    def test_schedule(self, client, gateway):
        gateway.replies.append(json.dumps({"nudges": [
            {"type": "balance", "title": "Good spacing", "description": "Breaks between classes.", "emoji": "🌿", "actions": ["Keep it up"]},
        ]}))
        events = [{"title": "Maths", "start": "2026-10-20T09:00:00+05:30"}]
        body = client.post("/plans/schedule", json={"events": events}).json()
        assert body["nudges"][0]["type"] == "balance"


class TestErrorBodies:
    @pytest.mark.parametrize("method,path,status", [
        ("get", "/no/such/route", 404),
        ("get", "/chat", 405),
    ])
    def test_routing_errors_are_structured(self, client, method, path, status):
        r = getattr(client, method)(path)
        assert r.status_code == status
        body = r.json()
        assert body["error"] == "http_error"
        assert body["status_code"] == status
        assert body["request_id"]


class TestLifespan:
    def test_gateway_works_across_restarts(self, monkeypatch):
        reply = {
            "id": "chatcmpl-test",
            "object": "chat.completion",
            "created": 1700000000,
            "model": "google/gemini-2.5-flash",
            "choices": [{"index": 0, "message": {"role": "assistant", "content": "Hello again"}, "finish_reason": "stop"}],
        }
        transport = httpx.MockTransport(lambda r: httpx.Response(200, json=reply))
        monkeypatch.setattr(http_utils, "_build_client", lambda timeout_s: httpx.Client(transport=transport))
        http_utils.close_http_client()

        gw = LLMGateway(api_key="test-key", base_url="https://gateway.test/v1", model="m", max_retries=0)
        app.dependency_overrides[get_gateway] = lambda: gw
        try:
            for _ in range(2):
                with TestClient(app) as c:
                    r = c.post("/chat", json={"messages": [{"role": "user", "content": "hi"}]})
                    assert r.status_code == 200
                    assert r.json()["reply"]["content"] == "Hello again"
        finally:
            app.dependency_overrides.clear()

    def test_shutdown_drops_cached_gateway(self):
        before = get_gateway()
        with TestClient(app):
            pass
        assert get_gateway() is not before
