"""
Gateway + parsing tests. The real openai client runs against httpx.MockTransport,
so request shape and error translation are exercised without the network.
"""

from __future__ import annotations

import json
import os
import sys
import time
from concurrent.futures import ThreadPoolExecutor

THIS_DIR = os.path.dirname(__file__)
PKG_ROOT = os.path.abspath(os.path.join(THIS_DIR, ".."))
if PKG_ROOT not in sys.path:
    sys.path.insert(0, PKG_ROOT)

import httpx
import pytest
from pydantic import BaseModel

from sahay.domain.llm.errors import (
    GatewayAuthError,
    GatewayError,
    GatewayNotConfiguredError,
    RateLimitedError,
)
from sahay.domain.llm.gateway import LLMGateway
from sahay.domain.llm.parsing import Ok, ParseError, parse_json_payload, parse_model
from sahay.utils import http as http_utils
from sahay.utils.http import close_http_client, get_http_client
from sahay.utils.text import strip_code_fence


def _completion(content):
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "google/gemini-2.5-flash",
        "choices": [
            {
                "index": 0,
                "message": {"role": "assistant", "content": content},
                "finish_reason": "stop",
            }
        ],
    }


def _gateway(handler, api_key="test-key") -> LLMGateway:
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return LLMGateway(
        api_key=api_key,
        base_url="https://gateway.test/v1",
        model="google/gemini-2.5-flash",
        temperature=0.5,
        max_retries=0,
        http_client=client,
    )


class TestGatewayRequests:
    def test_sends_system_then_history(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["path"] = request.url.path
            seen["auth"] = request.headers.get("authorization")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_completion("  Namaste! How are you feeling?  "))

        gw = _gateway(handler)
        out = gw.complete([{"role": "user", "content": "hi"}], system="be kind")

        assert out == "Namaste! How are you feeling?"
        assert seen["path"] == "/v1/chat/completions"
        assert seen["auth"] == "Bearer test-key"
        body = seen["body"]
        assert body["model"] == "google/gemini-2.5-flash"
        assert body["temperature"] == 0.5
        assert body["messages"] == [
            {"role": "system", "content": "be kind"},
            {"role": "user", "content": "hi"},
        ]

    def test_extra_message_keys_are_not_forwarded(self):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_completion("ok"))

        _gateway(handler).complete([{"role": "user", "content": "x", "is_crisis": "no"}])
        assert seen["body"]["messages"] == [{"role": "user", "content": "x"}]

    def test_null_content_becomes_empty_string(self):
        gw = _gateway(lambda request: httpx.Response(200, json=_completion(None)))
        assert gw.complete([{"role": "user", "content": "hi"}]) == ""

    def test_configured_flag(self):
        assert _gateway(lambda r: httpx.Response(200)).configured is True
        assert _gateway(lambda r: httpx.Response(200), api_key=None).configured is False


class TestGatewayErrors:
    def _err(self, status):
        return lambda request: httpx.Response(status, json={"error": {"message": "nope"}})

    def test_rate_limited(self):
        with pytest.raises(RateLimitedError) as ei:
            _gateway(self._err(429)).complete([{"role": "user", "content": "hi"}])
        assert ei.value.status_code == 429
        assert "high demand" in ei.value.user_message

    def test_auth(self):
        with pytest.raises(GatewayAuthError) as ei:
            _gateway(self._err(401)).complete([{"role": "user", "content": "hi"}])
        assert ei.value.status_code == 401
        assert ei.value.upstream_status == 401

    def test_upstream_failure(self):
        with pytest.raises(GatewayError) as ei:
            _gateway(self._err(500)).complete([{"role": "user", "content": "hi"}])
        assert type(ei.value) is GatewayError
        assert ei.value.status_code == 502
        assert ei.value.upstream_status == 500

    def test_connection_failure(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(GatewayError) as ei:
            _gateway(handler).complete([{"role": "user", "content": "hi"}])
        assert ei.value.upstream_status is None

    def test_missing_key(self):
        def handler(request):  # pragma: no cover - must not be reached
            raise AssertionError("no request expected")

        with pytest.raises(GatewayNotConfiguredError) as ei:
            _gateway(handler, api_key=None).complete([{"role": "user", "content": "hi"}])
        assert ei.value.status_code == 503


class TestSharedClient:
    @pytest.fixture(autouse=True)
    def _fresh_client(self):
        close_http_client()
        yield
        close_http_client()

    def test_concurrent_callers_share_one_client(self, monkeypatch):
        built = []

        def build(timeout_s):
            time.sleep(0.02)
            c = httpx.Client(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
            built.append(c)
            return c

        monkeypatch.setattr(http_utils, "_build_client", build)
        with ThreadPoolExecutor(max_workers=8) as pool:
            clients = list(pool.map(lambda _: get_http_client(), range(16)))
        assert len(built) == 1
        assert all(c is clients[0] for c in clients)

    def test_gateway_rebinds_after_shared_client_closed(self, monkeypatch):
        transport = httpx.MockTransport(lambda r: httpx.Response(200, json=_completion("still here")))
        monkeypatch.setattr(http_utils, "_build_client", lambda timeout_s: httpx.Client(transport=transport))
        gw = LLMGateway(api_key="test-key", base_url="https://gateway.test/v1", model="m", max_retries=0)
        msgs = [{"role": "user", "content": "hi"}]

        assert gw.complete(msgs) == "still here"
        close_http_client()
        assert gw.complete(msgs) == "still here"

    def test_closed_injected_client_falls_back_to_shared(self, monkeypatch):
        transport = httpx.MockTransport(lambda r: httpx.Response(200, json=_completion("shared")))
        monkeypatch.setattr(http_utils, "_build_client", lambda timeout_s: httpx.Client(transport=transport))
        gw = _gateway(lambda r: httpx.Response(200, json=_completion("own")))
        msgs = [{"role": "user", "content": "hi"}]

        assert gw.complete(msgs) == "own"
        gw._http_client.close()
        assert gw.complete(msgs) == "shared"


class _Shape(BaseModel):
    reflection: str


class TestParsing:
    @pytest.mark.parametrize("raw", [
        '{"a": 1}',
        '```json\n{"a": 1}\n```',
        '```\n{"a": 1}\n```',
        '  ```JSON {"a": 1}```  ',
    ])
    def test_fenced_and_plain(self, raw):
        assert parse_json_payload(raw) == Ok({"a": 1})

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_empty(self, raw):
        r = parse_json_payload(raw)
        assert isinstance(r, ParseError)
        assert r.reason == "empty response"

    def test_invalid_json_keeps_raw_text(self):
        r = parse_json_payload("Sure! Here's your plan: {oops")
        assert isinstance(r, ParseError)
        assert r.raw == "Sure! Here's your plan: {oops"
        assert r.reason.startswith("invalid JSON")

    def test_parse_model_ok(self):
        r = parse_model('{"reflection": "you did well"}', _Shape)
        assert isinstance(r, Ok)
        assert r.value.reflection == "you did well"

    def test_parse_model_wrong_shape(self):
        r = parse_model('{"summary": "x"}', _Shape)
        assert isinstance(r, ParseError)
        assert r.reason.startswith("unexpected shape")

    def test_reshape_hook(self):
        r = parse_model('"kept"', _Shape, reshape=lambda v: {"reflection": v})
        assert isinstance(r, Ok) and r.value.reflection == "kept"

    def test_strip_code_fence_leaves_prose(self):
        assert strip_code_fence("  just text ") == "just text"
