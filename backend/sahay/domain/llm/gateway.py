"""
Language-model gateway.

Thin wrapper over an OpenAI-compatible chat-completions endpoint. SDK exceptions are
translated into the GatewayError family so the HTTP layer can map them to 429/401/502/503
with a user-visible message.
"""

from __future__ import annotations

import logging
import threading
from functools import lru_cache
from typing import Any, Dict, List, Optional, Sequence

import httpx
import openai
from openai import OpenAI

from sahay.core.config import Settings, get_settings
from sahay.domain.llm.errors import (
    GatewayAuthError,
    GatewayError,
    GatewayNotConfiguredError,
    RateLimitedError,
)
from sahay.utils.http import get_http_client
from sahay.utils.time import monotonic_ms

log = logging.getLogger(__name__)

__all__ = ["LLMGateway", "get_gateway"]

Message = Dict[str, str]


def _extract_content(resp: Any) -> str:
    choices = getattr(resp, "choices", None) or []
    if not choices:
        return ""
    msg = getattr(choices[0], "message", None)
    return (getattr(msg, "content", None) or "").strip()


class LLMGateway:
    def __init__(
        self,
        api_key: Optional[str],
        base_url: str,
        model: str,
        temperature: float = 0.7,
        max_retries: int = 2,
        timeout_s: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self._api_key = api_key
        self._base_url = base_url
        self._max_retries = max_retries
        self._timeout_s = timeout_s
        self._http_client = http_client
        self._client: Optional[OpenAI] = None
        self._bound: Optional[httpx.Client] = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: Settings, http_client: Optional[httpx.Client] = None) -> "LLMGateway":
        return cls(
            api_key=settings.LLM_API_KEY,
            base_url=settings.LLM_BASE_URL,
            model=settings.LLM_MODEL,
            temperature=settings.LLM_TEMPERATURE,
            max_retries=settings.LLM_MAX_RETRIES,
            timeout_s=settings.LLM_TIMEOUT_S,
            http_client=http_client,
        )

    @property
    def configured(self) -> bool:
        return bool(self._api_key)

    def _sdk(self) -> OpenAI:
        if not self._api_key:
            raise GatewayNotConfiguredError("LLM_API_KEY not configured")
        with self._lock:
            # the shared client is closed on shutdown; rebind to whichever one is live now
            http = self._http_client
            if http is None or http.is_closed:
                http = get_http_client(self._timeout_s)
            if self._client is None or self._bound is not http:
                self._client = OpenAI(
                    api_key=self._api_key,
                    base_url=self._base_url,
                    max_retries=self._max_retries,
                    http_client=http,
                )
                self._bound = http
            return self._client

    def complete(
        self,
        messages: Sequence[Message],
        system: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> str:
        """
        Send one chat-completions request and return the assistant text ("" when the
        upstream returns no content).
        """
        payload: List[Message] = []
        if system:
            payload.append({"role": "system", "content": system})
        payload.extend({"role": m["role"], "content": m["content"]} for m in messages)

        cli = self._sdk()
        started = monotonic_ms()
        try:
            resp = cli.chat.completions.create(
                model=self.model,
                messages=payload,  # type: ignore[arg-type]
                temperature=self.temperature if temperature is None else temperature,
            )
        except openai.RateLimitError as e:
            log.warning("gateway rate limited: %s", e)
            raise RateLimitedError(str(e), upstream_status=429) from e
        except (openai.AuthenticationError, openai.PermissionDeniedError) as e:
            log.error("gateway auth failure: %s", e)
            raise GatewayAuthError(str(e), upstream_status=e.status_code) from e
        except openai.APIStatusError as e:
            log.error("gateway error status=%s: %s", e.status_code, e)
            raise GatewayError(f"AI API error: {e.status_code}", upstream_status=e.status_code) from e
        except openai.APIError as e:
            # connection failures, timeouts, undecodable bodies
            log.error("gateway unreachable: %s", e)
            raise GatewayError(str(e)) from e

        content = _extract_content(resp)
        log.info(
            "gateway ok model=%s messages=%d chars=%d",
            self.model,
            len(payload),
            len(content),
            extra={"latency_ms": monotonic_ms() - started},
        )
        return content


@lru_cache(maxsize=1)
def get_gateway() -> LLMGateway:
    """Process-wide gateway built from settings. Overridden in tests via FastAPI dependency overrides."""
    return LLMGateway.from_settings(get_settings())
