from __future__ import annotations

import os
import threading
from typing import Dict, Optional
import httpx

__all__ = [
    "get_http_client",
    "close_http_client",
]

_client: Optional[httpx.Client] = None
_lock = threading.Lock()


def _to_bool(s: Optional[str], default: bool) -> bool:
    if s is None:
        return default
    return s.strip().lower() in {"1", "true", "yes", "y", "on"}


def get_http_client(timeout_s: Optional[float] = None) -> httpx.Client:
    """
    Lazy singleton httpx.Client shared by outbound integrations (LLM gateway).
    Honors:
      HTTP_TIMEOUT_S    (float, default 30.0; `timeout_s` wins when given)
      HTTP_VERIFY_TLS   (bool 1/0, default True)
      HTTP_PROXY        (URL, optional)
      HTTP_HEADERS_JSON (comma-sep 'K:V' pairs)
    """
    global _client
    if _client is not None:
        return _client

    with _lock:
        if _client is None:
            _client = _build_client(timeout_s)
        return _client


def _build_client(timeout_s: Optional[float]) -> httpx.Client:
    timeout = timeout_s if timeout_s is not None else float(os.getenv("HTTP_TIMEOUT_S", "30.0"))
    verify = _to_bool(os.getenv("HTTP_VERIFY_TLS"), True)
    proxy = os.getenv("HTTP_PROXY") or None

    headers: Dict[str, str] = {"accept": "application/json"}
    extra = os.getenv("HTTP_HEADERS_JSON") or ""
    # allow "X-Api-Key: abc, X-Client: sahay"
    for part in [p.strip() for p in extra.split(",") if p.strip()]:
        if ":" in part:
            k, v = part.split(":", 1)
            headers[k.strip()] = v.strip()

    return httpx.Client(timeout=timeout, verify=verify, proxy=proxy, headers=headers)


def close_http_client() -> None:
    global _client
    with _lock:
        if _client is not None:
            _client.close()
            _client = None
