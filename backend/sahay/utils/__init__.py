from .time import utc_now, utc_iso, monotonic_ms
from .text import truncate, strip_code_fence
from .http import get_http_client, close_http_client

__all__ = [
    "utc_now", "utc_iso", "monotonic_ms",
    "truncate", "strip_code_fence",
    "get_http_client", "close_http_client",
]
