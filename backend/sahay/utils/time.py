from __future__ import annotations

import time as _time
from datetime import datetime, timezone
from typing import Optional

__all__ = [
    "utc_now",
    "utc_iso",
    "monotonic_ms",
]

def utc_now() -> datetime:
    """Timezone-aware UTC now."""
    return datetime.now(timezone.utc)

def utc_iso(dt: Optional[datetime] = None) -> str:
    """RFC3339 / ISO8601 with trailing Z."""
    dt = dt or utc_now()
    return dt.isoformat().replace("+00:00", "Z")

def monotonic_ms() -> int:
    """Monotonic clock in milliseconds (gateway latency logs)."""
    return int(_time.monotonic() * 1000)
