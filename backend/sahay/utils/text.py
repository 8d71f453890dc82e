from __future__ import annotations

import re

__all__ = [
    "truncate",
    "strip_code_fence",
]

_FENCE_RE = re.compile(r"^```[a-zA-Z0-9_-]*\s*\n?(.*?)\n?```$", re.S)

def truncate(text: str, max_len: int, ellipsis: str = "…") -> str:
    if not text or max_len <= 0:
        return ""
    if len(text) <= max_len:
        return text
    cut = max_len - len(ellipsis)
    return (text[:cut].rsplit(" ", 1)[0] if cut > 4 else text[:cut]) + ellipsis

def strip_code_fence(s: str) -> str:
    """Unwrap a ```json ... ``` (or bare ```) block; other text is only trimmed."""
    t = (s or "").strip()
    m = _FENCE_RE.match(t)
    return m.group(1).strip() if m else t
