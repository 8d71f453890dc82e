"""
Crisis phrase table.

Phrases are lowercase literals matched as substrings. Tier order in SCAN_ORDER is the
order the classifier walks the table; phrase order inside a tier is preserved.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Tuple, Union

from sahay.core.config import get_settings
from sahay.domain.safety.models import Severity

log = logging.getLogger(__name__)

__all__ = [
    "KeywordTable",
    "KeywordTableError",
    "SCAN_ORDER",
    "DEFAULT_KEYWORDS",
    "build_keyword_table",
    "load_keyword_table",
    "get_keyword_table",
]

KeywordTable = Mapping[Severity, Tuple[str, ...]]

SCAN_ORDER: Tuple[Severity, ...] = (Severity.HIGH, Severity.MODERATE, Severity.LOW)


class KeywordTableError(ValueError):
    """Raised when a keyword table (or its extension file) cannot be built."""


def _coerce_tier(tier: Union[str, Severity]) -> Severity:
    try:
        sev = Severity(tier.lower())
    except (AttributeError, ValueError):
        raise KeywordTableError(f"unknown severity tier: {tier!r}") from None
    if sev is Severity.NONE:
        raise KeywordTableError("the 'none' tier cannot carry phrases")
    return sev


def _clean(phrases: Iterable[str]) -> Tuple[str, ...]:
    seen = set()
    out = []
    for p in phrases:
        if not isinstance(p, str):
            raise KeywordTableError(f"phrase must be a string, got {type(p).__name__}")
        norm = p.lower()
        if not norm.strip() or norm in seen:
            continue
        seen.add(norm)
        out.append(norm)
    return tuple(out)


def build_keyword_table(mapping: Mapping[Union[str, Severity], Iterable[str]]) -> KeywordTable:
    """Normalize a tier -> phrases mapping into an immutable table (all scan tiers present)."""
    tiers = {sev: () for sev in SCAN_ORDER}
    for tier, phrases in mapping.items():
        tiers[_coerce_tier(tier)] = _clean(phrases)
    return MappingProxyType(tiers)


DEFAULT_KEYWORDS: KeywordTable = build_keyword_table({
    Severity.HIGH: [
        "suicide", "kill myself", "end my life", "want to die",
        "better off dead", "no reason to live", "goodbye forever",
    ],
    Severity.MODERATE: [
        "self-harm", "hurt myself", "cutting", "hopeless",
        "no point", "give up", "can't go on", "overdose",
    ],
    Severity.LOW: [
        "depressed", "worthless", "burden", "alone", "empty",
        "numb", "tired of living", "don't want to be here",
    ],
})


def load_keyword_table(path: Union[str, Path], base: KeywordTable = DEFAULT_KEYWORDS) -> KeywordTable:
    """
    Extend `base` with phrases from a JSON file shaped {"high": [...], "moderate": [...], "low": [...]}.
    Extra phrases are appended after the base phrases of the same tier.
    """
    p = Path(path)
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise KeywordTableError(f"cannot read keyword file {p}: {e}") from e
    if not isinstance(raw, dict):
        raise KeywordTableError(f"keyword file {p} must hold a JSON object")

    merged = {sev: list(phrases) for sev, phrases in base.items()}
    for tier, phrases in raw.items():
        if isinstance(phrases, str) or not isinstance(phrases, list):
            raise KeywordTableError(f"tier {tier!r} in {p} must be a list of phrases")
        merged.setdefault(_coerce_tier(tier), []).extend(phrases)
    table = build_keyword_table(merged)
    log.info(
        "loaded crisis keywords from %s (%s)",
        p,
        ", ".join(f"{sev.value}={len(table[sev])}" for sev in SCAN_ORDER),
    )
    return table


@lru_cache(maxsize=1)
def get_keyword_table() -> KeywordTable:
    """Process-wide table: defaults, extended by CRISIS_KEYWORDS_FILE when set. Loaded once."""
    path: Optional[str] = get_settings().CRISIS_KEYWORDS_FILE
    if not path:
        return DEFAULT_KEYWORDS
    return load_keyword_table(path)
