"""
Keyword crisis classifier.

classify(text) lowercases the input and walks the phrase table tier by tier
(high, moderate, low). The first tier with any substring hit decides the severity;
every hit inside that tier is reported, lower tiers are not scanned.
"""

from __future__ import annotations

import asyncio
from typing import List, Optional

from sahay.domain.safety.keywords import SCAN_ORDER, KeywordTable, build_keyword_table, get_keyword_table
from sahay.domain.safety.models import NO_MATCH, ClassificationResult, Severity

__all__ = ["classify", "classify_async", "is_crisis", "ESCALATION_TIERS"]

ESCALATION_TIERS = frozenset({Severity.MODERATE, Severity.HIGH})


def classify(text: Optional[str], table: Optional[KeywordTable] = None) -> ClassificationResult:
    lowered = (text or "").lower()
    if not lowered:
        return NO_MATCH
    # caller tables may be raw mappings; the process table is already normalized
    phrases_by_tier = build_keyword_table(table) if table is not None else get_keyword_table()

    for tier in SCAN_ORDER:
        hits: List[str] = [p for p in phrases_by_tier.get(tier, ()) if p in lowered]
        if hits:
            return ClassificationResult(severity=tier, matched_keywords=tuple(hits))
    return NO_MATCH


async def classify_async(text: Optional[str], table: Optional[KeywordTable] = None) -> ClassificationResult:
    """
    Async wrapper for classify(). Offloads to a thread so very long inputs
    don't stall the event loop.
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, classify, text, table)


def is_crisis(severity: Optional[Severity]) -> bool:
    """True for the tiers that escalate (moderate, high)."""
    return severity in ESCALATION_TIERS
