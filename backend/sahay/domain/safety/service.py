"""
Safety facade used by the chat pipeline and the HTTP layer.

Public API:
- classify(text) -> ClassificationResult
- classify_async(text) -> ClassificationResult
- is_crisis(severity) -> bool
- assess(text, panel) -> SafetyAssessment
- crisis_message(context, region) -> str
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List

from sahay.domain.safety.classifier import classify, classify_async, is_crisis
from sahay.domain.safety.escalation import (
    EscalationDecision,
    PanelState,
    decide,
    observe,
    resources_visible,
)
from sahay.domain.safety.models import ClassificationResult, Severity
from sahay.domain.safety.resources import CRISIS_RESOURCES, crisis_message

__all__ = [
    "classify",
    "classify_async",
    "is_crisis",
    "crisis_message",
    "assess",
    "SafetyAssessment",
    "resource_list",
    "Severity",
    "PanelState",
    "ClassificationResult",
]

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SafetyAssessment:
    result: ClassificationResult
    decision: EscalationDecision
    panel: PanelState

    @property
    def show_resources(self) -> bool:
        return resources_visible(self.panel)


def assess(text: str, panel: PanelState = PanelState.IDLE) -> SafetyAssessment:
    """Classify one user turn, decide escalation and move the panel state."""
    result = classify(text)
    decision = decide(result)
    if decision.escalated:
        log.warning(
            "crisis escalation severity=%s matched=%s",
            result.severity.value,
            list(result.matched_keywords),
            extra={"severity": result.severity.value, "matched": list(result.matched_keywords)},
        )
    elif decision.record:
        log.info(
            "low-risk signal severity=%s matched=%s",
            result.severity.value,
            list(result.matched_keywords),
            extra={"severity": result.severity.value},
        )
    return SafetyAssessment(result=result, decision=decision, panel=observe(panel, result))


def resource_list() -> List[Dict[str, Any]]:
    return [r.to_dict() for r in CRISIS_RESOURCES]
