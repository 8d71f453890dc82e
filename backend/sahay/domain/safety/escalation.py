"""
Escalation policy + crisis panel state.

moderate/high escalate: show crisis resources, add the safety addendum to the
outbound system prompt and flag the message. low is only recorded.

The crisis panel is an explicit value the caller owns:

    idle --(escalating result)--> flagged --(dismiss)--> dismissed
      ^                              ^                       |
      |                              +--(escalating result)--+
      +------------------------- reset() from anywhere
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sahay.domain.safety.classifier import is_crisis
from sahay.domain.safety.models import ClassificationResult

__all__ = [
    "EscalationDecision",
    "PanelState",
    "decide",
    "observe",
    "dismiss",
    "reset",
    "resources_visible",
]


@dataclass(frozen=True)
class EscalationDecision:
    show_resources: bool = False
    augment_prompt: bool = False
    flag_message: bool = False
    record: bool = False

    @property
    def escalated(self) -> bool:
        return self.show_resources


def decide(result: ClassificationResult) -> EscalationDecision:
    escalate = is_crisis(result.severity)
    return EscalationDecision(
        show_resources=escalate,
        augment_prompt=escalate,
        flag_message=escalate,
        record=result.is_detected,
    )


class PanelState(str, Enum):
    IDLE = "idle"
    FLAGGED = "flagged"
    DISMISSED = "dismissed"


def observe(state: PanelState, result: ClassificationResult) -> PanelState:
    """A new escalating turn (re)opens the panel; anything else leaves it alone."""
    if decide(result).show_resources:
        return PanelState.FLAGGED
    return state


def dismiss(state: PanelState) -> PanelState:
    if state is PanelState.FLAGGED:
        return PanelState.DISMISSED
    return state


def reset() -> PanelState:
    return PanelState.IDLE


def resources_visible(state: PanelState) -> bool:
    return state is PanelState.FLAGGED
