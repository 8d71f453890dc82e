"""
Chat turn pipeline.

reply(): classify the newest user turn -> escalation decision -> panel transition ->
system prompt (with safety addendum when escalated) -> gateway -> tagged assistant reply.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence

from sahay.domain.llm import prompts
from sahay.domain.llm.gateway import LLMGateway
from sahay.domain.llm.parsing import ParseError, parse_model
from sahay.domain.safety.escalation import EscalationDecision, PanelState
from sahay.domain.safety.models import ClassificationResult
from sahay.domain.safety.service import assess
from sahay.schemas.chat import ChatMessage, Summary, SummaryOut

log = logging.getLogger(__name__)

__all__ = ["ChatService", "ChatTurn", "ConversationError", "FALLBACK_REPLY", "FALLBACK_SUMMARY", "MIN_SUMMARY_MESSAGES"]

FALLBACK_REPLY = "I'm having trouble responding right now. Please try again."

MIN_SUMMARY_MESSAGES = 3

FALLBACK_SUMMARY = Summary(
    reflection=(
        "We explored some important feelings and challenges together. "
        "Remember, it's okay to take things one step at a time."
    ),
    action_items=[
        "Take 5 minutes today for a grounding exercise",
        "Check in with yourself about how you're feeling",
        "Consider starting a Pathway if something resonated with you",
    ],
)


class ConversationError(ValueError):
    """The supplied conversation can't be used for the requested operation."""


@dataclass(frozen=True)
class ChatTurn:
    reply: ChatMessage
    classification: ClassificationResult
    decision: EscalationDecision
    panel: PanelState


def outbound_history(messages: Sequence[ChatMessage]) -> List[dict]:
    """Role/content pairs for the gateway; leading assistant turns (greetings) are dropped."""
    start = 0
    while start < len(messages) and messages[start].role == "assistant":
        start += 1
    return [{"role": m.role, "content": m.content} for m in messages[start:]]


class ChatService:
    def __init__(self, gateway: LLMGateway) -> None:
        self.gateway = gateway

    def reply(self, messages: Sequence[ChatMessage], panel: PanelState = PanelState.IDLE) -> ChatTurn:
        if not messages or messages[-1].role != "user":
            raise ConversationError("the last message must come from the user")

        safety = assess(messages[-1].content, panel)
        system = prompts.build_system_prompt(safety.decision.augment_prompt)

        text = self.gateway.complete(outbound_history(messages), system=system)
        if not text:
            log.warning("gateway returned empty content; using fallback reply")
            text = FALLBACK_REPLY

        return ChatTurn(
            reply=ChatMessage(role="assistant", content=text, is_crisis=safety.decision.flag_message),
            classification=safety.result,
            decision=safety.decision,
            panel=safety.panel,
        )

    def summarize(self, messages: Sequence[ChatMessage]) -> SummaryOut:
        if len(messages) < MIN_SUMMARY_MESSAGES:
            raise ConversationError("Have a bit more conversation before getting a summary.")

        conversation = "\n\n".join(f"{m.role}: {m.content}" for m in messages)
        raw = self.gateway.complete(
            [{"role": "user", "content": prompts.summary_prompt(conversation)}],
            system=prompts.SUMMARY_SYSTEM,
        )
        parsed = parse_model(raw, Summary)
        if isinstance(parsed, ParseError):
            log.warning("summary parse failed (%s): %r", parsed.reason, parsed.short())
            return SummaryOut(**FALLBACK_SUMMARY.model_dump(), degraded=True)
        return SummaryOut(**parsed.value.model_dump())
