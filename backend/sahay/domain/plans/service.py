"""
Structured generators: multi-day pathways, career roadmaps and schedule nudges.

Each call parses the model output into its schema. A parse failure returns the
declared fallback with degraded=True; gateway errors propagate unchanged.
"""

from __future__ import annotations

import logging
from typing import Any, List, Sequence

from sahay.domain.llm import prompts
from sahay.domain.llm.gateway import LLMGateway
from sahay.domain.llm.parsing import ParseError, parse_model
from sahay.schemas.plans import (
    Intensity,
    Nudge,
    Nudges,
    NudgesOut,
    Pathway,
    PathwayDay,
    PathwayOut,
    Roadmap,
    RoadmapOut,
    RoadmapPath,
    ScheduleEvent,
)

log = logging.getLogger(__name__)

__all__ = ["PlansService", "FALLBACK_PATHWAY", "FALLBACK_ROADMAP", "FALLBACK_NUDGES"]

FALLBACK_PATHWAY: List[PathwayDay] = [
    PathwayDay(title="Understanding Your Goal", actions=["Reflect on why this matters to you", "Set a clear intention", "Share with a trusted friend"]),
    PathwayDay(title="Building Foundation", actions=["Try one small action today", "Notice how you feel", "Track your progress"]),
    PathwayDay(title="Developing Momentum", actions=["Increase practice time", "Connect with supportive people", "Celebrate small wins"]),
    PathwayDay(title="Overcoming Challenges", actions=["Identify obstacles", "Problem-solve with compassion", "Adjust your approach"]),
    PathwayDay(title="Sustaining Progress", actions=["Review what worked", "Plan for maintenance", "Set new goals"]),
]

FALLBACK_ROADMAP: List[RoadmapPath] = [
    RoadmapPath(
        path="Path A: Structured Exploration",
        reframe="This isn't about choosing the 'right' path. It's about exploring what energizes you.",
        actions=[
            "List your top 3 interests and research each for 30 minutes",
            "Connect with 2-3 professionals in those fields via LinkedIn",
            "Try a small project or internship in your top choice",
        ],
    ),
    RoadmapPath(
        path="Path B: Skills-First Approach",
        reframe="Focus on building transferable skills rather than committing to one career.",
        actions=[
            "Identify 3 key skills you enjoy developing",
            "Find opportunities to practice these (projects, volunteering)",
            "Talk to SAHAY about managing family expectations",
        ],
    ),
]

FALLBACK_NUDGES: List[Nudge] = [
    Nudge(
        type="balance",
        title="Protect your sleep",
        description="A steady 7-8 hours does more for recall before exams than late-night revision.",
        emoji="😴",
        actions=["Fix a lights-out time", "Keep screens away 30 minutes before bed", "Avoid caffeine after 5pm"],
    ),
    Nudge(
        type="burnout",
        title="Build breaks into study blocks",
        description="Short, planned breaks keep long study days from draining you.",
        emoji="⏸️",
        actions=["Try 50 minutes on, 10 minutes off", "Step outside once between blocks", "Do 4-4-4 breathing before starting"],
    ),
]


def _wrap_list(key: str):
    def reshape(data: Any) -> Any:
        return {key: data} if isinstance(data, list) else data
    return reshape


class PlansService:
    def __init__(self, gateway: LLMGateway) -> None:
        self.gateway = gateway

    def pathway(self, goal: str, days: int = 5, intensity: Intensity = "medium") -> PathwayOut:
        raw = self.gateway.complete(
            [{"role": "user", "content": prompts.pathway_prompt(goal, days, intensity)}],
            system=prompts.PATHWAY_SYSTEM,
        )
        parsed = parse_model(raw, Pathway, reshape=_wrap_list("pathway"))
        if isinstance(parsed, ParseError):
            log.warning("pathway parse failed (%s): %r", parsed.reason, parsed.short())
            return PathwayOut(pathway=FALLBACK_PATHWAY[:days], degraded=True)
        return PathwayOut(pathway=parsed.value.pathway)

    def clarity(self, career_prompt: str, experience_level: str = "student") -> RoadmapOut:
        raw = self.gateway.complete(
            [{"role": "user", "content": prompts.clarity_prompt(career_prompt, experience_level)}],
            system=prompts.CLARITY_SYSTEM,
        )
        parsed = parse_model(raw, Roadmap, reshape=_wrap_list("roadmap"))
        if isinstance(parsed, ParseError):
            log.warning("roadmap parse failed (%s): %r", parsed.reason, parsed.short())
            return RoadmapOut(roadmap=FALLBACK_ROADMAP, degraded=True)
        return RoadmapOut(roadmap=parsed.value.roadmap)

    def analyze_schedule(self, events: Sequence[ScheduleEvent]) -> NudgesOut:
        payload = [e.model_dump(exclude_none=True) for e in events]
        raw = self.gateway.complete(
            [{"role": "user", "content": prompts.schedule_prompt(payload)}],
            system=prompts.SCHEDULE_SYSTEM,
        )
        parsed = parse_model(raw, Nudges, reshape=_wrap_list("nudges"))
        if isinstance(parsed, ParseError):
            log.warning("schedule parse failed (%s): %r", parsed.reason, parsed.short())
            return NudgesOut(nudges=FALLBACK_NUDGES, degraded=True)
        return NudgesOut(nudges=parsed.value.nudges)
