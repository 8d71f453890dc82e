from __future__ import annotations

import json
from typing import Any, Dict, List

SYSTEM_PROMPT = """You are SAHAY, a culturally-aware wellness companion for Indian university students.

Core traits:
- Empathetic, encouraging and non-judgmental; understand Hinglish and student slang.
- Offer practical wellness strategies (mindfulness, grounding, pranayama, CBT techniques).
- Use culturally relevant examples (exam stress, parental expectations, hostel life, career pressure).
- You are NOT a medical professional; say so when appropriate.
- Keep replies concise but warm (2-4 short paragraphs).

Safety protocol: if the user mentions self-harm, suicide, harming others or severe deterioration,
acknowledge their feelings, ask gently whether they are safe right now, share AASRA
(+91-9152987821) and emergency services (112), encourage reaching out to someone they trust,
and never provide harmful instructions."""

SAFETY_ADDENDUM = """
IMPORTANT: The user may be experiencing a mental health crisis.
Respond with extra care, empathy, and ALWAYS include crisis resources.
Prioritize their safety above all else. Be direct but gentle about getting help.
"""

JSON_ONLY = "Return ONLY valid JSON (no markdown)."


def build_system_prompt(augment: bool) -> str:
    return SYSTEM_PROMPT + SAFETY_ADDENDUM if augment else SYSTEM_PROMPT


def summary_prompt(conversation: str) -> str:
    return (
        f"Summarize this wellness conversation:\n\n{conversation}\n\n"
        f'{JSON_ONLY} Format: {{"reflection": "2-3 empathetic sentences", '
        '"action_items": ["step 1", "step 2", "step 3"]}'
    )


def pathway_prompt(goal: str, days: int, intensity: str) -> str:
    return (
        f'Create a {days}-day wellness pathway for: "{goal}"\nIntensity level: {intensity}\n\n'
        f'{JSON_ONLY} Format: {{"pathway": [{{"title": "Day title", "actions": ["action 1", "action 2"]}}]}}\n'
        "Make it practical, progressive across days and relevant for Indian students."
    )


def clarity_prompt(career_prompt: str, experience_level: str) -> str:
    return (
        f'Career guidance request from a {experience_level}:\n"{career_prompt}"\n\n'
        "Give 2-3 different paths, each with a reframe and three concrete steps.\n"
        f'{JSON_ONLY} Format: {{"roadmap": [{{"path": "name", "reframe": "new perspective", '
        '"actions": ["step 1", "step 2", "step 3"]}]}'
    )


def schedule_prompt(events: List[Dict[str, Any]]) -> str:
    return (
        f"Analyze this student's upcoming calendar events: {json.dumps(events, ensure_ascii=False)}\n"
        "Look for burnout (back-to-back events), overload (exam/deadline clustering) or balance "
        "(sleep, breaks). If the schedule is empty, give general study advice.\n"
        f'{JSON_ONLY} Format: {{"nudges": [{{"type": "burnout|overload|balance", "title": "...", '
        '"description": "...", "emoji": "...", "actions": ["a", "b", "c"]}]}'
    )


PATHWAY_SYSTEM = "You are a wellness pathway generator. Always return valid JSON only."
CLARITY_SYSTEM = "You are a career clarity advisor. Always return valid JSON only."
SUMMARY_SYSTEM = "You are a wellness conversation summarizer. Always return valid JSON only."
SCHEDULE_SYSTEM = "You are a student schedule and burnout analyst. Always return valid JSON only."
