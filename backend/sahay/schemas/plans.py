from __future__ import annotations
from typing import List, Literal, Optional
from pydantic import BaseModel, Field

Intensity = Literal["low", "medium", "high"]

class PathwayRequest(BaseModel):
    goal: str = Field(..., min_length=1, max_length=300)
    days: int = Field(5, ge=1, le=30)
    intensity: Intensity = "medium"

class PathwayDay(BaseModel):
    title: str
    actions: List[str] = Field(default_factory=list)

class Pathway(BaseModel):
    pathway: List[PathwayDay] = Field(..., min_length=1)

class PathwayOut(Pathway):
    degraded: bool = False

class ClarityRequest(BaseModel):
    career_prompt: str = Field(..., min_length=1, max_length=1000)
    experience_level: str = Field("student", max_length=60)

class RoadmapPath(BaseModel):
    path: str
    reframe: str
    actions: List[str] = Field(default_factory=list)

class Roadmap(BaseModel):
    roadmap: List[RoadmapPath] = Field(..., min_length=1)

class RoadmapOut(Roadmap):
    degraded: bool = False

class ScheduleEvent(BaseModel):
    title: str
    start: str = Field(..., description="ISO8601 start")
    end: Optional[str] = Field(None, description="ISO8601 end")
    kind: Optional[str] = Field(None, description="class | exam | deadline | personal ...")

class ScheduleRequest(BaseModel):
    events: List[ScheduleEvent] = Field(default_factory=list, max_length=200)

class Nudge(BaseModel):
    type: Literal["burnout", "overload", "balance"]
    title: str
    description: str
    emoji: str = ""
    actions: List[str] = Field(default_factory=list)

class Nudges(BaseModel):
    nudges: List[Nudge] = Field(..., min_length=1)

class NudgesOut(Nudges):
    degraded: bool = False
