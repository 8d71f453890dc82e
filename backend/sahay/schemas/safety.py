from __future__ import annotations
from typing import List, Literal
from pydantic import BaseModel, Field

from sahay.domain.safety.escalation import EscalationDecision, PanelState
from sahay.domain.safety.models import ClassificationResult, Severity

class ClassifyIn(BaseModel):
    text: str = Field("", description="One user utterance")

class ClassificationOut(BaseModel):
    is_detected: bool
    severity: Severity
    matched_keywords: List[str] = Field(default_factory=list)

    @classmethod
    def from_result(cls, r: ClassificationResult) -> "ClassificationOut":
        return cls(is_detected=r.is_detected, severity=r.severity, matched_keywords=list(r.matched_keywords))

class EscalationOut(BaseModel):
    show_resources: bool = False
    augment_prompt: bool = False
    flag_message: bool = False
    record: bool = False

    @classmethod
    def from_decision(cls, d: EscalationDecision) -> "EscalationOut":
        return cls(
            show_resources=d.show_resources,
            augment_prompt=d.augment_prompt,
            flag_message=d.flag_message,
            record=d.record,
        )

class ClassifyOut(ClassificationOut):
    escalation: EscalationOut

class CrisisResourceOut(BaseModel):
    name: str
    phone: str
    description: str
    kind: Literal["primary", "secondary", "emergency"]
    tel: str

class PanelIn(BaseModel):
    panel: PanelState = PanelState.IDLE

class PanelObserveIn(PanelIn):
    text: str = ""

class PanelOut(BaseModel):
    panel: PanelState
    show_resources: bool
    resources: List[CrisisResourceOut] = Field(default_factory=list)
