from __future__ import annotations
from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from sahay.domain.safety.escalation import PanelState
from sahay.schemas.safety import ClassificationOut, CrisisResourceOut, EscalationOut

class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str
    is_crisis: bool = False

class ChatRequest(BaseModel):
    messages: List[ChatMessage] = Field(..., min_length=1)
    panel: PanelState = PanelState.IDLE

class ChatResponse(BaseModel):
    reply: ChatMessage
    classification: ClassificationOut
    escalation: EscalationOut
    panel: PanelState
    show_resources: bool
    resources: List[CrisisResourceOut] = Field(default_factory=list)
    created_at: Optional[str] = None

class SummarizeRequest(BaseModel):
    messages: List[ChatMessage]

class Summary(BaseModel):
    reflection: str
    action_items: List[str] = Field(default_factory=list)

class SummaryOut(Summary):
    degraded: bool = False
