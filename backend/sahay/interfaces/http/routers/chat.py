from __future__ import annotations
from fastapi import APIRouter, Depends

from sahay.domain.chat.service import ChatService
from sahay.domain.safety.escalation import resources_visible
from sahay.domain.safety.service import resource_list
from sahay.interfaces.http.deps.services import get_chat_service
from sahay.schemas.chat import ChatRequest, ChatResponse, SummarizeRequest, SummaryOut
from sahay.schemas.safety import ClassificationOut, CrisisResourceOut, EscalationOut
from sahay.utils.time import utc_iso

router = APIRouter()


@router.post("", response_model=ChatResponse)
def chat(body: ChatRequest, svc: ChatService = Depends(get_chat_service)):
    turn = svc.reply(body.messages, body.panel)
    visible = resources_visible(turn.panel)
    return ChatResponse(
        reply=turn.reply,
        classification=ClassificationOut.from_result(turn.classification),
        escalation=EscalationOut.from_decision(turn.decision),
        panel=turn.panel,
        show_resources=visible,
        resources=[CrisisResourceOut(**r) for r in resource_list()] if visible else [],
        created_at=utc_iso(),
    )


@router.post("/summarize", response_model=SummaryOut)
def summarize(body: SummarizeRequest, svc: ChatService = Depends(get_chat_service)):
    return svc.summarize(body.messages)
