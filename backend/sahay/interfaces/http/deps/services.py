from __future__ import annotations

from fastapi import Depends

from sahay.domain.chat.service import ChatService
from sahay.domain.llm.gateway import LLMGateway, get_gateway
from sahay.domain.plans.service import PlansService


def get_chat_service(gateway: LLMGateway = Depends(get_gateway)) -> ChatService:
    return ChatService(gateway)


def get_plans_service(gateway: LLMGateway = Depends(get_gateway)) -> PlansService:
    return PlansService(gateway)
