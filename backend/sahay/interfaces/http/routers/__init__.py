from __future__ import annotations
from fastapi import APIRouter

from . import health, safety, chat, plans

api = APIRouter()
api.include_router(health.router, prefix="/health", tags=["health"])
api.include_router(safety.router, prefix="/safety", tags=["safety"])
api.include_router(chat.router,   prefix="/chat",   tags=["chat"])
api.include_router(plans.router,  prefix="/plans",  tags=["plans"])
