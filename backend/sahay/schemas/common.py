from __future__ import annotations
from typing import Optional, Dict, Any
from pydantic import BaseModel

class HealthResponse(BaseModel):
    ok: bool = True
    version: Optional[str] = None
    env: Optional[str] = None
    gateway_configured: bool = False
    keyword_counts: Dict[str, int] = {}

class ErrorResponse(BaseModel):
    error: str
    message: str
    request_id: str
    status_code: Optional[int] = None
    type: Optional[str] = None
    details: Optional[Any] = None
