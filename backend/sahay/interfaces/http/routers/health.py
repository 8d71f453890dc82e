from __future__ import annotations
from fastapi import APIRouter, Depends

from sahay import __version__
from sahay.core.config import get_settings
from sahay.domain.llm.gateway import LLMGateway, get_gateway
from sahay.domain.safety.keywords import get_keyword_table
from sahay.schemas.common import HealthResponse

router = APIRouter()

@router.get("/healthz", response_model=HealthResponse)
def healthz(gateway: LLMGateway = Depends(get_gateway)):
    table = get_keyword_table()
    return HealthResponse(
        ok=True,
        version=__version__,
        env=get_settings().ENV,
        gateway_configured=gateway.configured,
        keyword_counts={sev.value: len(phrases) for sev, phrases in table.items()},
    )
