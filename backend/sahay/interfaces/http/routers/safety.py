from fastapi import APIRouter, Query
from typing import Optional, List

from sahay.core.config import get_settings
from sahay.domain.safety.escalation import decide, dismiss, observe, resources_visible
from sahay.domain.safety.service import classify, crisis_message, resource_list
from sahay.schemas.safety import (
    ClassifyIn,
    ClassifyOut,
    CrisisResourceOut,
    EscalationOut,
    PanelIn,
    PanelObserveIn,
    PanelOut,
)

router = APIRouter()


def _classify_out(text: str) -> ClassifyOut:
    result = classify(text)
    return ClassifyOut(
        is_detected=result.is_detected,
        severity=result.severity,
        matched_keywords=list(result.matched_keywords),
        escalation=EscalationOut.from_decision(decide(result)),
    )


def _panel_out(panel) -> PanelOut:
    visible = resources_visible(panel)
    return PanelOut(
        panel=panel,
        show_resources=visible,
        resources=[CrisisResourceOut(**r) for r in resource_list()] if visible else [],
    )


@router.get("/classify", response_model=ClassifyOut)
def safe_classify(text: str = ""):
    return _classify_out(text)


@router.post("/classify", response_model=ClassifyOut)
def safe_classify_body(body: ClassifyIn):
    return _classify_out(body.text)


@router.get("/resources", response_model=List[CrisisResourceOut])
def safe_resources():
    return resource_list()


@router.get("/crisis")
def safe_crisis(ctx: Optional[List[str]] = Query(None), region: Optional[str] = None):
    return {"message": crisis_message(ctx, region=region or get_settings().CRISIS_REGION)}


@router.post("/panel/observe", response_model=PanelOut)
def panel_observe(body: PanelObserveIn):
    return _panel_out(observe(body.panel, classify(body.text)))


@router.post("/panel/dismiss", response_model=PanelOut)
def panel_dismiss(body: PanelIn):
    return _panel_out(dismiss(body.panel))
