from fastapi import APIRouter, Depends

from sahay.domain.plans.service import PlansService
from sahay.interfaces.http.deps.services import get_plans_service
from sahay.schemas.plans import (
    ClarityRequest,
    NudgesOut,
    PathwayOut,
    PathwayRequest,
    RoadmapOut,
    ScheduleRequest,
)

router = APIRouter()

@router.post("/pathway", response_model=PathwayOut)
def plan_pathway(body: PathwayRequest, svc: PlansService = Depends(get_plans_service)):
    return svc.pathway(body.goal, body.days, body.intensity)

@router.post("/clarity", response_model=RoadmapOut)
def plan_clarity(body: ClarityRequest, svc: PlansService = Depends(get_plans_service)):
    return svc.clarity(body.career_prompt, body.experience_level)

@router.post("/schedule", response_model=NudgesOut)
def plan_schedule(body: ScheduleRequest, svc: PlansService = Depends(get_plans_service)):
    """Burnout/overload/balance nudges for caller-supplied calendar events."""
    return svc.analyze_schedule(body.events)
