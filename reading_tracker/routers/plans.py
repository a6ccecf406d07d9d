"""Routes for browsing reading plans and authoring custom ones."""
from typing import List

from fastapi import APIRouter, Depends, Path, Response

from reading_tracker.models.domain import Reading, ReadingPlan
from reading_tracker.models.schemas import CustomPlanDraft, PlanSummary, SequentialPlanCreate
from reading_tracker.services.plan_service import PlanService, get_plan_service

router = APIRouter(prefix="/api/plans", tags=["reading-plans"])


@router.get("", response_model=List[PlanSummary])
def list_reading_plans(service: PlanService = Depends(get_plan_service)):
    return service.list_plans()


@router.post("/custom", response_model=ReadingPlan, status_code=201)
def create_custom_plan(
    payload: CustomPlanDraft,
    service: PlanService = Depends(get_plan_service),
):
    return service.create_custom_plan(payload)


@router.post("/custom/sequential", response_model=ReadingPlan, status_code=201)
def create_sequential_plan(
    payload: SequentialPlanCreate,
    service: PlanService = Depends(get_plan_service),
):
    return service.create_sequential_plan(payload)


@router.delete("/custom/{plan_id}", status_code=204)
def delete_custom_plan(
    plan_id: str = Path(..., min_length=1),
    service: PlanService = Depends(get_plan_service),
):
    service.delete_custom_plan(plan_id)
    return Response(status_code=204)


@router.get("/{plan_id}", response_model=ReadingPlan)
def get_reading_plan(
    plan_id: str = Path(..., min_length=1),
    service: PlanService = Depends(get_plan_service),
):
    return service.get_plan(plan_id)


@router.get("/{plan_id}/days/{day}", response_model=Reading)
def get_reading_for_day(
    plan_id: str = Path(..., min_length=1),
    day: int = Path(..., ge=1),
    service: PlanService = Depends(get_plan_service),
):
    return service.get_reading_for_day(plan_id, day)
