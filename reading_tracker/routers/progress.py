"""Routes for reading progress, streaks and plan switching."""
from fastapi import APIRouter, Depends, Path

from reading_tracker.models.domain import MultiPlanProgress
from reading_tracker.models.schemas import (
    CompletionRequest,
    PlanProgressResponse,
    StartPlanRequest,
    StreakCheckResponse,
    TodayReadingResponse,
)
from reading_tracker.services.progress_service import ProgressService, get_progress_service

router = APIRouter(prefix="/api/progress", tags=["progress"])


@router.get("", response_model=MultiPlanProgress)
def get_progress(service: ProgressService = Depends(get_progress_service)):
    return service.get_progress()


@router.post("", response_model=PlanProgressResponse, status_code=201)
def start_plan(
    payload: StartPlanRequest,
    service: ProgressService = Depends(get_progress_service),
):
    return service.start_plan(payload.plan_id)


@router.put("/current", response_model=PlanProgressResponse)
def switch_current_plan(
    payload: StartPlanRequest,
    service: ProgressService = Depends(get_progress_service),
):
    return service.switch_plan(payload.plan_id)


@router.get("/today", response_model=TodayReadingResponse)
def get_today_reading(service: ProgressService = Depends(get_progress_service)):
    return service.get_today()


@router.post("/plans/{plan_id}/completions", response_model=PlanProgressResponse)
def complete_reading(
    payload: CompletionRequest,
    plan_id: str = Path(..., min_length=1),
    service: ProgressService = Depends(get_progress_service),
):
    return service.complete_reading(plan_id, payload.reading_id)


@router.post("/plans/{plan_id}/advance", response_model=PlanProgressResponse)
def advance_plan(
    plan_id: str = Path(..., min_length=1),
    service: ProgressService = Depends(get_progress_service),
):
    return service.advance_plan(plan_id)


@router.post("/plans/{plan_id}/reset", response_model=PlanProgressResponse)
def reset_plan(
    plan_id: str = Path(..., min_length=1),
    service: ProgressService = Depends(get_progress_service),
):
    return service.reset_plan(plan_id)


@router.get("/plans/{plan_id}/streak", response_model=StreakCheckResponse)
def check_streak(
    plan_id: str = Path(..., min_length=1),
    service: ProgressService = Depends(get_progress_service),
):
    return service.check_streak(plan_id)
