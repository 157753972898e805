"""
Day planner API endpoints
"""
from datetime import date as date_type, time as time_type

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.deps import get_context
from app.api.responses import mutation_response, view_response
from app.application.context import UserContext
from app.application.planner import PlannerEventController, PlannerView


router = APIRouter(prefix="/api/v1/planner", tags=["planner"])


# === Request models ===

class PlannerEventRequest(BaseModel):
    title: str | None = None
    description: str | None = None
    type: str | None = None  # task / event / meeting / reminder
    priority: str | None = None  # low / medium / high
    date: date_type | None = None
    start_time: time_type | None = None
    end_time: time_type | None = None
    completed: bool | None = None


class ToggleRequest(BaseModel):
    completed: bool  # текущее значение, сохраняется инвертированным


# === Views ===

@router.get("/day")
def planner_day(day: date_type | None = None, ctx: UserContext = Depends(get_context)):
    """События дня + completed/total + неделя"""
    return view_response(PlannerView(ctx, day))


@router.get("/week")
def planner_week(day: date_type | None = None, ctx: UserContext = Depends(get_context)):
    """Полоса недели (Пн-Вс) с количеством событий по дням"""
    page = view_response(PlannerView(ctx, day))
    return {"date": page["date"], "week": page["week"]}


# === Events ===

@router.post("/events", status_code=201)
def create_event(req: PlannerEventRequest, ctx: UserContext = Depends(get_context)):
    return mutation_response(PlannerEventController(ctx).create(req.model_dump(exclude_unset=True)))


@router.put("/events/{event_id}")
def update_event(event_id: str, req: PlannerEventRequest, ctx: UserContext = Depends(get_context)):
    return mutation_response(
        PlannerEventController(ctx).update(event_id, req.model_dump(exclude_unset=True))
    )


@router.post("/events/{event_id}/toggle")
def toggle_event(event_id: str, req: ToggleRequest, ctx: UserContext = Depends(get_context)):
    return mutation_response(PlannerEventController(ctx).toggle_complete(event_id, req.completed))


@router.delete("/events/{event_id}")
def delete_event(event_id: str, ctx: UserContext = Depends(get_context)):
    return mutation_response(PlannerEventController(ctx).delete(event_id))
