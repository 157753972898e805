"""
Goals API endpoints
"""
from datetime import date as date_type

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.deps import get_context
from app.api.responses import mutation_response, view_response
from app.application.context import UserContext
from app.application.goals import GoalController, GoalsView


router = APIRouter(prefix="/api/v1/goals", tags=["goals"])


class GoalRequest(BaseModel):
    title: str | None = None
    description: str | None = None
    category: str | None = None
    priority: str | None = None
    status: str | None = None
    progress: int | None = None
    target_date: date_type | None = None


class ProgressRequest(BaseModel):
    progress: int  # 0..100, status выводится из progress


@router.get("")
def list_goals(ctx: UserContext = Depends(get_context)):
    return view_response(GoalsView(ctx))


@router.post("", status_code=201)
def create_goal(req: GoalRequest, ctx: UserContext = Depends(get_context)):
    return mutation_response(GoalController(ctx).create(req.model_dump(exclude_unset=True)))


@router.put("/{goal_id}")
def update_goal(goal_id: str, req: GoalRequest, ctx: UserContext = Depends(get_context)):
    return mutation_response(GoalController(ctx).update(goal_id, req.model_dump(exclude_unset=True)))


@router.put("/{goal_id}/progress")
def update_goal_progress(goal_id: str, req: ProgressRequest, ctx: UserContext = Depends(get_context)):
    return mutation_response(GoalController(ctx).update_progress(goal_id, req.progress))


@router.delete("/{goal_id}")
def delete_goal(goal_id: str, ctx: UserContext = Depends(get_context)):
    return mutation_response(GoalController(ctx).delete(goal_id))
