"""
Profile + dashboard API endpoints
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.deps import get_context
from app.api.responses import mutation_response, view_response
from app.application.context import UserContext
from app.application.dashboard import DashboardView
from app.application.profile import ProfileController, SettingsView


router = APIRouter(prefix="/api/v1", tags=["profile"])


class ProfileRequest(BaseModel):
    full_name: str | None = None


@router.get("/dashboard")
def dashboard(ctx: UserContext = Depends(get_context)):
    """View-model главной страницы"""
    return view_response(DashboardView(ctx))


@router.get("/profile")
def get_profile(ctx: UserContext = Depends(get_context)):
    return view_response(SettingsView(ctx))


@router.put("/profile")
def update_profile(req: ProfileRequest, ctx: UserContext = Depends(get_context)):
    return mutation_response(ProfileController(ctx).update_profile(req.full_name))
