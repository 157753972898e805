"""
Business API endpoints (businesses + departments)
"""
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.deps import get_context
from app.api.responses import mutation_response, view_response
from app.application.businesses import BusinessController, DepartmentController, BusinessesView
from app.application.context import UserContext


router = APIRouter(prefix="/api/v1/businesses", tags=["businesses"])


# === Request models ===

class BusinessRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    industry: str | None = None
    revenue: str | float | None = None  # Decimal as string
    status: str | None = None


class DepartmentRequest(BaseModel):
    business_id: str | None = None
    name: str | None = None
    description: str | None = None


# === Businesses ===

@router.get("")
def list_businesses(ctx: UserContext = Depends(get_context)):
    """Бизнесы + отделы + сводка"""
    return view_response(BusinessesView(ctx))


@router.post("", status_code=201)
def create_business(req: BusinessRequest, ctx: UserContext = Depends(get_context)):
    return mutation_response(BusinessController(ctx).create(req.model_dump(exclude_unset=True)))


@router.put("/{business_id}")
def update_business(business_id: str, req: BusinessRequest, ctx: UserContext = Depends(get_context)):
    return mutation_response(
        BusinessController(ctx).update(business_id, req.model_dump(exclude_unset=True))
    )


@router.delete("/{business_id}")
def delete_business(business_id: str, ctx: UserContext = Depends(get_context)):
    """Удалить бизнес (отделы удаляются каскадом)"""
    return mutation_response(BusinessController(ctx).delete(business_id))


# === Departments ===

@router.post("/departments", status_code=201)
def create_department(req: DepartmentRequest, ctx: UserContext = Depends(get_context)):
    return mutation_response(DepartmentController(ctx).create(req.model_dump(exclude_unset=True)))


@router.put("/departments/{department_id}")
def update_department(department_id: str, req: DepartmentRequest, ctx: UserContext = Depends(get_context)):
    fields = req.model_dump(exclude_unset=True)
    fields.pop("business_id", None)
    return mutation_response(DepartmentController(ctx).update(department_id, fields))


@router.delete("/departments/{department_id}")
def delete_department(department_id: str, ctx: UserContext = Depends(get_context)):
    return mutation_response(DepartmentController(ctx).delete(department_id))
