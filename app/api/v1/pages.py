"""
SSR pages - server-side rendered HTML pages

GET renders a view (mounted on the query cache for the duration of the
request). POST forms go through the controllers and redirect back; the
outcome is shown as a flash message on the next page.
"""
from pathlib import Path
from typing import Callable

from fastapi import APIRouter, Request, Form, Depends
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from app.api.deps import get_db, load_current_user, build_context
from app.application.businesses import BusinessController, DepartmentController, BusinessesView
from app.application.context import UserContext
from app.application.dashboard import DashboardView
from app.application.finance import FinanceView
from app.application.goals import GoalController, GoalsView
from app.application.mutations import MutationValidationError
from app.application.notifications import pop_flash
from app.application.planner import PlannerEventController, PlannerView
from app.application.profile import ProfileController, SettingsView
from app.application.savings import SavingsTargetController, InvestmentController
from app.application.transactions import TransactionController
from app.utils.money import format_money
from app.utils.validation import parse_date


router = APIRouter(tags=["pages"])

# Templates
templates_dir = Path(__file__).parent.parent.parent.parent / "templates"
templates = Jinja2Templates(directory=str(templates_dir))
templates.env.filters["money"] = format_money

NAV = (
    ("/dashboard", "Dashboard"),
    ("/businesses", "Business"),
    ("/finance", "Finance"),
    ("/planner", "Day Planner"),
    ("/goals", "Goals"),
    ("/settings", "Settings"),
)


def _login_redirect() -> RedirectResponse:
    return RedirectResponse("/auth", status_code=302)


def _render(request: Request, db: Session, template: str, active: str, make_view: Callable):
    user = load_current_user(request, db)
    if not user:
        return _login_redirect()

    ctx = build_context(request, user)
    with make_view(ctx) as view:
        page = view.render()

    return templates.TemplateResponse(request, template, {
        "user": user,
        "page": page,
        "nav": NAV,
        "active": active,
        "flashes": pop_flash(request.session),
    })


def _submit(request: Request, db: Session, redirect_to: str, action: Callable[[UserContext], object]):
    """Выполнить мутацию и вернуться на страницу (flash уже записан notifier'ом)"""
    user = load_current_user(request, db)
    if not user:
        return _login_redirect()

    try:
        action(build_context(request, user))
    except MutationValidationError:
        pass
    return RedirectResponse(redirect_to, status_code=302)


# === Dashboard ===

@router.get("/", response_class=HTMLResponse)
def index(request: Request, db: Session = Depends(get_db)):
    """Главная страница - dashboard"""
    return _render(request, db, "dashboard.html", "/dashboard", DashboardView)


@router.get("/dashboard", response_class=HTMLResponse)
def dashboard_page(request: Request, db: Session = Depends(get_db)):
    return _render(request, db, "dashboard.html", "/dashboard", DashboardView)


# === Businesses ===

@router.get("/businesses", response_class=HTMLResponse)
def businesses_page(request: Request, db: Session = Depends(get_db)):
    return _render(request, db, "businesses.html", "/businesses", BusinessesView)


@router.post("/businesses/create")
def create_business_form(
    request: Request,
    name: str = Form(""),
    description: str = Form(""),
    industry: str = Form(""),
    revenue: str = Form(""),
    status: str = Form("active"),
    db: Session = Depends(get_db),
):
    fields = {"name": name, "description": description, "industry": industry, "revenue": revenue, "status": status}
    return _submit(request, db, "/businesses", lambda ctx: BusinessController(ctx).create(fields))


@router.post("/businesses/{business_id}/update")
def update_business_form(
    request: Request,
    business_id: str,
    name: str = Form(""),
    description: str = Form(""),
    industry: str = Form(""),
    revenue: str = Form(""),
    status: str = Form("active"),
    db: Session = Depends(get_db),
):
    fields = {"name": name, "description": description, "industry": industry, "revenue": revenue, "status": status}
    return _submit(request, db, "/businesses", lambda ctx: BusinessController(ctx).update(business_id, fields))


@router.post("/businesses/{business_id}/delete")
def delete_business_form(request: Request, business_id: str, db: Session = Depends(get_db)):
    return _submit(request, db, "/businesses", lambda ctx: BusinessController(ctx).delete(business_id))


@router.post("/businesses/{business_id}/departments/create")
def create_department_form(
    request: Request,
    business_id: str,
    name: str = Form(""),
    description: str = Form(""),
    db: Session = Depends(get_db),
):
    fields = {"business_id": business_id, "name": name, "description": description}
    return _submit(request, db, "/businesses", lambda ctx: DepartmentController(ctx).create(fields))


@router.post("/departments/{department_id}/delete")
def delete_department_form(request: Request, department_id: str, db: Session = Depends(get_db)):
    return _submit(request, db, "/businesses", lambda ctx: DepartmentController(ctx).delete(department_id))


# === Finance ===

@router.get("/finance", response_class=HTMLResponse)
def finance_page(request: Request, tab: str = "transactions", db: Session = Depends(get_db)):
    return _render(request, db, "finance.html", "/finance", lambda ctx: FinanceView(ctx, tab))


@router.post("/finance/transactions/create")
def create_transaction_form(
    request: Request,
    type: str = Form("income"),
    amount: str = Form(""),
    category: str = Form(""),
    description: str = Form(""),
    date: str = Form(""),
    db: Session = Depends(get_db),
):
    fields = {"type": type, "amount": amount, "category": category, "description": description, "date": date}
    return _submit(request, db, "/finance?tab=transactions", lambda ctx: TransactionController(ctx).create(fields))


@router.post("/finance/transactions/{transaction_id}/delete")
def delete_transaction_form(request: Request, transaction_id: str, db: Session = Depends(get_db)):
    return _submit(
        request, db, "/finance?tab=transactions",
        lambda ctx: TransactionController(ctx).delete(transaction_id),
    )


@router.post("/finance/savings/create")
def create_savings_form(
    request: Request,
    name: str = Form(""),
    target_amount: str = Form(""),
    current_amount: str = Form(""),
    deadline: str = Form(""),
    db: Session = Depends(get_db),
):
    fields = {
        "name": name, "target_amount": target_amount,
        "current_amount": current_amount, "deadline": deadline,
    }
    return _submit(request, db, "/finance?tab=savings", lambda ctx: SavingsTargetController(ctx).create(fields))


@router.post("/finance/savings/{target_id}/delete")
def delete_savings_form(request: Request, target_id: str, db: Session = Depends(get_db)):
    return _submit(request, db, "/finance?tab=savings", lambda ctx: SavingsTargetController(ctx).delete(target_id))


@router.post("/finance/investments/create")
def create_investment_form(
    request: Request,
    name: str = Form(""),
    type: str = Form(""),
    amount: str = Form(""),
    current_value: str = Form(""),
    notes: str = Form(""),
    db: Session = Depends(get_db),
):
    fields = {"name": name, "type": type, "amount": amount, "current_value": current_value, "notes": notes}
    return _submit(request, db, "/finance?tab=investments", lambda ctx: InvestmentController(ctx).create(fields))


@router.post("/finance/investments/{investment_id}/delete")
def delete_investment_form(request: Request, investment_id: str, db: Session = Depends(get_db)):
    return _submit(
        request, db, "/finance?tab=investments",
        lambda ctx: InvestmentController(ctx).delete(investment_id),
    )


# === Day planner ===

def _planner_url(day: str) -> str:
    return f"/planner?date={day}" if day else "/planner"


@router.get("/planner", response_class=HTMLResponse)
def planner_page(request: Request, date: str = "", db: Session = Depends(get_db)):
    try:
        day = parse_date(date)
    except ValueError:
        day = None
    return _render(request, db, "planner.html", "/planner", lambda ctx: PlannerView(ctx, day))


@router.post("/planner/events/create")
def create_event_form(
    request: Request,
    title: str = Form(""),
    description: str = Form(""),
    type: str = Form("task"),
    priority: str = Form("medium"),
    date: str = Form(""),
    start_time: str = Form(""),
    end_time: str = Form(""),
    db: Session = Depends(get_db),
):
    fields = {
        "title": title, "description": description, "type": type, "priority": priority,
        "date": date, "start_time": start_time, "end_time": end_time,
    }
    return _submit(request, db, _planner_url(date), lambda ctx: PlannerEventController(ctx).create(fields))


@router.post("/planner/events/{event_id}/toggle")
def toggle_event_form(
    request: Request,
    event_id: str,
    completed: str = Form("false"),
    date: str = Form(""),
    db: Session = Depends(get_db),
):
    return _submit(
        request, db, _planner_url(date),
        lambda ctx: PlannerEventController(ctx).toggle_complete(event_id, completed),
    )


@router.post("/planner/events/{event_id}/delete")
def delete_event_form(request: Request, event_id: str, date: str = Form(""), db: Session = Depends(get_db)):
    return _submit(request, db, _planner_url(date), lambda ctx: PlannerEventController(ctx).delete(event_id))


# === Goals ===

@router.get("/goals", response_class=HTMLResponse)
def goals_page(request: Request, db: Session = Depends(get_db)):
    return _render(request, db, "goals.html", "/goals", GoalsView)


@router.post("/goals/create")
def create_goal_form(
    request: Request,
    title: str = Form(""),
    description: str = Form(""),
    category: str = Form(""),
    priority: str = Form("medium"),
    target_date: str = Form(""),
    db: Session = Depends(get_db),
):
    fields = {
        "title": title, "description": description, "category": category,
        "priority": priority, "target_date": target_date,
    }
    return _submit(request, db, "/goals", lambda ctx: GoalController(ctx).create(fields))


@router.post("/goals/{goal_id}/update")
def update_goal_form(
    request: Request,
    goal_id: str,
    title: str = Form(""),
    description: str = Form(""),
    category: str = Form(""),
    priority: str = Form("medium"),
    status: str = Form("not_started"),
    target_date: str = Form(""),
    db: Session = Depends(get_db),
):
    fields = {
        "title": title, "description": description, "category": category,
        "priority": priority, "status": status, "target_date": target_date,
    }
    return _submit(request, db, "/goals", lambda ctx: GoalController(ctx).update(goal_id, fields))


@router.post("/goals/{goal_id}/progress")
def goal_progress_form(request: Request, goal_id: str, progress: str = Form("0"), db: Session = Depends(get_db)):
    return _submit(request, db, "/goals", lambda ctx: GoalController(ctx).update_progress(goal_id, progress))


@router.post("/goals/{goal_id}/delete")
def delete_goal_form(request: Request, goal_id: str, db: Session = Depends(get_db)):
    return _submit(request, db, "/goals", lambda ctx: GoalController(ctx).delete(goal_id))


# === Settings ===

@router.get("/settings", response_class=HTMLResponse)
def settings_page(request: Request, db: Session = Depends(get_db)):
    return _render(request, db, "settings.html", "/settings", SettingsView)


@router.post("/settings/profile")
def update_profile_form(request: Request, full_name: str = Form(""), db: Session = Depends(get_db)):
    return _submit(request, db, "/settings", lambda ctx: ProfileController(ctx).update_profile(full_name))
