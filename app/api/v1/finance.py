"""
Finance API endpoints (transactions, savings targets, investments)
"""
from datetime import date as date_type

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from app.api.deps import get_context
from app.api.responses import mutation_response, view_response, to_json
from app.application.context import UserContext
from app.application.finance import FinanceView
from app.application.savings import SavingsTargetController, InvestmentController
from app.application.transactions import TransactionController


router = APIRouter(prefix="/api/v1/finance", tags=["finance"])


# === Request models ===

class TransactionRequest(BaseModel):
    type: str | None = None  # income / expense
    amount: str | float | None = None  # Decimal as string, > 0
    category: str | None = None
    description: str | None = None
    date: date_type | None = None


class SavingsTargetRequest(BaseModel):
    name: str | None = None
    target_amount: str | float | None = None
    current_amount: str | float | None = None
    deadline: date_type | None = None
    status: str | None = None


class InvestmentRequest(BaseModel):
    name: str | None = None
    type: str | None = None
    amount: str | float | None = None
    current_value: str | float | None = None
    notes: str | None = None


def _fields(req: BaseModel) -> dict:
    return req.model_dump(exclude_unset=True)


# === Overview ===

@router.get("")
def finance_overview(tab: str = "transactions", ctx: UserContext = Depends(get_context)):
    return view_response(FinanceView(ctx, tab))


@router.get("/summary")
def finance_summary(ctx: UserContext = Depends(get_context)):
    """Доходы / расходы / баланс / накопления / портфель"""
    with FinanceView(ctx) as view:
        page = view.render()
    return to_json({
        "summary": page["summary"],
        "portfolio": page["portfolio"],
        "expenses_by_category": page["expenses_by_category"],
    })


# === Transactions ===

@router.get("/transactions")
def list_transactions(ctx: UserContext = Depends(get_context)):
    with FinanceView(ctx) as view:
        return to_json(view.render()["transactions"])


@router.post("/transactions", status_code=201)
def create_transaction(req: TransactionRequest, ctx: UserContext = Depends(get_context)):
    return mutation_response(TransactionController(ctx).create(_fields(req)))


@router.put("/transactions/{transaction_id}")
def update_transaction(transaction_id: str, req: TransactionRequest, ctx: UserContext = Depends(get_context)):
    return mutation_response(TransactionController(ctx).update(transaction_id, _fields(req)))


@router.delete("/transactions/{transaction_id}")
def delete_transaction(transaction_id: str, ctx: UserContext = Depends(get_context)):
    return mutation_response(TransactionController(ctx).delete(transaction_id))


# === Savings targets ===

@router.get("/savings")
def list_savings(ctx: UserContext = Depends(get_context)):
    with FinanceView(ctx, "savings") as view:
        return to_json(view.render()["savings"])


@router.post("/savings", status_code=201)
def create_savings_target(req: SavingsTargetRequest, ctx: UserContext = Depends(get_context)):
    return mutation_response(SavingsTargetController(ctx).create(_fields(req)))


@router.put("/savings/{target_id}")
def update_savings_target(target_id: str, req: SavingsTargetRequest, ctx: UserContext = Depends(get_context)):
    return mutation_response(SavingsTargetController(ctx).update(target_id, _fields(req)))


@router.delete("/savings/{target_id}")
def delete_savings_target(target_id: str, ctx: UserContext = Depends(get_context)):
    return mutation_response(SavingsTargetController(ctx).delete(target_id))


# === Investments ===

@router.get("/investments")
def list_investments(ctx: UserContext = Depends(get_context)):
    with FinanceView(ctx, "investments") as view:
        return to_json(view.render()["investments"])


@router.post("/investments", status_code=201)
def create_investment(req: InvestmentRequest, ctx: UserContext = Depends(get_context)):
    return mutation_response(InvestmentController(ctx).create(_fields(req)))


@router.put("/investments/{investment_id}")
def update_investment(investment_id: str, req: InvestmentRequest, ctx: UserContext = Depends(get_context)):
    return mutation_response(InvestmentController(ctx).update(investment_id, _fields(req)))


@router.delete("/investments/{investment_id}")
def delete_investment(investment_id: str, ctx: UserContext = Depends(get_context)):
    return mutation_response(InvestmentController(ctx).delete(investment_id))
