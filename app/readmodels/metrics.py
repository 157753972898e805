"""
Derived metrics - pure folds over fetched rows.

No I/O, no mutation of the input; every call returns a fresh value, so it
is safe to recompute on every render. A missing collection (query not yet
resolved) counts as empty, a missing/null numeric field counts as 0.
"""
from collections import Counter
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Optional

ZERO = Decimal("0")
HUNDRED = Decimal("100")

Rows = Optional[Iterable[Mapping[str, Any]]]


def to_decimal(value: Any) -> Decimal:
    """None / "" / мусор -> 0"""
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    try:
        result = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return ZERO
    return result if result.is_finite() else ZERO


def _rows(rows: Rows) -> list:
    return list(rows) if rows else []


def sum_field(rows: Rows, field: str, where=None) -> Decimal:
    return sum(
        (to_decimal(r.get(field)) for r in _rows(rows) if where is None or where(r)),
        ZERO,
    )


def count_where(rows: Rows, where=None) -> int:
    return sum(1 for r in _rows(rows) if where is None or where(r))


# ---------------------------------------------------------------------------
# Businesses
# ---------------------------------------------------------------------------

def total_revenue(businesses: Rows) -> Decimal:
    return sum_field(businesses, "revenue")


def count_active_businesses(businesses: Rows) -> int:
    return count_where(businesses, lambda b: b.get("status") == "active")


def department_counts(departments: Rows) -> dict:
    return dict(Counter(d.get("business_id") for d in _rows(departments)))


def business_summary(businesses: Rows, departments: Rows = None) -> dict:
    return {
        "total": count_where(businesses),
        "active": count_active_businesses(businesses),
        "total_revenue": total_revenue(businesses),
        "departments": count_where(departments),
    }


# ---------------------------------------------------------------------------
# Transactions
# ---------------------------------------------------------------------------

def total_income(transactions: Rows) -> Decimal:
    return sum_field(transactions, "amount", lambda t: t.get("type") == "income")


def total_expenses(transactions: Rows) -> Decimal:
    return sum_field(transactions, "amount", lambda t: t.get("type") == "expense")


def net_balance(transactions: Rows) -> Decimal:
    return total_income(transactions) - total_expenses(transactions)


def expenses_by_category(transactions: Rows) -> dict:
    totals: dict = {}
    for t in _rows(transactions):
        if t.get("type") == "expense":
            category = t.get("category") or "Other Expense"
            totals[category] = totals.get(category, ZERO) + to_decimal(t.get("amount"))
    return dict(sorted(totals.items(), key=lambda kv: kv[1], reverse=True))


# ---------------------------------------------------------------------------
# Savings / investments
# ---------------------------------------------------------------------------

def total_savings(savings: Rows) -> Decimal:
    return sum_field(savings, "current_amount")


def savings_progress(target: Mapping[str, Any]) -> float:
    """
    current / target * 100, clamped to [0, 100]

    target <= 0 -> 0.0 (invalid target is rejected on input, never at display)
    """
    goal = to_decimal(target.get("target_amount"))
    if goal <= 0:
        return 0.0
    progress = to_decimal(target.get("current_amount")) / goal * HUNDRED
    return float(max(ZERO, min(HUNDRED, progress)))


def investment_gain(investment: Mapping[str, Any]) -> Decimal:
    return to_decimal(investment.get("current_value")) - to_decimal(investment.get("amount"))


def investment_gain_percent(investment: Mapping[str, Any]) -> Optional[float]:
    """Gain % of invested amount; None when nothing was invested"""
    amount = to_decimal(investment.get("amount"))
    if amount == 0:
        return None
    return float(investment_gain(investment) / amount * HUNDRED)


def portfolio_summary(investments: Rows) -> dict:
    invested = sum_field(investments, "amount")
    current = sum_field(investments, "current_value")
    gain = current - invested
    return {
        "total_invested": invested,
        "current_value": current,
        "gain": gain,
        "gain_percent": float(gain / invested * HUNDRED) if invested != 0 else None,
    }


def finance_summary(transactions: Rows, savings: Rows = None, investments: Rows = None) -> dict:
    income = total_income(transactions)
    expenses = total_expenses(transactions)
    portfolio = portfolio_summary(investments)
    return {
        "total_income": income,
        "total_expenses": expenses,
        "net_balance": income - expenses,
        "total_savings": total_savings(savings),
        "total_invested": portfolio["total_invested"],
        "portfolio_value": portfolio["current_value"],
    }


# ---------------------------------------------------------------------------
# Goals
# ---------------------------------------------------------------------------

def goal_counts(goals: Rows) -> dict:
    statuses = Counter(g.get("status") for g in _rows(goals))
    total = sum(statuses.values())
    return {
        "total": total,
        "not_started": statuses.get("not_started", 0),
        "in_progress": statuses.get("in_progress", 0),
        "completed": statuses.get("completed", 0),
        "on_hold": statuses.get("on_hold", 0),
        "active": total - statuses.get("completed", 0),
    }


# ---------------------------------------------------------------------------
# Planner
# ---------------------------------------------------------------------------

def completion_counter(events: Rows) -> tuple[int, int]:
    """(completed, total)"""
    rows = _rows(events)
    return sum(1 for e in rows if e.get("completed")), len(rows)


def _as_date(value) -> Optional[date]:
    if isinstance(value, date):
        return value
    if value:
        try:
            return date.fromisoformat(str(value)[:10])
        except ValueError:
            return None
    return None


def events_for_day(events: Rows, day: date) -> list:
    return [e for e in _rows(events) if _as_date(e.get("date")) == day]


def events_per_day(events: Rows) -> dict:
    """{date: количество событий}"""
    return dict(Counter(d for d in (_as_date(e.get("date")) for e in _rows(events)) if d))


# ---------------------------------------------------------------------------
# Dashboard
# ---------------------------------------------------------------------------

def dashboard_summary(
    businesses: Rows = None,
    transactions: Rows = None,
    goals: Rows = None,
    today_events: Rows = None,
    savings: Rows = None,
) -> dict:
    completed, total = completion_counter(today_events)
    income = total_income(transactions)
    expenses = total_expenses(transactions)
    return {
        "businesses": count_where(businesses),
        "active_businesses": count_active_businesses(businesses),
        "total_revenue": total_revenue(businesses),
        "total_income": income,
        "total_expenses": expenses,
        "net_balance": income - expenses,
        "total_savings": total_savings(savings),
        "active_goals": goal_counts(goals)["active"],
        "today_completed": completed,
        "today_total": total,
    }
