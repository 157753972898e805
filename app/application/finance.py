"""
Finance hub view: transactions ledger, savings targets, investments
"""
from app.application import queries as q
from app.application.views import BaseView
from app.domain.savings import INVESTMENT_TYPES
from app.domain.transaction import TRANSACTION_CATEGORIES, TRANSACTION_TYPES
from app.readmodels import metrics
from app.utils.money import format_money, format_signed, format_percent

FINANCE_TABS = ("transactions", "savings", "investments")


def transaction_item(tx: dict, symbol: str = "$") -> dict:
    return {**tx, "amount_display": format_signed(tx, symbol)}


def savings_item(target: dict, symbol: str = "$") -> dict:
    progress = metrics.savings_progress(target)
    return {
        **target,
        "progress": progress,
        "progress_display": format_percent(progress, 0),
        "current_display": format_money(target.get("current_amount"), symbol),
        "target_display": format_money(target.get("target_amount"), symbol),
    }


def investment_item(inv: dict, symbol: str = "$") -> dict:
    gain = metrics.investment_gain(inv)
    gain_percent = metrics.investment_gain_percent(inv)
    return {
        **inv,
        "gain": gain,
        "gain_percent": gain_percent,
        "is_positive": gain >= 0,
        "gain_display": ("+" if gain >= 0 else "") + format_money(gain, symbol),
        "gain_percent_display": _signed_percent(gain_percent),
    }


def _signed_percent(value) -> str:
    if value is None:
        return format_percent(None)
    return ("+" if value >= 0 else "") + format_percent(value)


class FinanceView(BaseView):

    def __init__(self, ctx, tab: str = "transactions"):
        super().__init__(ctx)
        self.tab = tab if tab in FINANCE_TABS else "transactions"

    def queries(self):
        uid = self.ctx.user.id
        return [q.transactions(uid), q.savings(uid), q.investments(uid)]

    def render(self) -> dict:
        uid = self.ctx.user.id
        symbol = self.ctx.currency_symbol
        transactions = self.rows(q.transactions(uid))
        savings = self.rows(q.savings(uid))
        investments = self.rows(q.investments(uid))

        summary = metrics.finance_summary(transactions, savings, investments)
        return {
            "tab": self.tab,
            "summary": summary,
            "summary_display": {k: format_money(v, symbol) for k, v in summary.items()},
            "portfolio": metrics.portfolio_summary(investments),
            "expenses_by_category": metrics.expenses_by_category(transactions),
            "transactions": [transaction_item(t, symbol) for t in transactions],
            "savings": [savings_item(s, symbol) for s in savings],
            "investments": [investment_item(i, symbol) for i in investments],
            "transaction_types": TRANSACTION_TYPES,
            "transaction_categories": TRANSACTION_CATEGORIES,
            "investment_types": INVESTMENT_TYPES,
            "errors": self.errors(),
        }
