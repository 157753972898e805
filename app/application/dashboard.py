"""
Dashboard - aggregated overview across every area.

Pure read-layer: no mutations. Blocks:
  1. Stat cards (businesses, revenue, income, expenses, savings, goals)
  2. Today's schedule with completed / total
  3. Active goals
  4. Recent transactions

Transactions and goals come from the same cache entries as the finance and
goals pages, so the totals here always cover the whole ledger.
"""
from app.application import queries as q
from app.application.finance import transaction_item
from app.application.planner import event_item
from app.application.views import BaseView
from app.readmodels import metrics
from app.utils.money import format_money

TODAY_LIMIT = 5
GOALS_LIMIT = 4
RECENT_TRANSACTIONS_LIMIT = 5


class DashboardView(BaseView):

    def queries(self):
        uid = self.ctx.user.id
        return [
            q.businesses(uid),
            q.transactions(uid),
            q.goals(uid),
            q.today_events(uid, self.ctx.today),
            q.savings(uid),
        ]

    def render(self) -> dict:
        uid = self.ctx.user.id
        symbol = self.ctx.currency_symbol
        businesses = self.rows(q.businesses(uid))
        transactions = self.rows(q.transactions(uid))
        goals = self.rows(q.goals(uid))
        today = self.rows(q.today_events(uid, self.ctx.today))
        savings = self.rows(q.savings(uid))

        summary = metrics.dashboard_summary(
            businesses=businesses,
            transactions=transactions,
            goals=goals,
            today_events=today,
            savings=savings,
        )
        active_goals = [g for g in goals if g.get("status") != "completed"]

        return {
            "today": self.ctx.today,
            "summary": summary,
            "cards": self._cards(summary, symbol),
            "today_events": [event_item(e) for e in today[:TODAY_LIMIT]],
            "today_completed": summary["today_completed"],
            "today_total": summary["today_total"],
            "active_goals": active_goals[:GOALS_LIMIT],
            "recent_transactions": [
                transaction_item(t, symbol) for t in transactions[:RECENT_TRANSACTIONS_LIMIT]
            ],
            "errors": self.errors(),
        }

    @staticmethod
    def _cards(summary: dict, symbol: str) -> list[dict]:
        return [
            {"title": "Active Businesses", "value": summary["businesses"], "subtitle": "Total registered"},
            {"title": "Total Revenue", "value": format_money(summary["total_revenue"], symbol), "subtitle": "All businesses"},
            {"title": "Income", "value": format_money(summary["total_income"], symbol), "subtitle": "All transactions"},
            {"title": "Expenses", "value": format_money(summary["total_expenses"], symbol), "subtitle": "All transactions"},
            {"title": "Total Savings", "value": format_money(summary["total_savings"], symbol), "subtitle": "Across all goals"},
            {"title": "Active Goals", "value": summary["active_goals"], "subtitle": "In progress"},
        ]
