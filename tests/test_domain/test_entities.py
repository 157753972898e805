"""
Tests for entity payload builders
"""
from datetime import date
from decimal import Decimal

from app.domain.business import Business, Department
from app.domain.planner_event import PlannerEvent
from app.domain.profile import Profile
from app.domain.savings import SavingsTarget, Investment
from app.domain.transaction import Transaction, signed_amount


class TestBusiness:
    def test_create_defaults(self):
        """revenue по умолчанию 0, статус active"""
        row = Business.create(name="Acme")
        assert row["revenue"] == Decimal("0")
        assert row["status"] == "active"

    def test_department_business_id_is_immutable(self):
        """business_id отдела не меняется через update"""
        row = Department.update(name="Ops", business_id="other")
        assert row == {"name": "Ops"}


class TestTransaction:
    def test_create_payload(self):
        row = Transaction.create("expense", Decimal("42.50"), "Food", date(2025, 1, 15))
        assert row["amount"] == Decimal("42.50")
        assert row["description"] is None

    def test_signed_amount(self):
        """expense отображается со знаком минус, amount хранится положительным"""
        assert signed_amount({"type": "expense", "amount": Decimal("42.50")}) == Decimal("-42.50")
        assert signed_amount({"type": "income", "amount": "100"}) == Decimal("100")


class TestSavingsAndInvestments:
    def test_savings_defaults(self):
        row = SavingsTarget.create("Laptop", Decimal("2000"))
        assert row["current_amount"] == Decimal("0")
        assert row["status"] == "active"

    def test_investment_current_value_defaults_to_amount(self):
        """Без текущей оценки стоимость = вложенной сумме"""
        row = Investment.create("ETF", "Stocks", Decimal("1000"))
        assert row["current_value"] == Decimal("1000")

    def test_investment_explicit_current_value(self):
        row = Investment.create("ETF", "Stocks", Decimal("1000"), Decimal("1200"))
        assert row["current_value"] == Decimal("1200")


class TestPlannerEvent:
    def test_toggle_inverts_current_value(self):
        assert PlannerEvent.toggle(False) == {"completed": True}
        assert PlannerEvent.toggle(True) == {"completed": False}

    def test_create_defaults(self):
        row = PlannerEvent.create("Stand-up", date(2025, 1, 15))
        assert row["type"] == "task"
        assert row["priority"] == "medium"
        assert row["completed"] is False


class TestProfile:
    def test_update_only_full_name(self):
        assert Profile.update("Ada Lovelace") == {"full_name": "Ada Lovelace"}
