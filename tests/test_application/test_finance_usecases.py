"""
Tests for transactions / savings / investments controllers and FinanceView
"""
from datetime import date
from decimal import Decimal

import pytest

from app.application.finance import FinanceView
from app.application.savings import (
    SavingsTargetController, InvestmentController,
    SavingsValidationError, InvestmentValidationError,
)
from app.application.transactions import TransactionController, TransactionValidationError


def _expense(**overrides):
    fields = {"type": "expense", "amount": "42.50", "category": "Food", "date": "2025-01-15"}
    fields.update(overrides)
    return fields


class TestTransactionController:
    def test_create(self, ctx, notifier):
        result = TransactionController(ctx).create(_expense(description="  Lunch "))

        assert result.ok
        assert result.row["amount"] == Decimal("42.50")
        assert result.row["date"] == date(2025, 1, 15)
        assert result.row["description"] == "Lunch"
        assert notifier.last.message == "Transaction added"

    def test_amount_comma_decimal(self, ctx):
        result = TransactionController(ctx).create(_expense(amount="10,25"))
        assert result.row["amount"] == Decimal("10.25")

    def test_date_defaults_to_today(self, ctx, today):
        result = TransactionController(ctx).create(_expense(date=""))
        assert result.row["date"] == today

    @pytest.mark.parametrize("amount", ["", None, "0"])
    def test_amount_required(self, ctx, amount):
        with pytest.raises(TransactionValidationError, match="Amount and category are required"):
            TransactionController(ctx).create(_expense(amount=amount))

    def test_category_required(self, ctx):
        with pytest.raises(TransactionValidationError, match="Amount and category are required"):
            TransactionController(ctx).create(_expense(category=""))

    def test_negative_amount_rejected(self, ctx):
        """Знак задаётся type, отрицательная сумма недопустима"""
        with pytest.raises(TransactionValidationError):
            TransactionController(ctx).create(_expense(amount="-42.50"))

    def test_three_decimals_rejected(self, ctx):
        with pytest.raises(TransactionValidationError, match="decimal places"):
            TransactionController(ctx).create(_expense(amount="1.005"))

    def test_invalid_type(self, ctx):
        with pytest.raises(TransactionValidationError):
            TransactionController(ctx).create(_expense(type="transfer"))


class TestSavingsAndInvestments:
    def test_savings_target_must_be_positive(self, ctx):
        with pytest.raises(SavingsValidationError, match="greater than zero"):
            SavingsTargetController(ctx).create({"name": "Car", "target_amount": "0"})

    def test_savings_defaults(self, ctx, notifier):
        result = SavingsTargetController(ctx).create({"name": "Car", "target_amount": "5000"})

        assert result.row["current_amount"] == Decimal("0")
        assert result.row["status"] == "active"
        assert notifier.last.message == "Savings goal created"

    def test_investment_value_defaults_to_amount(self, ctx):
        result = InvestmentController(ctx).create({"name": "Index fund", "type": "Stocks", "amount": "1000"})
        assert result.row["current_value"] == Decimal("1000")

    def test_investment_requires_type(self, ctx):
        with pytest.raises(InvestmentValidationError, match="Name and type are required"):
            InvestmentController(ctx).create({"name": "Mystery", "type": "", "amount": "10"})


class TestFinanceView:
    def test_single_expense(self, ctx):
        """Одна трата 42.50: баланс -42.50, строка "-$42.50" """
        TransactionController(ctx).create(_expense())

        with FinanceView(ctx) as view:
            page = view.render()

        assert page["summary"]["total_income"] == Decimal("0")
        assert page["summary"]["total_expenses"] == Decimal("42.50")
        assert page["summary"]["net_balance"] == Decimal("-42.50")
        assert page["summary_display"]["net_balance"] == "-$42.50"
        assert page["transactions"][0]["amount_display"] == "-$42.50"
        assert page["expenses_by_category"] == {"Food": Decimal("42.50")}

    def test_newest_transaction_first(self, ctx):
        controller = TransactionController(ctx)
        controller.create(_expense(date="2025-01-10", category="Transport"))
        controller.create({"type": "income", "amount": "3000", "category": "Salary", "date": "2025-01-14"})

        with FinanceView(ctx) as view:
            page = view.render()

        assert [t["category"] for t in page["transactions"]] == ["Salary", "Transport"]
        assert page["transactions"][0]["amount_display"] == "+$3,000.00"
        assert page["summary"]["net_balance"] == Decimal("2957.50")

    def test_savings_and_portfolio(self, ctx):
        SavingsTargetController(ctx).create({"name": "Car", "target_amount": "1000", "current_amount": "250"})
        InvestmentController(ctx).create({
            "name": "Index fund", "type": "Stocks", "amount": "1000", "current_value": "1200",
        })

        with FinanceView(ctx, tab="investments") as view:
            page = view.render()

        assert page["tab"] == "investments"
        saving = page["savings"][0]
        assert saving["progress"] == 25.0
        assert saving["progress_display"] == "25%"
        assert saving["current_display"] == "$250.00"

        investment = page["investments"][0]
        assert investment["gain_display"] == "+$200.00"
        assert investment["gain_percent_display"] == "+20.0%"
        assert investment["is_positive"] is True
        assert page["portfolio"]["gain"] == Decimal("200")
        assert page["summary"]["total_savings"] == Decimal("250")

    def test_unknown_tab_falls_back(self, ctx):
        assert FinanceView(ctx, tab="crypto").tab == "transactions"

    def test_delete_refreshes_mounted_view(self, ctx):
        tx = TransactionController(ctx).create(_expense()).row

        with FinanceView(ctx) as view:
            assert len(view.render()["transactions"]) == 1
            TransactionController(ctx).delete(tx["id"])
            page = view.render()

        assert page["transactions"] == []
        assert page["summary"]["net_balance"] == Decimal("0")
