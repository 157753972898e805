"""
Unified money formatting for the whole project.

Usage:
    from app.utils.money import format_money

    format_money(15000)                -> "$15,000.00"
    format_money(Decimal("-42.5"))     -> "-$42.50"
    format_signed({"type": "expense", "amount": "42.50"}) -> "-$42.50"
"""
from decimal import Decimal

from app.readmodels.metrics import to_decimal


def format_money(amount, symbol: str = "$", decimals: int = 2) -> str:
    """
    Отформатировать сумму с запятыми-разделителями тысяч и символом валюты.

    Args:
        amount: число (int / float / Decimal / str / None)
        symbol: символ валюты перед суммой
        decimals: знаков после запятой

    Returns:
        "$15,000.00" / "-$42.50"
    """
    value = to_decimal(amount)
    sign = "-" if value < 0 else ""
    formatted = f"{{:,.{decimals}f}}".format(abs(value))
    return f"{sign}{symbol}{formatted}"


def format_signed(row: dict, symbol: str = "$") -> str:
    """Сумма транзакции со знаком направления: +$100.00 / -$42.50"""
    prefix = "+" if row.get("type") == "income" else "-"
    return f"{prefix}{format_money(row.get('amount'), symbol)}"


def format_percent(value, decimals: int = 1) -> str:
    """12.345 -> "12.3%", None -> "—" (процент не определён)"""
    if value is None:
        return "—"
    return f"{{:.{decimals}f}}%".format(Decimal(str(value)))
