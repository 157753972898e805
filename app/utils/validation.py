"""
Validation utilities (form / API input normalisation)
"""
import re
from datetime import date, time, datetime
from decimal import Decimal, InvalidOperation


def normalize_decimal_input(value: str) -> str:
    """
    Нормализовать ввод суммы: заменить запятую на точку, убрать пробелы

    Example:
        >>> normalize_decimal_input("100,50")
        "100.50"
    """
    return value.strip().replace(" ", "").replace(",", ".")


def validate_decimal_amount(value: str, max_decimal_places: int = 2) -> tuple[bool, str | None]:
    """
    Валидация денежной суммы

    Returns:
        (is_valid, error_message)

    Example:
        >>> validate_decimal_amount("100.50")
        (True, None)
        >>> validate_decimal_amount("100.505")
        (False, "At most 2 decimal places allowed")
    """
    normalized = normalize_decimal_input(value)

    try:
        Decimal(normalized)
    except (InvalidOperation, ValueError):
        return False, "Invalid amount"

    pattern = rf"^-?\d+(\.\d{{1,{max_decimal_places}}})?$"
    if not re.match(pattern, normalized):
        return False, f"At most {max_decimal_places} decimal places allowed"

    return True, None


def parse_amount(value, max_decimal_places: int = 2) -> Decimal | None:
    """
    Привести ввод к Decimal (пустое значение -> None)

    Raises:
        ValueError: некорректная сумма или отрицательное значение
    """
    if value is None:
        return None
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        value = str(value)
    if not isinstance(value, str):
        raise ValueError("Invalid amount")
    if not value.strip():
        return None

    is_valid, error = validate_decimal_amount(value, max_decimal_places)
    if not is_valid:
        raise ValueError(error)

    amount = Decimal(normalize_decimal_input(value))
    if amount < 0:
        raise ValueError("Amount cannot be negative")
    return amount


def parse_date(value) -> date | None:
    """"2025-01-10" / date / datetime -> date, пустое -> None"""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value)[:10])
    except ValueError:
        raise ValueError(f"Invalid date: {value}")


def parse_time(value) -> time | None:
    """"09:30" / "09:30:00" / time -> time, пустое -> None"""
    if value is None or value == "":
        return None
    if isinstance(value, time):
        return value
    try:
        return time.fromisoformat(str(value))
    except ValueError:
        raise ValueError(f"Invalid time: {value}")

