from decimal import Decimal
from typing import Any


def format_currency(value: Any) -> str:
    """Brazilian money format: R$ 1.234,56. Empty string when there is no value."""
    if value is None or value == "":
        return ""
    if isinstance(value, Decimal):
        value = float(value)
    return f"R$ {float(value):,.2f}".replace(",", "X").replace(".", ",").replace("X", ".")


def format_amount(value: Any) -> str:
    """Same as format_currency without the symbol (slip tables)."""
    if value is None or value == "":
        return ""
    return format_currency(value)[3:]
