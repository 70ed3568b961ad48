"""
Formatting helpers for receipts and CLI output.
"""
from decimal import Decimal, InvalidOperation
from datetime import datetime
from typing import Union, Optional


def money(value: Union[int, float, Decimal, str, None], symbol: str = '') -> str:
    """
    Format an amount with thousands separators and two decimals.

    Examples:
        money(1500) -> "1,500.00"
        money(Decimal('-20.5'), 'Rs.') -> "Rs. -20.50"
        money(None) -> "-"
    """
    if value is None or value == "":
        return "-"

    try:
        num = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return "-"

    formatted = f"{num.quantize(Decimal('0.01')):,.2f}"
    return f"{symbol} {formatted}" if symbol else formatted


def datetime_short(value: Optional[datetime]) -> str:
    """dd/mm/YYYY HH:MM, or '-' for empty values."""
    if not value:
        return "-"
    return value.strftime('%d/%m/%Y %H:%M')
