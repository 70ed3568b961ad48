"""Number parsing utilities for JSON request payloads."""
from decimal import Decimal, InvalidOperation
from typing import Any


def parse_int(value: Any, field: str) -> int:
    """
    Parse an integer id or quantity coming from JSON or a URL.

    Accepts ints and integral strings ("3", " 3 "). Floats with a fractional
    part, booleans and anything else are rejected.

    Raises:
        ValueError: if the value is not an integer.
    """
    if isinstance(value, bool) or value is None:
        raise ValueError(f'{field} must be an integer')

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise ValueError(f'{field} must be an integer')

    if isinstance(value, str):
        cleaned = value.strip()
        try:
            return int(cleaned)
        except ValueError:
            raise ValueError(f'{field} must be an integer')

    raise ValueError(f'{field} must be an integer')


def parse_decimal(value: Any, field: str, default: Decimal = Decimal('0')) -> Decimal:
    """
    Parse a monetary amount to Decimal.

    None and empty strings fall back to ``default``. Floats go through ``str``
    so 0.1 stays 0.1. No range check is applied.

    Raises:
        ValueError: if the value is not numeric.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return default

    if isinstance(value, bool):
        raise ValueError(f'{field} must be a number')

    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise ValueError(f'{field} must be a number')

    if not amount.is_finite():
        raise ValueError(f'{field} must be a number')

    return amount
