# app/utils/numbers.py
from decimal import Decimal


def to_float(value):
    """Numeric columns come back as Decimal; the API speaks JSON numbers."""
    if value is None:
        return None
    if isinstance(value, Decimal):
        return float(value)
    return value
