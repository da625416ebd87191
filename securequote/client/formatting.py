"""
Display formatting for quotation views.
"""

from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # str() first so floats keep their shortest repr instead of binary noise
    return Decimal(str(value))


def format_currency(amount: Number) -> str:
    """Format an amount as US dollars, e.g. $125,000.00 or -$50.00"""
    value = _to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_percentage(value: Number) -> str:
    """Format a percentage with two decimals, e.g. 56.25%"""
    return f"{_to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)}%"


def format_date(value: datetime) -> str:
    """Format a date like Jan 15, 2024"""
    return f"{value:%b} {value.day}, {value.year}"


def status_badge(status) -> str:
    return _label(status).upper()


def risk_badge(risk_level) -> str:
    return f"Risk: {_label(risk_level).upper()}"


def confidentiality_badge(level) -> str:
    return _label(level).replace("_", " ").upper()


def _label(value) -> str:
    return getattr(value, "value", value)
