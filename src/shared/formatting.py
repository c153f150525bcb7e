"""Display formatting helpers shared by validation messages and reports."""

import math
from datetime import date
from typing import Any


CURRENCY_SYMBOL = "₹"


def format_currency(amount: Any) -> str:
    """
    Format an amount as a rupee string.

    Args:
        amount: Numeric amount (anything float() accepts)

    Returns:
        Formatted string such as "₹1,250.50"; invalid amounts render as "₹0"
    """
    try:
        value = float(amount)
    except (TypeError, ValueError):
        return f"{CURRENCY_SYMBOL}0"

    if math.isnan(value) or math.isinf(value):
        return f"{CURRENCY_SYMBOL}0"

    if value == int(value):
        return f"{CURRENCY_SYMBOL}{int(value):,}"
    return f"{CURRENCY_SYMBOL}{value:,.2f}"


def format_month_label(month_key: str) -> str:
    """Render a YYYY-MM key as a short label, e.g. "Jan 2024"."""
    year, month = month_key.split('-')
    return date(int(year), int(month), 1).strftime('%b %Y')
