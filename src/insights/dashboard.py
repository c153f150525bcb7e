"""Headline dashboard statistics."""

from datetime import date, datetime
from typing import Optional, Sequence

from expenses.models import Expense

from .aggregation import group_by_category, total_amount
from .limits import month_key_of
from .models import DashboardStats, TopCategory


def previous_month_key(moment: date) -> str:
    """YYYY-MM key of the month before the given date."""
    if moment.month == 1:
        return f"{moment.year - 1:04d}-12"
    return f"{moment.year:04d}-{moment.month - 1:02d}"


def calculate_dashboard_stats(
    expenses: Sequence[Expense],
    risk_flags: int = 0,
    now: Optional[date] = None
) -> DashboardStats:
    """
    Compute the dashboard headline numbers.

    Args:
        expenses: One user's expense collection
        risk_flags: Number of risk and anomaly findings to report
        now: Evaluation instant (default: current UTC time)

    Returns:
        Dashboard statistics
    """
    now = now or datetime.utcnow()
    current_month = month_key_of(now)
    last_month = previous_month_key(now)

    total = total_amount(expenses)
    this_month_total = total_amount([e for e in expenses if e.month_key == current_month])
    last_month_total = total_amount([e for e in expenses if e.month_key == last_month])

    if last_month_total > 0:
        monthly_growth = ((this_month_total - last_month_total) / last_month_total) * 100
    else:
        monthly_growth = 0.0

    top_category = None
    by_category = group_by_category(expenses)
    if by_category:
        top = max(by_category.values(), key=lambda aggregate: aggregate.total)
        top_category = TopCategory(name=top.category, amount=top.total)

    return DashboardStats(
        total=total,
        this_month=this_month_total,
        last_month=last_month_total,
        monthly_growth=monthly_growth,
        transaction_count=len(expenses),
        average_transaction=total / len(expenses) if expenses else 0.0,
        top_category=top_category,
        risk_flags=risk_flags
    )
