"""Current-month category spending against configured limits."""

from datetime import date, datetime
from typing import List, Optional, Sequence

from expenses.models import CategoryConfig, Expense

from .aggregation import group_by_category
from .models import CategoryLimitStatus, LimitRiskLevel


def month_key_of(moment: date) -> str:
    """YYYY-MM key of a date or datetime."""
    return moment.isoformat()[:7]


def limit_risk_level(percentage: float, limit: Optional[float]) -> LimitRiskLevel:
    """Map a utilization percentage to a risk tier."""
    if not limit:
        return LimitRiskLevel.NONE
    if percentage > 100:
        return LimitRiskLevel.CRITICAL
    if percentage > 80:
        return LimitRiskLevel.HIGH
    if percentage > 60:
        return LimitRiskLevel.MEDIUM
    return LimitRiskLevel.LOW


def calculate_category_limits(
    expenses: Sequence[Expense],
    categories: Sequence[CategoryConfig],
    now: Optional[date] = None
) -> List[CategoryLimitStatus]:
    """
    Compare this month's spend per category with its monthly limit.

    Args:
        expenses: One user's expense collection
        categories: Category configs; a missing or zero limit means no limit
        now: Evaluation instant (default: current UTC time)

    Returns:
        One status per configured category, in configuration order
    """
    current_month = month_key_of(now or datetime.utcnow())
    monthly_expenses = [e for e in expenses if e.month_key == current_month]
    spending = group_by_category(monthly_expenses)

    statuses = []
    for category in categories:
        aggregate = spending.get(category.name)
        spent = aggregate.total if aggregate else 0.0
        limit = category.monthly_limit
        percentage = (spent / limit) * 100 if limit else 0.0

        statuses.append(CategoryLimitStatus(
            name=category.name,
            emoji=category.emoji,
            spent=spent,
            limit=limit,
            percentage=percentage,
            remaining=max(0.0, limit - spent) if limit else None,
            is_over_limit=spent > limit if limit else False,
            risk_level=limit_risk_level(percentage, limit)
        ))

    return statuses
