"""Category and monthly aggregation over an expense collection."""

from collections import defaultdict
from typing import Dict, List, Sequence

from expenses.models import Expense
from shared.formatting import format_month_label
from shared.validators import VALID_CATEGORIES, DEFAULT_CATEGORY

from .models import CategoryAggregate, MonthlyAggregate


def amount_or_zero(expense: Expense) -> float:
    """Amount of an expense, with unparseable amounts counted as 0."""
    return expense.amount if expense.amount is not None else 0.0


def category_of(expense: Expense) -> str:
    """Category used for grouping; missing or unknown names fall back to Other."""
    if expense.category in VALID_CATEGORIES:
        return expense.category
    return DEFAULT_CATEGORY


def group_by_category(expenses: Sequence[Expense]) -> Dict[str, CategoryAggregate]:
    """
    Group expenses by category.

    Args:
        expenses: Expense collection

    Returns:
        Mapping of category name to its aggregate, in first-seen order
    """
    totals: Dict[str, float] = defaultdict(float)
    ids: Dict[str, List[str]] = defaultdict(list)

    for expense in expenses:
        category = category_of(expense)
        totals[category] += amount_or_zero(expense)
        ids[category].append(expense.expense_id)

    return {
        category: CategoryAggregate(
            category=category,
            total=total,
            count=len(ids[category]),
            average=total / len(ids[category]),
            expense_ids=tuple(ids[category])
        )
        for category, total in totals.items()
    }


def monthly_totals(expenses: Sequence[Expense]) -> List[MonthlyAggregate]:
    """
    Compute per-month totals ordered chronologically.

    Args:
        expenses: Expense collection

    Returns:
        Monthly aggregates sorted ascending by YYYY-MM key
    """
    totals: Dict[str, float] = defaultdict(float)
    counts: Dict[str, int] = defaultdict(int)

    for expense in expenses:
        month = expense.month_key
        totals[month] += amount_or_zero(expense)
        counts[month] += 1

    return [
        MonthlyAggregate(
            month_key=month,
            label=format_month_label(month),
            total=totals[month],
            count=counts[month],
            average=totals[month] / counts[month]
        )
        for month in sorted(totals)
    ]


def total_amount(expenses: Sequence[Expense]) -> float:
    """Sum of all amounts, counting unparseable amounts as 0."""
    return sum(amount_or_zero(expense) for expense in expenses)
