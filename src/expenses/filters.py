"""Search, filter and sort helpers for expense lists."""

from typing import Any, Callable, Dict, List, Sequence

from shared.exceptions import ValidationError
from expenses.models import Expense


SORT_KEYS: Dict[str, Callable[[Expense], Any]] = {
    'date': lambda expense: expense.date,
    'amount': lambda expense: expense.amount if expense.amount is not None else 0.0,
    'category': lambda expense: (expense.category or '').lower(),
}

SORT_ORDERS = ('asc', 'desc')


def matches_search(expense: Expense, search_term: str) -> bool:
    """Case-insensitive match against description, category and vendor."""
    needle = search_term.lower()
    haystacks = (expense.description, expense.category, expense.vendor)
    return any(needle in value.lower() for value in haystacks if value)


def filter_expenses(
    expenses: Sequence[Expense],
    search_term: str = '',
    category: str = '',
    sort_by: str = 'date',
    sort_order: str = 'desc'
) -> List[Expense]:
    """
    Filter and sort an expense list for display.

    Args:
        expenses: Expense collection
        search_term: Substring to look for; empty matches everything
        category: Exact category to keep; empty keeps all
        sort_by: One of date, amount, category
        sort_order: asc or desc

    Returns:
        New list of matching expenses in the requested order

    Raises:
        ValidationError: If sort_by or sort_order is not recognised
    """
    if sort_by not in SORT_KEYS:
        raise ValidationError(
            f"Invalid sort field. Must be one of: {', '.join(SORT_KEYS)}"
        )
    if sort_order not in SORT_ORDERS:
        raise ValidationError("Invalid sort order. Must be asc or desc")

    filtered = [
        expense for expense in expenses
        if (not search_term or matches_search(expense, search_term))
        and (not category or expense.category == category)
    ]

    return sorted(filtered, key=SORT_KEYS[sort_by], reverse=(sort_order == 'desc'))
