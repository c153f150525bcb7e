"""CSV export of expense lists."""

from datetime import date
from io import StringIO
from typing import Optional, Sequence
import csv

from expenses.models import Expense


CSV_HEADERS = [
    'Date',
    'Category',
    'Description',
    'Amount',
    'Vendor',
    'Payment Method',
    'Status',
    'Created At'
]


def export_to_csv(expenses: Sequence[Expense]) -> str:
    """
    Export expenses to CSV format.

    Args:
        expenses: Expenses in the order they should appear

    Returns:
        CSV content as string, every cell quoted
    """
    output = StringIO()
    writer = csv.writer(output, quoting=csv.QUOTE_ALL, lineterminator='\n')

    writer.writerow(CSV_HEADERS)

    for expense in expenses:
        writer.writerow([
            expense.date.isoformat(),
            expense.category or '',
            expense.description or '',
            expense.amount if expense.amount is not None else '',
            expense.vendor or '',
            expense.payment_method or '',
            expense.status or '',
            expense.created_at.isoformat() if expense.created_at else ''
        ])

    csv_content = output.getvalue()
    output.close()

    return csv_content


def export_filename(today: Optional[date] = None) -> str:
    """Download filename for an export made on the given day."""
    today = today or date.today()
    return f"expenses-{today.isoformat()}.csv"
