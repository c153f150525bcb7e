"""Expense service for recording and loading a user's expenses."""

import os
import uuid
from typing import Dict, Any, List, Optional, Sequence
from datetime import date, datetime
import logging
from boto3.dynamodb.conditions import Key
from pydantic import ValidationError as ModelValidationError

from shared.dynamodb import DynamoDBClient
from shared.validators import (
    validate_expense_data,
    sanitize_string,
    MAX_DESCRIPTION_LENGTH,
    MAX_VENDOR_LENGTH
)
from shared.exceptions import ValidationError, NotFoundError
from expenses.models import CategoryConfig, Expense

logger = logging.getLogger(__name__)


class ExpenseService:
    """Service for managing expenses."""

    def __init__(self):
        """Initialize expense service."""
        self.expenses_table = DynamoDBClient(os.environ.get('EXPENSES_TABLE'))

    def create_expense(
        self,
        user_id: str,
        data: Dict[str, Any],
        categories: Sequence[CategoryConfig] = (),
        today: Optional[date] = None
    ) -> Expense:
        """
        Validate and store a new expense.

        Args:
            user_id: User ID
            data: Expense fields (amount, category, date, vendor, description, ...)
            categories: The user's category configs, for the monthly limit check
            today: Reference date for the future-date check

        Returns:
            Created expense

        Raises:
            ValidationError: If any field fails validation
        """
        errors = validate_expense_data(data, categories, today=today)
        if errors:
            raise ValidationError("Invalid expense data", details=errors)

        now = datetime.utcnow().isoformat()
        record = {
            'user_id': user_id,
            'expense_id': str(uuid.uuid4()),
            'amount': float(data['amount']),
            'category': data['category'],
            'date': str(data['date']),
            'vendor': sanitize_string(data.get('vendor') or '', max_length=MAX_VENDOR_LENGTH),
            'description': sanitize_string(
                data.get('description') or '', max_length=MAX_DESCRIPTION_LENGTH
            ),
            'receipt_url': data.get('receipt_url'),
            'payment_method': data.get('payment_method'),
            'created_at': now,
            'updated_at': now
        }

        stored = self.expenses_table.put_item(record)

        logger.info(f"Created expense {record['expense_id']} for user {user_id}")
        return Expense.from_record(stored)

    def get_expense(self, user_id: str, expense_id: str) -> Expense:
        """
        Get expense by ID.

        Args:
            user_id: User ID
            expense_id: Expense ID

        Returns:
            Expense

        Raises:
            NotFoundError: If expense not found
        """
        record = self.expenses_table.get_item({
            'user_id': user_id,
            'expense_id': expense_id
        })

        if not record:
            raise NotFoundError("Expense not found")

        return Expense.from_record(record)

    def list_all_expenses(self, user_id: str) -> List[Expense]:
        """
        Load the user's full expense snapshot, newest first.

        Records that cannot be read as expenses are logged and left out.

        Args:
            user_id: User ID

        Returns:
            Expenses ordered by creation time, most recent first
        """
        records = self.expenses_table.query_all(
            key_condition_expression=Key('user_id').eq(user_id),
            index_name='user-created-index',
            scan_forward=False
        )

        expenses = []
        for record in records:
            try:
                expenses.append(Expense.from_record(record))
            except ModelValidationError as e:
                logger.warning(
                    f"Skipping unreadable expense {record.get('expense_id')}: "
                    f"{e.error_count()} validation error(s)"
                )

        logger.info(f"Loaded {len(expenses)} expenses for user {user_id}")
        return expenses

    def delete_expense(self, user_id: str, expense_id: str) -> None:
        """
        Delete expense.

        Args:
            user_id: User ID
            expense_id: Expense ID

        Raises:
            NotFoundError: If expense not found
        """
        # Verify expense exists
        self.get_expense(user_id, expense_id)

        self.expenses_table.delete_item({
            'user_id': user_id,
            'expense_id': expense_id
        })

        logger.info(f"Deleted expense {expense_id}")
