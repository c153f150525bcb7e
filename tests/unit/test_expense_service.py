"""Unit tests for expense service."""

import pytest
from unittest.mock import Mock, patch
from datetime import date
import sys
import os

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from expenses.models import CategoryConfig
from expenses.service import ExpenseService
from shared.exceptions import NotFoundError, ValidationError


TODAY = date(2024, 1, 20)


class TestExpenseService:
    """Test cases for ExpenseService."""

    @pytest.fixture
    def expense_service(self):
        """Create expense service instance with mocked DynamoDB."""
        with patch('expenses.service.DynamoDBClient'):
            service = ExpenseService()
            service.expenses_table = Mock()
            service.expenses_table.put_item.side_effect = lambda item: item
            return service

    @pytest.fixture
    def sample_expense(self):
        """Sample stored expense record."""
        return {
            'user_id': 'user123',
            'expense_id': 'exp123',
            'amount': 45.67,
            'vendor': 'Cafe',
            'category': 'Food',
            'date': '2024-01-15',
            'created_at': '2024-01-15T10:00:00',
            'updated_at': '2024-01-15T10:00:00'
        }

    def test_create_expense_success(self, expense_service):
        """Test creating an expense."""
        result = expense_service.create_expense(
            'user123',
            {
                'amount': '250.50',
                'category': 'Travel',
                'date': '2024-01-18',
                'vendor': '  Uber  ',
                'description': 'Airport cab'
            },
            today=TODAY
        )

        assert result.amount == 250.5
        assert result.vendor == 'Uber'
        assert result.user_id == 'user123'
        assert result.expense_id
        assert result.created_at is not None

        stored = expense_service.expenses_table.put_item.call_args[0][0]
        assert stored['user_id'] == 'user123'
        assert stored['date'] == '2024-01-18'
        assert stored['created_at'] == stored['updated_at']

    def test_create_expense_collects_errors(self, expense_service):
        """Test that validation errors are reported per field."""
        with pytest.raises(ValidationError) as exc_info:
            expense_service.create_expense(
                'user123',
                {'amount': 0, 'category': 'Groceries', 'date': '2024-01-25'},
                today=TODAY
            )

        assert set(exc_info.value.details) == {'amount', 'category', 'date'}
        expense_service.expenses_table.put_item.assert_not_called()

    def test_create_expense_over_category_limit(self, expense_service):
        """Test the single-expense monthly limit check."""
        categories = [CategoryConfig(name='Food', monthly_limit=5000)]

        with pytest.raises(ValidationError) as exc_info:
            expense_service.create_expense(
                'user123',
                {'amount': 6000, 'category': 'Food', 'date': '2024-01-18'},
                categories=categories,
                today=TODAY
            )

        assert exc_info.value.details == {
            'amount': 'Amount exceeds monthly limit of ₹5,000'
        }

    def test_get_expense_success(self, expense_service, sample_expense):
        """Test getting an expense successfully."""
        expense_service.expenses_table.get_item.return_value = sample_expense

        result = expense_service.get_expense('user123', 'exp123')

        assert result.expense_id == 'exp123'
        assert result.amount == 45.67
        expense_service.expenses_table.get_item.assert_called_once_with({
            'user_id': 'user123',
            'expense_id': 'exp123'
        })

    def test_get_expense_not_found(self, expense_service):
        """Test getting a non-existent expense."""
        expense_service.expenses_table.get_item.return_value = None

        with pytest.raises(NotFoundError, match="Expense not found"):
            expense_service.get_expense('user123', 'nonexistent')

    def test_list_all_expenses(self, expense_service, sample_expense):
        """Test loading the full snapshot newest first."""
        expense_service.expenses_table.query_all.return_value = [
            sample_expense,
            {**sample_expense, 'expense_id': 'exp124', 'amount': 'n/a'},
        ]

        result = expense_service.list_all_expenses('user123')

        assert [e.expense_id for e in result] == ['exp123', 'exp124']
        assert result[1].amount is None

        call_kwargs = expense_service.expenses_table.query_all.call_args[1]
        assert call_kwargs['index_name'] == 'user-created-index'
        assert call_kwargs['scan_forward'] is False

    def test_list_all_expenses_skips_unreadable_records(self, expense_service, sample_expense):
        """Test that a record without a date is left out."""
        broken = {k: v for k, v in sample_expense.items() if k != 'date'}
        broken['expense_id'] = 'broken'
        expense_service.expenses_table.query_all.return_value = [broken, sample_expense]

        result = expense_service.list_all_expenses('user123')

        assert [e.expense_id for e in result] == ['exp123']

    def test_delete_expense_success(self, expense_service, sample_expense):
        """Test deleting an expense successfully."""
        expense_service.expenses_table.get_item.return_value = sample_expense

        expense_service.delete_expense('user123', 'exp123')

        expense_service.expenses_table.delete_item.assert_called_once_with({
            'user_id': 'user123',
            'expense_id': 'exp123'
        })

    def test_delete_expense_not_found(self, expense_service):
        """Test deleting a non-existent expense."""
        expense_service.expenses_table.get_item.return_value = None

        with pytest.raises(NotFoundError):
            expense_service.delete_expense('user123', 'nonexistent')

        expense_service.expenses_table.delete_item.assert_not_called()


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
