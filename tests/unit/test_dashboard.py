"""Unit tests for dashboard statistics."""

import pytest
from datetime import datetime
import sys
import os

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from expenses.models import Expense
from insights.dashboard import calculate_dashboard_stats, previous_month_key


def make_expense(expense_id, amount, category, date):
    return Expense(expense_id=expense_id, amount=amount, category=category, date=date)


class TestDashboardStats:
    """Test cases for calculate_dashboard_stats."""

    @pytest.fixture
    def sample_expenses(self):
        """Expenses over three months."""
        return [
            make_expense('m1', 100.0, 'Food', '2024-03-02'),
            make_expense('m2', 200.0, 'Shopping', '2024-03-10'),
            make_expense('f1', 150.0, 'Food', '2024-02-20'),
            make_expense('j1', 1000.0, 'Travel', '2024-01-05'),
        ]

    def test_headline_numbers(self, sample_expenses):
        """Test totals, monthly comparison and top category."""
        stats = calculate_dashboard_stats(
            sample_expenses, risk_flags=3, now=datetime(2024, 3, 15)
        )

        assert stats.total == 1450.0
        assert stats.this_month == 300.0
        assert stats.last_month == 150.0
        assert stats.monthly_growth == pytest.approx(100.0)
        assert stats.transaction_count == 4
        assert stats.average_transaction == 362.5
        assert stats.top_category.name == 'Travel'
        assert stats.top_category.amount == 1000.0
        assert stats.risk_flags == 3

    def test_no_spending_last_month(self, sample_expenses):
        """Test that growth is zero without a previous month."""
        stats = calculate_dashboard_stats(sample_expenses, now=datetime(2024, 5, 1))

        assert stats.this_month == 0.0
        assert stats.last_month == 0.0
        assert stats.monthly_growth == 0.0

    def test_empty(self):
        """Test that no expenses yields zeros."""
        stats = calculate_dashboard_stats([], now=datetime(2024, 3, 15))

        assert stats.total == 0.0
        assert stats.average_transaction == 0.0
        assert stats.top_category is None
        assert stats.risk_flags == 0

    @pytest.mark.parametrize('moment,expected', [
        (datetime(2024, 1, 15), '2023-12'),
        (datetime(2024, 3, 31), '2024-02'),
        (datetime(2024, 12, 1), '2024-11'),
    ])
    def test_previous_month_key(self, moment, expected):
        """Test month rollover."""
        assert previous_month_key(moment) == expected


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
