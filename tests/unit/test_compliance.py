"""Unit tests for the compliance scorer."""

import random
import pytest
import sys
import os

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from expenses.models import Expense
from insights.compliance import calculate_compliance_score
from insights.models import RiskFinding, RiskType, Severity
from insights.risks import detect_risks


def make_expenses(described, undescribed=0):
    expenses = [
        Expense(expense_id=f'd{i}', amount=10 + i, category='Food',
                date='2024-01-10', description='Receipt attached')
        for i in range(described)
    ]
    expenses += [
        Expense(expense_id=f'u{i}', amount=500 + i, category='Food', date='2024-01-10')
        for i in range(undescribed)
    ]
    return expenses


def make_finding(severity, expense):
    return RiskFinding(
        id=f'test-{expense.expense_id}',
        type=RiskType.HIGH_AMOUNT,
        expense=expense,
        severity=severity,
        risk_score=50,
        message='test',
        recommendation='test'
    )


class TestComplianceScore:
    """Test cases for calculate_compliance_score."""

    def test_empty_collection_scores_100(self):
        """Test that no data means no risk."""
        assert calculate_compliance_score([], []) == 100

    def test_clean_described_expenses_capped_at_100(self):
        """Test that the description bonus cannot push past 100."""
        assert calculate_compliance_score(make_expenses(3), []) == 100

    def test_critical_finding(self):
        """Test the severity penalty plus the per-finding penalty."""
        expenses = make_expenses(2)
        risks = [make_finding(Severity.CRITICAL, expenses[0])]

        # 100 - 15 - 2 + 10
        assert calculate_compliance_score(expenses, risks) == 93

    def test_mixed_findings_and_partial_descriptions(self):
        """Test medium and low penalties with half the expenses described."""
        expenses = make_expenses(1, undescribed=1)
        risks = [
            make_finding(Severity.MEDIUM, expenses[0]),
            make_finding(Severity.MEDIUM, expenses[1]),
            make_finding(Severity.LOW, expenses[1]),
        ]

        # 100 - 2*8 - 3*2 + 5
        assert calculate_compliance_score(expenses, risks) == 83

    def test_high_and_medium_are_charged_twice(self):
        """Current behaviour: every finding also pays the flat penalty."""
        expenses = make_expenses(1)
        high = calculate_compliance_score(expenses, [make_finding(Severity.HIGH, expenses[0])])
        low = calculate_compliance_score(expenses, [make_finding(Severity.LOW, expenses[0])])

        assert 100 - high == 17 - 10
        assert low == 100

    def test_rounds_half_up(self):
        """Test that .5 rounds up rather than to even."""
        expenses = make_expenses(1, undescribed=3)
        risks = [make_finding(Severity.MEDIUM, expenses[1])]

        # 100 - 8 - 2 + 2.5 = 92.5
        assert calculate_compliance_score(expenses, risks) == 93

    def test_clamped_at_zero(self):
        """Test the lower bound."""
        expenses = make_expenses(0, undescribed=2)
        risks = [make_finding(Severity.CRITICAL, expenses[0])] * 10

        assert calculate_compliance_score(expenses, risks) == 0

    def test_bounds_on_generated_collections(self):
        """Test that scores stay within [0, 100] for varied inputs."""
        rng = random.Random(7)
        categories = ['Food', 'Travel', 'Office', 'Shopping']

        for _ in range(25):
            expenses = [
                Expense(
                    expense_id=f'e{i}',
                    amount=rng.choice([50, 500, 6000, 60000, 150000]),
                    category=rng.choice(categories),
                    date=f'2024-01-{rng.randint(1, 28):02d}',
                    vendor=rng.choice([None, 'Vendor']),
                    description=rng.choice(['', 'Something'])
                )
                for i in range(rng.randint(1, 15))
            ]

            score = calculate_compliance_score(expenses, detect_risks(expenses))

            assert 0 <= score <= 100


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
