"""Unit tests for statistical anomaly detection."""

import math
import pytest
import sys
import os

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from expenses.models import Expense
from insights.anomalies import detect_spending_anomalies
from insights.models import RiskType, Severity


def make_expenses(amounts):
    return [
        Expense(expense_id=f'e{i}', amount=amount, category='Food', date='2024-01-10')
        for i, amount in enumerate(amounts)
    ]


class TestSpendingAnomalies:
    """Test cases for detect_spending_anomalies."""

    def test_fewer_than_five_expenses(self):
        """Test that small samples return no findings."""
        assert detect_spending_anomalies(make_expenses([100, 100, 100, 100000])) == []

    def test_single_outlier_flagged(self):
        """Test one extreme outlier among ten ordinary expenses."""
        # A lone outlier among n values sits sqrt(n - 1) deviations above the mean
        expenses = make_expenses([100] * 10 + [100000])

        findings = detect_spending_anomalies(expenses)

        assert len(findings) == 1
        finding = findings[0]
        assert finding.expense.expense_id == 'e10'
        assert finding.id == 'anomaly-e10'
        assert finding.type == RiskType.SPENDING_ANOMALY
        assert finding.severity == Severity.HIGH
        assert finding.risk_score == pytest.approx(20 * math.sqrt(10))
        assert finding.message == 'Unusual spending: 3.2σ above average'

    def test_five_expenses_cannot_reach_threshold(self):
        """Test that four of 100 and one of 100000 stay below 2.5 deviations."""
        assert detect_spending_anomalies(make_expenses([100, 100, 100, 100, 100000])) == []

    def test_medium_severity_between_thresholds(self):
        """Test an outlier between 2.5 and 3 deviations."""
        findings = detect_spending_anomalies(make_expenses([100] * 7 + [1000]))

        assert len(findings) == 1
        assert findings[0].severity == Severity.MEDIUM
        assert findings[0].risk_score == pytest.approx(20 * math.sqrt(7))
        assert findings[0].message == 'Unusual spending: 2.6σ above average'

    def test_score_capped_at_90(self):
        """Test that very large deviations are capped."""
        findings = detect_spending_anomalies(make_expenses([100] * 21 + [10000]))

        assert len(findings) == 1
        assert findings[0].risk_score == 90

    def test_identical_amounts(self):
        """Test that zero deviation yields no findings."""
        assert detect_spending_anomalies(make_expenses([250] * 8)) == []

    def test_invalid_amounts_count_as_zero(self):
        """Test that unparseable amounts do not break the statistics."""
        findings = detect_spending_anomalies(make_expenses([100] * 9 + ['oops', 100000]))

        assert [f.expense.expense_id for f in findings] == ['e10']

    def test_idempotent(self):
        """Test that repeated runs produce identical output."""
        expenses = make_expenses([100] * 10 + [100000])

        assert detect_spending_anomalies(expenses) == detect_spending_anomalies(expenses)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
