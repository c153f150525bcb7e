"""Statistical spending anomaly detection."""

import logging
import statistics
from typing import List, Sequence

from expenses.models import Expense

from .aggregation import amount_or_zero
from .models import RiskFinding, RiskType, Severity

logger = logging.getLogger(__name__)


MIN_SAMPLE_SIZE = 5
ANOMALY_Z_THRESHOLD = 2.5
HIGH_SEVERITY_Z_THRESHOLD = 3.0
MAX_ANOMALY_SCORE = 90
SCORE_PER_STD_DEV = 20


def detect_spending_anomalies(expenses: Sequence[Expense]) -> List[RiskFinding]:
    """
    Flag transactions far above the user's typical amount.

    Uses the population mean and standard deviation of all amounts. An
    expense is an anomaly when it exceeds mean + 2.5 standard deviations.

    Args:
        expenses: One user's expense collection

    Returns:
        Anomaly findings in input order; empty for fewer than five expenses
    """
    if len(expenses) < MIN_SAMPLE_SIZE:
        return []

    amounts = [amount_or_zero(expense) for expense in expenses]
    mean = statistics.fmean(amounts)
    std_dev = statistics.pstdev(amounts, mu=mean)

    if std_dev == 0:
        return []

    threshold = mean + ANOMALY_Z_THRESHOLD * std_dev
    high_threshold = mean + HIGH_SEVERITY_Z_THRESHOLD * std_dev

    findings = []
    for expense, amount in zip(expenses, amounts):
        if amount <= threshold:
            continue

        z_score = (amount - mean) / std_dev
        findings.append(RiskFinding(
            id=f"anomaly-{expense.expense_id}",
            type=RiskType.SPENDING_ANOMALY,
            expense=expense,
            severity=Severity.HIGH if amount > high_threshold else Severity.MEDIUM,
            risk_score=min(MAX_ANOMALY_SCORE, z_score * SCORE_PER_STD_DEV),
            message=f"Unusual spending: {z_score:.1f}σ above average",
            recommendation="Verify expense legitimacy"
        ))

    logger.debug(f"Flagged {len(findings)} spending anomalies (mean={mean:.2f}, std_dev={std_dev:.2f})")

    return findings
