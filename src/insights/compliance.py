"""Heuristic compliance score derived from rule-based risk findings."""

import math
from typing import Sequence

from expenses.models import Expense

from .models import RiskFinding, Severity


BASE_SCORE = 100
HIGH_RISK_PENALTY = 15
MEDIUM_RISK_PENALTY = 8
PER_FINDING_PENALTY = 2
DESCRIPTION_BONUS = 10


def calculate_compliance_score(
    expenses: Sequence[Expense],
    risks: Sequence[RiskFinding]
) -> int:
    """
    Score a user's expenses from 0 to 100.

    Every finding costs PER_FINDING_PENALTY on top of its severity penalty,
    so high and medium findings are charged twice. This mirrors the current
    scoring and is not a calibrated formula.

    Args:
        expenses: One user's expense collection
        risks: Rule-based findings for the same collection

    Returns:
        Integer score in [0, 100]; 100 when there are no expenses
    """
    if not expenses:
        return BASE_SCORE

    high_risk_count = sum(
        1 for risk in risks if risk.severity in (Severity.CRITICAL, Severity.HIGH)
    )
    medium_risk_count = sum(1 for risk in risks if risk.severity == Severity.MEDIUM)

    score = float(BASE_SCORE)
    score -= high_risk_count * HIGH_RISK_PENALTY
    score -= medium_risk_count * MEDIUM_RISK_PENALTY
    score -= len(risks) * PER_FINDING_PENALTY

    described = sum(
        1 for expense in expenses
        if expense.description and expense.description.strip()
    )
    score += (described / len(expenses)) * DESCRIPTION_BONUS

    # Round half up
    return max(0, min(BASE_SCORE, math.floor(score + 0.5)))
