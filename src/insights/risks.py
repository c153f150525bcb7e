"""Rule-based risk detection over a user's expenses."""

import logging
from collections import defaultdict
from typing import Dict, List, Optional, Sequence

from expenses.models import Expense

from .models import RiskFinding, RiskType, Severity

logger = logging.getLogger(__name__)


CRITICAL_AMOUNT = 100000
HIGH_AMOUNT = 50000
RECEIPT_REQUIRED_AMOUNT = 5000

DUPLICATE_AMOUNT_TOLERANCE = 0.01
DUPLICATE_WINDOW_DAYS = 3

BUSINESS_CATEGORIES = ('Office', 'Travel')
WEEKEND_DAYS = (5, 6)  # Saturday, Sunday

MISSING_FIELD_SCORE = 15


def detect_high_amount(expenses: Sequence[Expense]) -> List[RiskFinding]:
    """Flag single transactions above the approval thresholds."""
    findings = []

    for expense in expenses:
        amount = expense.amount
        if amount is None:
            continue

        if amount > CRITICAL_AMOUNT:
            findings.append(RiskFinding(
                id=f"high-{expense.expense_id}",
                type=RiskType.HIGH_AMOUNT,
                expense=expense,
                severity=Severity.CRITICAL,
                risk_score=95,
                message="Critical: Very high amount transaction",
                recommendation="Immediate approval required"
            ))
        elif amount > HIGH_AMOUNT:
            findings.append(RiskFinding(
                id=f"high-{expense.expense_id}",
                type=RiskType.HIGH_AMOUNT,
                expense=expense,
                severity=Severity.HIGH,
                risk_score=75,
                message="High amount transaction requires review",
                recommendation="Manager approval recommended"
            ))

    return findings


def _is_duplicate_pair(expense: Expense, other: Expense) -> bool:
    if abs(other.amount - expense.amount) >= DUPLICATE_AMOUNT_TOLERANCE:
        return False
    return abs((other.date - expense.date).days) <= DUPLICATE_WINDOW_DAYS


def detect_duplicates(expenses: Sequence[Expense]) -> List[RiskFinding]:
    """
    Flag expenses that have a near-identical twin in the same category.

    Two expenses match when their amounts differ by less than 0.01 and their
    dates are at most three days apart. Matching is symmetric, so each side
    of a pair gets its own finding. Only expenses of the same category are
    ever compared.
    """
    buckets: Dict[Optional[str], List[int]] = defaultdict(list)
    for index, expense in enumerate(expenses):
        if expense.amount is not None:
            buckets[expense.category].append(index)

    findings = []
    for index, expense in enumerate(expenses):
        if expense.amount is None:
            continue

        matches = sum(
            1 for other_index in buckets[expense.category]
            if other_index != index and _is_duplicate_pair(expense, expenses[other_index])
        )

        if matches > 0:
            findings.append(RiskFinding(
                id=f"dup-{expense.expense_id}",
                type=RiskType.DUPLICATE,
                expense=expense,
                severity=Severity.MEDIUM,
                risk_score=60,
                message=f"Potential duplicate: {matches} similar transaction(s)",
                recommendation="Verify transaction authenticity"
            ))

    return findings


def detect_weekend_business(expenses: Sequence[Expense]) -> List[RiskFinding]:
    """Flag office and travel expenses dated on a weekend."""
    findings = []

    for expense in expenses:
        if expense.date.weekday() in WEEKEND_DAYS and expense.category in BUSINESS_CATEGORIES:
            findings.append(RiskFinding(
                id=f"weekend-{expense.expense_id}",
                type=RiskType.SUSPICIOUS_PATTERN,
                expense=expense,
                severity=Severity.LOW,
                risk_score=30,
                message="Business expense on weekend",
                recommendation="Verify business necessity"
            ))

    return findings


def missing_fields(expense: Expense) -> List[str]:
    """Names of the supporting fields an expense lacks."""
    missing = []

    if not expense.description or not expense.description.strip():
        missing.append('description')
    if not expense.vendor:
        missing.append('vendor')
    if (expense.amount is not None and expense.amount > RECEIPT_REQUIRED_AMOUNT
            and not expense.receipt_url):
        missing.append('receipt')

    return missing


def detect_missing_fields(expenses: Sequence[Expense]) -> List[RiskFinding]:
    """Flag expenses with incomplete documentation."""
    findings = []

    for expense in expenses:
        missing = missing_fields(expense)
        if not missing:
            continue

        findings.append(RiskFinding(
            id=f"missing-{expense.expense_id}",
            type=RiskType.MISSING_FIELD,
            expense=expense,
            severity=Severity.MEDIUM if 'receipt' in missing else Severity.LOW,
            risk_score=len(missing) * MISSING_FIELD_SCORE,
            message=f"Missing: {', '.join(missing)}",
            recommendation="Complete required information"
        ))

    return findings


RULES = (
    detect_high_amount,
    detect_duplicates,
    detect_weekend_business,
    detect_missing_fields,
)


def detect_risks(expenses: Sequence[Expense]) -> List[RiskFinding]:
    """
    Run every risk rule and rank the findings.

    Rules run in a fixed order over the expenses in input order. The merged
    list is sorted by risk_score, highest first; findings with equal scores
    keep that encounter order.

    Args:
        expenses: One user's expense collection

    Returns:
        Findings sorted by descending risk score
    """
    findings: List[RiskFinding] = []
    for rule in RULES:
        findings.extend(rule(expenses))

    logger.debug(f"Detected {len(findings)} risk findings across {len(expenses)} expenses")

    return sorted(findings, key=lambda finding: finding.risk_score, reverse=True)
