"""Insights service: loads a user's snapshot and runs the risk engine over it."""

from datetime import datetime
from typing import Any, Dict, List, Optional
import logging

from expenses.service import ExpenseService
from categories.service import CategoryService
from reports.export import export_to_csv

from .aggregation import group_by_category, monthly_totals
from .anomalies import detect_spending_anomalies
from .compliance import calculate_compliance_score
from .dashboard import calculate_dashboard_stats
from .limits import calculate_category_limits
from .models import CategoryLimitStatus, InsightsReport
from .risks import detect_risks

logger = logging.getLogger(__name__)


class InsightsService:
    """Service for computing risk and spending insights."""

    def __init__(self):
        """Initialize insights service."""
        self.expense_service = ExpenseService()
        self.category_service = CategoryService()

    def get_insights(self, user_id: str, now: Optional[datetime] = None) -> InsightsReport:
        """
        Build the full insights report for a user.

        Args:
            user_id: User ID
            now: Evaluation instant (default: current UTC time)

        Returns:
            Insights report
        """
        now = now or datetime.utcnow()
        expenses = self.expense_service.list_all_expenses(user_id)
        categories = self.category_service.list_categories(user_id)

        rule_risks = detect_risks(expenses)
        anomalies = detect_spending_anomalies(expenses)
        risks = rule_risks + anomalies

        report = InsightsReport(
            user_id=user_id,
            generated_at=now.isoformat(),
            stats=calculate_dashboard_stats(expenses, risk_flags=len(risks), now=now),
            by_category=group_by_category(expenses),
            monthly=monthly_totals(expenses),
            risks=risks,
            category_limits=calculate_category_limits(expenses, categories, now=now),
            compliance_score=calculate_compliance_score(expenses, rule_risks)
        )

        logger.info(
            f"Insights for user {user_id}: {len(expenses)} expenses, "
            f"{len(rule_risks)} risks, {len(anomalies)} anomalies, "
            f"compliance {report.compliance_score}"
        )
        return report

    def get_risks(self, user_id: str) -> Dict[str, Any]:
        """
        Get risk findings and the compliance score for a user.

        Rule-based findings come first (ranked by score), followed by
        statistical anomalies. Only rule-based findings affect the score.

        Args:
            user_id: User ID

        Returns:
            Dictionary with risks, count and compliance_score
        """
        expenses = self.expense_service.list_all_expenses(user_id)

        rule_risks = detect_risks(expenses)
        risks = rule_risks + detect_spending_anomalies(expenses)

        return {
            'risks': risks,
            'count': len(risks),
            'compliance_score': calculate_compliance_score(expenses, rule_risks)
        }

    def get_category_limits(
        self,
        user_id: str,
        now: Optional[datetime] = None
    ) -> List[CategoryLimitStatus]:
        """
        Get this month's category limit statuses for a user.

        Args:
            user_id: User ID
            now: Evaluation instant (default: current UTC time)

        Returns:
            One status per category
        """
        expenses = self.expense_service.list_all_expenses(user_id)
        categories = self.category_service.list_categories(user_id)

        return calculate_category_limits(expenses, categories, now=now)

    def export_csv(self, user_id: str) -> str:
        """
        Export the user's expenses as CSV, newest first.

        Args:
            user_id: User ID

        Returns:
            CSV content, or an empty string when the user has no expenses
        """
        expenses = self.expense_service.list_all_expenses(user_id)
        if not expenses:
            return ''

        return export_to_csv(expenses)
