"""Derived insight models: findings, aggregates and limit statuses."""

from enum import Enum
from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel

from expenses.models import Expense


class RiskType(str, Enum):
    """Kind of rule or statistic that produced a finding."""

    HIGH_AMOUNT = "HIGH_AMOUNT"
    DUPLICATE = "DUPLICATE"
    SUSPICIOUS_PATTERN = "SUSPICIOUS_PATTERN"
    MISSING_FIELD = "MISSING_FIELD"
    SPENDING_ANOMALY = "SPENDING_ANOMALY"


class Severity(str, Enum):
    """Ordinal risk tier, low < medium < high < critical."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class LimitRiskLevel(str, Enum):
    """Utilization tier of a category against its monthly limit."""

    NONE = "none"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class RiskFinding(BaseModel):
    """
    A single risk or anomaly flag attached to one expense.

    risk_score only ranks findings within one evaluation run.
    """

    id: str
    type: RiskType
    expense: Expense
    severity: Severity
    risk_score: float
    message: str
    recommendation: str

    class Config:
        """Pydantic config."""
        frozen = True


class CategoryAggregate(BaseModel):
    """Per-category spending totals."""

    category: str
    total: float
    count: int
    average: float
    expense_ids: Tuple[str, ...] = ()

    class Config:
        """Pydantic config."""
        frozen = True


class MonthlyAggregate(BaseModel):
    """Per-month spending totals keyed by YYYY-MM."""

    month_key: str
    label: str
    total: float
    count: int
    average: float

    class Config:
        """Pydantic config."""
        frozen = True


class CategoryLimitStatus(BaseModel):
    """Current-month spend of one category against its limit."""

    name: str
    emoji: Optional[str] = None
    spent: float
    limit: Optional[float] = None
    percentage: float
    remaining: Optional[float] = None
    is_over_limit: bool
    risk_level: LimitRiskLevel

    class Config:
        """Pydantic config."""
        frozen = True


class TopCategory(BaseModel):
    """Category with the largest total spend."""

    name: str
    amount: float


class DashboardStats(BaseModel):
    """Headline numbers for the dashboard cards."""

    total: float
    this_month: float
    last_month: float
    monthly_growth: float
    transaction_count: int
    average_transaction: float
    top_category: Optional[TopCategory] = None
    risk_flags: int


class InsightsReport(BaseModel):
    """Every derived view of one user's expenses."""

    user_id: str
    generated_at: str
    stats: DashboardStats
    by_category: Dict[str, CategoryAggregate]
    monthly: List[MonthlyAggregate]
    risks: List[RiskFinding]
    category_limits: List[CategoryLimitStatus]
    compliance_score: int
