"""Domain models - pure Python dataclasses representing portfolio entities"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional

RISK_CATEGORIES = ("Low", "Medium", "High")
SEGMENTS = ("Premium", "Gold", "Silver", "Basic")


@dataclass
class Customer:
    """
    Customer record as ingested, plus the fields derived by the engine.

    risk_score, risk_category and segment are only written by
    process_customers; ingestion leaves them unset.
    """

    id: str
    name: str
    age: int
    income: float
    credit_score: int
    account_balance: float
    transaction_count: int
    avg_transaction_amount: float
    city: str
    state: str
    join_date: date
    last_transaction_date: date
    fraud_alerts: int
    payment_history: float  # percentage 0-100
    utilization_rate: float  # percentage 0-100
    account_age: int  # months
    risk_score: int = 0
    risk_category: Optional[str] = None  # "Low" | "Medium" | "High"
    segment: Optional[str] = None  # "Premium" | "Gold" | "Silver" | "Basic"

    @property
    def is_scored(self) -> bool:
        return self.risk_category is not None and self.segment is not None


@dataclass
class RiskFactors:
    """Weighted inputs extracted from a customer for scoring"""

    credit_score: int
    income: float
    payment_history: float
    utilization_rate: float
    account_age: int
    fraud_alerts: int
    transaction_pattern: float
    avg_transaction_amount: float


@dataclass
class SegmentAnalysis:
    """Aggregate view of one customer segment"""

    segment: str
    customers: int
    avg_income: int
    avg_risk_score: int
    revenue: float
    growth_rate: int
    percentage: float


@dataclass
class RiskDistribution:
    """One risk bucket of the portfolio"""

    category: str
    count: int
    percentage: float
    revenue: float


@dataclass
class Recommendation:
    type: str
    priority: str  # "low" | "medium" | "high" | "critical"
    message: str


@dataclass
class MonthlyTrend:
    """Join-month cohort summary"""

    month: str  # YYYY-MM
    new_customers: int
    total_revenue: float
    avg_risk_score: int


@dataclass
class BusinessMetrics:
    """Headline portfolio KPIs"""

    total_customers: int
    total_revenue: float
    average_risk_score: float
    fraud_rate: float
    average_credit_utilization: float
    default_rate: float


@dataclass
class PortfolioInsights:
    """Output of the insight generation pass"""

    total_customers: int
    high_risk_count: int
    fraud_suspects: int
    premium_opportunities: int
    average_risk_score: int
    portfolio_value: float
    recommendations: List[Recommendation] = field(default_factory=list)
    risk_distribution: List[RiskDistribution] = field(default_factory=list)
    monthly_trends: List[MonthlyTrend] = field(default_factory=list)
