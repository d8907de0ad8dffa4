"""Portfolio insights - distributions, trends, KPIs and recommendations"""

from typing import Dict, List, Optional
from credit_analytics.domain.models import (
    BusinessMetrics,
    Customer,
    MonthlyTrend,
    PortfolioInsights,
    Recommendation,
    RiskDistribution,
    SegmentAnalysis,
    RISK_CATEGORIES,
)
from credit_analytics.domain.fraud import detect_fraud_suspects, FRAUD_THRESHOLD
from credit_analytics.domain.segmentation import REVENUE_YIELD
from credit_analytics.utils.date_utils import month_key
from credit_analytics.utils.math_utils import mean, round_half_up, rounded_mean

# Recommendation triggers
HIGH_RISK_SHARE_LIMIT = 0.15
PREMIUM_GROWTH_TARGET = 15
LOW_UTILIZATION_RATE = 20
LOW_UTILIZATION_SHARE_LIMIT = 0.3

# Share of high-risk customers assumed to default
DEFAULT_PROBABILITY = 0.6


def generate_recommendations(
    customers: List[Customer],
    segments: List[SegmentAnalysis],
) -> List[Recommendation]:
    """
    Rule-based recommendations, in rule order.

    Rules:
    1. More than 15% high-risk customers → critical risk_management
    2. Premium segment growing faster than 15% → high growth_opportunity
    3. More than 30% of customers under 20% utilization → medium engagement
    """
    if not customers:
        return []

    total = len(customers)
    recommendations = []

    high_risk_count = sum(1 for c in customers if c.risk_category == "High")
    if high_risk_count > total * HIGH_RISK_SHARE_LIMIT:
        share = _round_tenths(high_risk_count * 100 / total)
        recommendations.append(
            Recommendation(
                type="risk_management",
                priority="critical",
                message=(
                    f"{high_risk_count} customers ({share:.1f}%) are high-risk. "
                    "Implement stricter monitoring."
                ),
            )
        )

    premium = next((s for s in segments if s.segment == "Premium"), None)
    if premium is not None and premium.growth_rate > PREMIUM_GROWTH_TARGET:
        recommendations.append(
            Recommendation(
                type="growth_opportunity",
                priority="high",
                message=(
                    f"Premium segment shows {premium.growth_rate}% growth. "
                    "Increase acquisition budget by 25%."
                ),
            )
        )

    low_utilization_count = sum(1 for c in customers if c.utilization_rate < LOW_UTILIZATION_RATE)
    if low_utilization_count > total * LOW_UTILIZATION_SHARE_LIMIT:
        recommendations.append(
            Recommendation(
                type="engagement",
                priority="medium",
                message=(
                    f"{low_utilization_count} customers have low utilization. "
                    "Launch engagement campaigns."
                ),
            )
        )

    return recommendations


def calculate_risk_distribution(
    customers: List[Customer],
    revenue_yield: float = REVENUE_YIELD,
) -> List[RiskDistribution]:
    """Low / Medium / High buckets with share of portfolio and revenue"""
    if not customers:
        return []

    total = len(customers)
    distribution = []
    for category in RISK_CATEGORIES:
        members = [c for c in customers if c.risk_category == category]
        distribution.append(
            RiskDistribution(
                category=f"{category} Risk",
                count=len(members),
                percentage=len(members) / total,
                revenue=sum(c.income * revenue_yield for c in members),
            )
        )

    return distribution


def calculate_monthly_trends(
    customers: List[Customer],
    revenue_yield: float = REVENUE_YIELD,
) -> List[MonthlyTrend]:
    """Join-month cohorts, oldest month first"""
    cohorts: Dict[str, List[Customer]] = {}
    for customer in customers:
        cohorts.setdefault(month_key(customer.join_date), []).append(customer)

    # YYYY-MM keys sort chronologically as strings
    return [
        MonthlyTrend(
            month=month,
            new_customers=len(members),
            total_revenue=sum(c.income * revenue_yield for c in members),
            avg_risk_score=rounded_mean(c.risk_score for c in members),
        )
        for month, members in sorted(cohorts.items())
    ]


def calculate_business_metrics(
    customers: List[Customer],
    revenue_yield: float = REVENUE_YIELD,
    default_probability: float = DEFAULT_PROBABILITY,
) -> BusinessMetrics:
    """
    Headline KPIs for the portfolio.

    Rates are percentages rounded to one decimal. An empty portfolio gives
    all zeros.
    """
    if not customers:
        return BusinessMetrics(
            total_customers=0,
            total_revenue=0.0,
            average_risk_score=0.0,
            fraud_rate=0.0,
            average_credit_utilization=0.0,
            default_rate=0.0,
        )

    total = len(customers)
    flagged = sum(1 for c in customers if c.fraud_alerts > 0)
    high_risk = sum(1 for c in customers if c.risk_category == "High")

    return BusinessMetrics(
        total_customers=total,
        total_revenue=sum(c.income * revenue_yield for c in customers),
        average_risk_score=_round_tenths(mean(c.risk_score for c in customers)),
        fraud_rate=_round_tenths(flagged / total * 100),
        average_credit_utilization=mean(c.utilization_rate for c in customers),
        default_rate=_round_tenths(high_risk / total * 100 * default_probability),
    )


def count_premium_opportunities(customers: List[Customer]) -> int:
    """Affluent, moderate-risk customers not yet in Premium"""
    return sum(
        1 for c in customers
        if c.income > 500_000 and c.risk_score < 50 and c.segment != "Premium"
    )


def generate_business_insights(
    customers: List[Customer],
    segments: List[SegmentAnalysis],
    revenue_yield: float = REVENUE_YIELD,
    fraud_threshold: float = FRAUD_THRESHOLD,
    fraud_suspects: Optional[List[Customer]] = None,
) -> PortfolioInsights:
    """
    Main entry point: everything the insights view needs in one pass.

    Expects customers processed and segments built from the same list.
    Pass fraud_suspects when already detected to skip a second baseline pass.
    """
    if fraud_suspects is None:
        fraud_suspects = detect_fraud_suspects(customers, threshold=fraud_threshold)

    return PortfolioInsights(
        total_customers=len(customers),
        high_risk_count=sum(1 for c in customers if c.risk_category == "High"),
        fraud_suspects=len(fraud_suspects),
        premium_opportunities=count_premium_opportunities(customers),
        average_risk_score=rounded_mean(c.risk_score for c in customers),
        portfolio_value=sum(s.revenue for s in segments),
        recommendations=generate_recommendations(customers, segments),
        risk_distribution=calculate_risk_distribution(customers, revenue_yield=revenue_yield),
        monthly_trends=calculate_monthly_trends(customers, revenue_yield=revenue_yield),
    )


def _round_tenths(value: float) -> float:
    return round_half_up(value * 10) / 10
