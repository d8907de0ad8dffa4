"""Portfolio segmentation - per-segment aggregates and growth"""

from datetime import date, timedelta
from typing import Dict, List
from credit_analytics.domain.models import Customer, SegmentAnalysis, SEGMENTS
from credit_analytics.domain.scoring import matches_segment
from credit_analytics.utils.math_utils import round_half_up, rounded_mean

# Share of income booked as revenue. A planning assumption, not a measured yield.
REVENUE_YIELD = 0.15

# "Recent" joiners: last 6 months, counted as 6 x 30 days
GROWTH_WINDOW_DAYS = 180


def partition_by_segment(customers: List[Customer]) -> Dict[str, List[Customer]]:
    """
    Bucket customers by first matching segment criteria.

    Re-derived from income and risk_score so the result agrees with
    assign_segment even for records whose segment field is stale.
    Empty segments are left out.
    """
    buckets: Dict[str, List[Customer]] = {segment: [] for segment in SEGMENTS}
    for customer in customers:
        for segment in SEGMENTS:
            if matches_segment(segment, customer.income, customer.risk_score):
                buckets[segment].append(customer)
                break

    return {segment: members for segment, members in buckets.items() if members}


def calculate_growth_rate(
    customers: List[Customer],
    as_of: date | None = None,
    window_days: int = GROWTH_WINDOW_DAYS,
) -> int:
    """
    Recent joiners as a percentage of earlier joiners.

    Returns 100 when every member is recent (or the group is empty).
    Can exceed 100.
    """
    if as_of is None:
        as_of = date.today()
    cutoff = as_of - timedelta(days=window_days)

    recent = sum(1 for c in customers if c.join_date > cutoff)
    old = len(customers) - recent

    if old == 0:
        return 100

    return round_half_up(recent / old * 100)


def analyze_segments(
    customers: List[Customer],
    as_of: date | None = None,
    revenue_yield: float = REVENUE_YIELD,
    window_days: int = GROWTH_WINDOW_DAYS,
) -> List[SegmentAnalysis]:
    """
    Build the per-segment view of the portfolio.

    Segments appear in Premium, Gold, Silver, Basic order; percentages are
    fractions of the whole portfolio and sum to 1.0.
    """
    if not customers:
        return []

    total = len(customers)
    analyses = []
    for segment, members in partition_by_segment(customers).items():
        analyses.append(
            SegmentAnalysis(
                segment=segment,
                customers=len(members),
                avg_income=rounded_mean(c.income for c in members),
                avg_risk_score=rounded_mean(c.risk_score for c in members),
                revenue=sum(c.income * revenue_yield for c in members),
                growth_rate=calculate_growth_rate(members, as_of=as_of, window_days=window_days),
                percentage=len(members) / total,
            )
        )

    return analyses
