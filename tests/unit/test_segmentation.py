"""Unit tests for portfolio segmentation"""

import pytest
from datetime import date
from credit_analytics.domain.scoring import process_customers
from credit_analytics.domain.segmentation import (
    analyze_segments,
    calculate_growth_rate,
    partition_by_segment,
)
from credit_analytics.infrastructure.ingestion.generator import generate_customers

AS_OF = date(2024, 7, 1)  # growth window cutoff: 2024-01-03
RECENT = date(2024, 6, 1)
OLD = date(2023, 1, 1)


def test_analyze_segments_end_to_end(scenario_customers):
    """Prime and distressed customer fall into two equal buckets"""
    segments = analyze_segments(process_customers(scenario_customers), as_of=AS_OF)

    assert [s.segment for s in segments] == ["Premium", "Basic"]
    assert [s.customers for s in segments] == [1, 1]
    assert [s.percentage for s in segments] == [0.5, 0.5]


def test_analyze_segments_empty_portfolio():
    assert analyze_segments([]) == []


def test_analyze_segments_percentages_sum_to_one():
    customers = generate_customers(300, seed=11, today=AS_OF)
    segments = analyze_segments(customers, as_of=AS_OF)

    assert sum(s.percentage for s in segments) == pytest.approx(1.0)
    assert sum(s.customers for s in segments) == 300


def test_analyze_segments_averages_and_revenue(make_customer):
    members = process_customers([
        make_customer(id="A", income=300_001),
        make_customer(id="B", income=300_000),
    ])
    silver = analyze_segments(members, as_of=AS_OF)[0]

    assert silver.segment == "Silver"
    assert silver.avg_income == 300_001  # 300000.5 rounds up
    assert silver.avg_risk_score == 30
    assert silver.revenue == pytest.approx(600_001 * 0.15)


def test_analyze_segments_custom_revenue_yield(make_customer):
    members = process_customers([make_customer(income=400_000)])
    segment = analyze_segments(members, as_of=AS_OF, revenue_yield=0.1)[0]
    assert segment.revenue == pytest.approx(40_000)


def test_partition_ignores_stale_segment_field(make_customer):
    """Bucketing follows income and score, not the stored label"""
    customer = make_customer(income=700_000, risk_score=10, segment="Basic")
    assert list(partition_by_segment([customer])) == ["Premium"]


def test_growth_rate_recent_over_old(make_customer):
    members = [make_customer(join_date=RECENT) for _ in range(3)] + [
        make_customer(join_date=OLD) for _ in range(2)
    ]
    assert calculate_growth_rate(members, as_of=AS_OF) == 150


def test_growth_rate_rounds(make_customer):
    members = [make_customer(join_date=RECENT)] + [make_customer(join_date=OLD) for _ in range(3)]
    assert calculate_growth_rate(members, as_of=AS_OF) == 33


def test_growth_rate_all_recent_is_100(make_customer):
    members = [make_customer(join_date=RECENT) for _ in range(4)]
    assert calculate_growth_rate(members, as_of=AS_OF) == 100


def test_growth_rate_none_recent_is_zero(make_customer):
    members = [make_customer(join_date=OLD) for _ in range(4)]
    assert calculate_growth_rate(members, as_of=AS_OF) == 0


def test_growth_rate_window_boundary(make_customer):
    """Joining exactly on the cutoff date is not recent"""
    on_cutoff = make_customer(join_date=date(2024, 1, 3))
    after_cutoff = make_customer(join_date=date(2024, 1, 4))

    assert calculate_growth_rate([on_cutoff, after_cutoff], as_of=AS_OF) == 100
    assert calculate_growth_rate([on_cutoff, on_cutoff], as_of=AS_OF) == 0


def test_growth_rate_custom_window(make_customer):
    members = [make_customer(join_date=date(2024, 5, 1)), make_customer(join_date=OLD)]
    assert calculate_growth_rate(members, as_of=AS_OF, window_days=30) == 0
    assert calculate_growth_rate(members, as_of=AS_OF, window_days=90) == 100


def test_growth_rate_can_exceed_100(make_customer):
    members = [make_customer(join_date=RECENT) for _ in range(5)] + [make_customer(join_date=OLD)]
    assert calculate_growth_rate(members, as_of=AS_OF) == 500
