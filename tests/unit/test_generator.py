"""Unit tests for the synthetic portfolio factory"""

from datetime import date, timedelta
from credit_analytics.infrastructure.ingestion.generator import (
    CITIES,
    STATES,
    generate_customers,
    generate_raw_customers,
)

TODAY = date(2024, 7, 1)


def test_generate_customers_count_and_ids():
    customers = generate_customers(25, seed=3, today=TODAY)

    assert len(customers) == 25
    assert customers[0].id == "CUST-0001"
    assert customers[-1].id == "CUST-0025"


def test_generate_customers_reproducible_with_seed():
    assert generate_customers(40, seed=99, today=TODAY) == generate_customers(40, seed=99, today=TODAY)


def test_generate_customers_fresh_list_each_call():
    first = generate_customers(5, seed=1, today=TODAY)
    second = generate_customers(5, seed=1, today=TODAY)
    assert first is not second
    assert first[0] is not second[0]


def test_generate_customers_attribute_ranges():
    for c in generate_customers(300, seed=5, today=TODAY):
        assert 25 <= c.age <= 64
        assert 400 <= c.credit_score <= 850
        assert 60 <= c.payment_history <= 100
        assert 5 <= c.utilization_rate <= 95
        assert 6 <= c.account_age <= 65
        assert 0 <= c.fraud_alerts <= 3
        assert c.city in CITIES
        assert c.state in STATES
        assert c.join_date == TODAY - timedelta(days=c.account_age * 30)
        assert TODAY - timedelta(days=29) <= c.last_transaction_date <= TODAY


def test_generate_customers_are_scored():
    customers = generate_customers(100, seed=8, today=TODAY)
    assert all(c.is_scored for c in customers)
    assert all(0 <= c.risk_score <= 100 for c in customers)


def test_generate_raw_customers_unscored():
    customers = generate_raw_customers(10, seed=8, today=TODAY)
    assert not any(c.is_scored for c in customers)


def test_generate_customers_zero():
    assert generate_customers(0, seed=1) == []
