"""Pytest fixtures for testing"""

import pytest
from datetime import date
from typing import Callable
from fastapi.testclient import TestClient
from credit_analytics.api.main import create_app
from credit_analytics.domain.models import Customer


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def make_customer() -> Callable[..., Customer]:
    """
    Factory for customers with middle-of-the-road attributes.

    Defaults score 30 (Medium) and land in Silver once processed.
    """

    def _make(**overrides) -> Customer:
        attrs = dict(
            id="CUST-0001",
            name="Customer 1",
            age=35,
            income=300_000,
            credit_score=650,
            account_balance=50_000,
            transaction_count=25,
            avg_transaction_amount=5_000,
            city="Mumbai",
            state="Maharashtra",
            join_date=date(2023, 1, 15),
            last_transaction_date=date(2024, 6, 20),
            fraud_alerts=0,
            payment_history=85,
            utilization_rate=45,
            account_age=24,
        )
        attrs.update(overrides)
        return Customer(**attrs)

    return _make


@pytest.fixture
def scenario_customers(make_customer) -> list[Customer]:
    """One prime customer and one distressed customer"""
    return [
        make_customer(
            id="CUST-PRIME",
            income=650_000,
            credit_score=800,
            payment_history=95,
            utilization_rate=10,
            account_age=48,
            fraud_alerts=0,
        ),
        make_customer(
            id="CUST-DISTRESSED",
            income=100_000,
            credit_score=450,
            payment_history=60,
            utilization_rate=90,
            account_age=3,
            fraud_alerts=3,
        ),
    ]
