"""Fraud screening - flag customers whose behaviour deviates from the portfolio"""

from dataclasses import dataclass
from typing import List
from credit_analytics.domain.models import Customer
from credit_analytics.utils.math_utils import rounded_mean

# Anomaly score above which a customer is a fraud suspect
FRAUD_THRESHOLD = 0.7

# Deviation is measured in units of half the population mean
DEVIATION_SCALE = 0.5

INCOME_WEIGHT = 0.3
AMOUNT_WEIGHT = 0.4
COUNT_WEIGHT = 0.3


@dataclass
class PopulationBaseline:
    """Portfolio means the anomaly score is measured against"""

    avg_income: int
    avg_transaction_amount: int
    avg_transaction_count: int


def build_baseline(population: List[Customer]) -> PopulationBaseline:
    """Rounded population means of the screened metrics"""
    return PopulationBaseline(
        avg_income=rounded_mean(c.income for c in population),
        avg_transaction_amount=rounded_mean(c.avg_transaction_amount for c in population),
        avg_transaction_count=rounded_mean(c.transaction_count for c in population),
    )


def _deviation(value: float, population_mean: float) -> float:
    # A zero mean gives no usable scale; contribute nothing
    if population_mean == 0:
        return 0.0
    return abs(value - population_mean) / (population_mean * DEVIATION_SCALE)


def calculate_anomaly_score(customer: Customer, baseline: PopulationBaseline) -> float:
    """
    Score from 0.0 (typical) to 1.0 (highly unusual).

    Weighted deviation of income, average transaction amount and transaction
    count from the portfolio means, divided by 3 and capped at 1.0.
    """
    income_dev = _deviation(customer.income, baseline.avg_income)
    amount_dev = _deviation(customer.avg_transaction_amount, baseline.avg_transaction_amount)
    count_dev = _deviation(customer.transaction_count, baseline.avg_transaction_count)

    score = (
        income_dev * INCOME_WEIGHT
        + amount_dev * AMOUNT_WEIGHT
        + count_dev * COUNT_WEIGHT
    ) / 3

    return min(1.0, score)


def anomaly_score(customer: Customer, population: List[Customer]) -> float:
    """Anomaly score of one customer against a population"""
    if not population:
        return 0.0
    return calculate_anomaly_score(customer, build_baseline(population))


def detect_fraud_suspects(
    customers: List[Customer],
    threshold: float = FRAUD_THRESHOLD,
) -> List[Customer]:
    """Customers whose anomaly score exceeds the threshold, in input order"""
    if not customers:
        return []

    baseline = build_baseline(customers)
    return [c for c in customers if calculate_anomaly_score(c, baseline) > threshold]


def top_fraud_alerts(customers: List[Customer], limit: int = 5) -> List[Customer]:
    """Customers with raised fraud alerts, most alerts first"""
    flagged = [c for c in customers if c.fraud_alerts > 0]
    return sorted(flagged, key=lambda c: c.fraud_alerts, reverse=True)[:limit]
