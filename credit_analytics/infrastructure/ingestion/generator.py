"""Synthetic customer portfolio for demos and load testing

Attributes are correlated the way a real book tends to be: older customers
earn more, income lifts credit score, credit score drives payment history
and utilization, and weak credit raises the chance of fraud alerts.
"""

import random
from datetime import date
from typing import List
from credit_analytics.domain.models import Customer
from credit_analytics.domain.scoring import process_customers
from credit_analytics.utils.date_utils import days_ago

CITIES = ["Mumbai", "Delhi", "Bangalore", "Chennai", "Hyderabad", "Pune", "Kolkata", "Ahmedabad"]
STATES = ["Maharashtra", "Delhi", "Karnataka", "Tamil Nadu", "Telangana", "West Bengal", "Gujarat"]


def _realistic_income(rng: random.Random, age: int) -> int:
    """Income grows with experience, ±30% noise"""
    base_income = 200_000
    experience_multiplier = min(2.5, 1 + (age - 25) * 0.08)
    random_factor = 0.7 + rng.random() * 0.6
    return int(base_income * experience_multiplier * random_factor)


def _credit_score(rng: random.Random, income: int, age: int) -> int:
    base_score = 600

    if income > 500_000:
        base_score += 100
    elif income > 300_000:
        base_score += 50

    if age > 35:
        base_score += 50
    elif age > 30:
        base_score += 25

    variation = (rng.random() - 0.5) * 100
    return max(400, min(850, int(base_score + variation)))


def _payment_history(rng: random.Random, credit_score: int) -> int:
    base_history = int((credit_score - 400) / 450 * 40) + 60
    variation = (rng.random() - 0.5) * 20
    return max(60, min(100, int(base_history + variation)))


def _utilization_rate(rng: random.Random, credit_score: int, income: int) -> int:
    base_utilization = 90 - int((credit_score - 400) / 450 * 60)

    # High earners carry lower balances
    if income > 600_000:
        base_utilization -= 20
    elif income > 400_000:
        base_utilization -= 10

    variation = (rng.random() - 0.5) * 30
    return max(5, min(95, int(base_utilization + variation)))


def _fraud_alerts(rng: random.Random, credit_score: int, utilization_rate: int) -> int:
    probability = 0.05

    if credit_score < 500:
        probability += 0.1
    if utilization_rate > 80:
        probability += 0.05

    return rng.randint(1, 3) if rng.random() < probability else 0


def generate_raw_customers(
    count: int = 500,
    seed: int | None = None,
    today: date | None = None,
) -> List[Customer]:
    """Build unscored customer records"""
    rng = random.Random(seed)
    if today is None:
        today = date.today()

    customers = []
    for i in range(count):
        age = rng.randint(25, 64)
        income = _realistic_income(rng, age)
        credit_score = _credit_score(rng, income, age)
        account_balance = int(income * (0.1 + rng.random() * 0.4))
        account_age = rng.randint(6, 65)
        transaction_count = int((account_age / 12) * (10 + rng.random() * 20))
        avg_transaction_amount = int(income * (0.01 + rng.random() * 0.05))
        payment_history = _payment_history(rng, credit_score)
        utilization_rate = _utilization_rate(rng, credit_score, income)
        fraud_alerts = _fraud_alerts(rng, credit_score, utilization_rate)

        customers.append(
            Customer(
                id=f"CUST-{i + 1:04d}",
                name=f"Customer {i + 1}",
                age=age,
                income=income,
                credit_score=credit_score,
                account_balance=account_balance,
                transaction_count=transaction_count,
                avg_transaction_amount=avg_transaction_amount,
                city=rng.choice(CITIES),
                state=rng.choice(STATES),
                join_date=days_ago(account_age * 30, today=today),
                last_transaction_date=days_ago(rng.randint(0, 29), today=today),
                fraud_alerts=fraud_alerts,
                payment_history=payment_history,
                utilization_rate=utilization_rate,
                account_age=account_age,
            )
        )

    return customers


def generate_customers(
    count: int = 500,
    seed: int | None = None,
    today: date | None = None,
) -> List[Customer]:
    """
    Main entry point: a freshly generated, fully scored portfolio.

    Each call builds a new list; pass a seed for a reproducible portfolio.
    """
    return process_customers(generate_raw_customers(count, seed=seed, today=today))
