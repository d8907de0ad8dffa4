"""Risk scoring engine - per-customer risk score, category and segment"""

from dataclasses import replace
from typing import List
from credit_analytics.domain.models import Customer, RiskFactors
from credit_analytics.utils.math_utils import round_half_up

# Factor weights, summing to 100
CREDIT_SCORE_WEIGHT = 35
PAYMENT_HISTORY_WEIGHT = 35
UTILIZATION_WEIGHT = 15
INCOME_WEIGHT = 10
ACCOUNT_AGE_WEIGHT = 3
FRAUD_ALERT_WEIGHT = 2

# Category cut-offs: score < 30 is Low, score < 70 is Medium, else High
LOW_RISK_CEILING = 30
MEDIUM_RISK_CEILING = 70


def extract_risk_factors(customer: Customer) -> RiskFactors:
    """Pull the scoring inputs out of a customer record"""
    # Transactions per month of account history (0 for brand new accounts)
    transaction_pattern = (
        customer.transaction_count / customer.account_age if customer.account_age else 0.0
    )

    return RiskFactors(
        credit_score=customer.credit_score,
        income=customer.income,
        payment_history=customer.payment_history,
        utilization_rate=customer.utilization_rate,
        account_age=customer.account_age,
        fraud_alerts=customer.fraud_alerts,
        transaction_pattern=transaction_pattern,
        avg_transaction_amount=customer.avg_transaction_amount,
    )


def calculate_risk_score(risk_factors: RiskFactors) -> int:
    """
    Calculate risk score from 0 (lowest risk) to 100 (highest risk).

    Each factor is normalized to a risk fraction (never negative), weighted,
    and summed. The total is capped at 100 and rounded.

    Scoring weights:
    - 35%: Credit score, 850 is risk-free, 400 or below is full risk
    - 35%: Payment history, 100% on-time is risk-free
    - 15%: Utilization, only the part above 30% counts
    - 10%: Income below ₹5L
    - 3%:  Account age below 5 years (60 months)
    - 2%:  Fraud alerts, saturating at 5
    """
    credit_risk = max(0.0, (850 - risk_factors.credit_score) / 450)
    payment_risk = max(0.0, (100 - risk_factors.payment_history) / 100)
    utilization_risk = (
        (risk_factors.utilization_rate - 30) / 70 if risk_factors.utilization_rate > 30 else 0.0
    )
    income_risk = max(0.0, (500_000 - risk_factors.income) / 500_000)
    account_age_risk = max(0.0, (60 - risk_factors.account_age) / 60)
    fraud_risk = max(0.0, min(1.0, risk_factors.fraud_alerts / 5))

    score = (
        credit_risk * CREDIT_SCORE_WEIGHT
        + payment_risk * PAYMENT_HISTORY_WEIGHT
        + utilization_risk * UTILIZATION_WEIGHT
        + income_risk * INCOME_WEIGHT
        + account_age_risk * ACCOUNT_AGE_WEIGHT
        + fraud_risk * FRAUD_ALERT_WEIGHT
    )

    return round_half_up(min(100.0, score))


def compute_risk_score(customer: Customer) -> int:
    """Score a single customer"""
    return calculate_risk_score(extract_risk_factors(customer))


def determine_risk_category(score: int) -> str:
    """Map a risk score to Low / Medium / High"""
    if score < LOW_RISK_CEILING:
        return "Low"
    elif score < MEDIUM_RISK_CEILING:
        return "Medium"
    else:
        return "High"


def matches_segment(segment: str, income: float, risk_score: int) -> bool:
    """Segment entry criteria; Basic accepts everyone"""
    if segment == "Premium":
        return income > 600_000 and risk_score < 40
    elif segment == "Gold":
        return income > 400_000 and risk_score < 60
    elif segment == "Silver":
        return income > 250_000 and risk_score < 80
    return True


def assign_segment(customer: Customer) -> str:
    """
    First matching segment wins, checked Premium, Gold, Silver, Basic.

    Expects customer.risk_score to be computed already.
    """
    for segment in ("Premium", "Gold", "Silver"):
        if matches_segment(segment, customer.income, customer.risk_score):
            return segment
    return "Basic"


def score_customer(customer: Customer) -> Customer:
    """Return a copy of the customer with derived fields populated"""
    risk_score = compute_risk_score(customer)
    scored = replace(
        customer,
        risk_score=risk_score,
        risk_category=determine_risk_category(risk_score),
    )
    # Segment depends on the freshly computed score
    scored.segment = assign_segment(scored)
    return scored


def process_customers(raw_customers: List[Customer]) -> List[Customer]:
    """
    Main entry point: score, categorize and segment every customer.

    Input records are not modified; a new list is returned.
    """
    return [score_customer(customer) for customer in raw_customers]
