"""CSV ingestion and export for customer portfolios

Plain comma-separated text with a header row. No quoting or escaping.
"""

import logging
import re
from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional
from credit_analytics.domain.models import Customer
from credit_analytics.domain.exceptions import CSVFormatError, InvalidCustomerDataError
from credit_analytics.infrastructure.observability.metrics import csv_rows_dropped_counter
from credit_analytics.utils.date_utils import parse_iso_date
from credit_analytics.utils.math_utils import mean

logger = logging.getLogger(__name__)

# Fallbacks for missing or unparsable columns
DEFAULT_AGE = 30
DEFAULT_INCOME = 300_000
DEFAULT_CREDIT_SCORE = 650
DEFAULT_BALANCE = 50_000
DEFAULT_TRANSACTION_COUNT = 25
DEFAULT_AVG_TRANSACTION = 5_000
DEFAULT_PAYMENT_HISTORY = 85
DEFAULT_UTILIZATION = 45
DEFAULT_ACCOUNT_AGE = 24
DEFAULT_FRAUD_ALERTS = 0
DEFAULT_CITY = "Mumbai"
DEFAULT_STATE = "Maharashtra"

EXPORT_COLUMNS = [
    ("id", "id"),
    ("name", "name"),
    ("age", "age"),
    ("income", "income"),
    ("creditScore", "credit_score"),
    ("riskScore", "risk_score"),
    ("riskCategory", "risk_category"),
    ("segment", "segment"),
    ("city", "city"),
    ("fraudAlerts", "fraud_alerts"),
]

SAMPLE_CSV = """id,name,age,income,credit_score,balance,transactions,avg_transaction,city,state,payment_history,utilization,account_age,fraud_alerts
CUST-0001,John Doe,32,450000,720,75000,45,8500,Mumbai,Maharashtra,92,35,36,0
CUST-0002,Jane Smith,28,380000,680,42000,32,6200,Delhi,Delhi,88,42,24,1
CUST-0003,Raj Patel,45,750000,780,120000,67,12000,Bangalore,Karnataka,95,28,60,0
CUST-0004,Priya Singh,35,520000,650,68000,38,7800,Chennai,Tamil Nadu,85,55,42,2"""

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


@dataclass
class LoadResult:
    """Parsed customers plus the number of rows that had to be dropped"""

    customers: List[Customer] = field(default_factory=list)
    total_rows: int = 0
    dropped_rows: int = 0


def _parse_int(value: str, default: int) -> int:
    """
    Leading integer of the value ("72.5" -> 72), default when there is none.

    Raises InvalidCustomerDataError when the integer does not fit a float.
    """
    match = _LEADING_INT.match(value)
    if match is None:
        return default
    try:
        number = int(match.group(1))
        float(number)
    except (ValueError, OverflowError) as e:
        raise InvalidCustomerDataError(f"Numeric value out of range: {value.strip()[:20]}") from e
    return number


def _find_field(headers: List[str], values: List[str], name: str) -> str:
    """Value of the first column whose header contains name (case-insensitive)"""
    needle = name.lower()
    for i, header in enumerate(headers):
        if needle in header.lower():
            return values[i] if i < len(values) else ""
    return ""


def parse_customer_row(
    headers: List[str],
    values: List[str],
    index: int,
    today: date | None = None,
) -> Customer:
    """
    Map one CSV row onto a Customer with derived fields unset.

    Raises:
        InvalidCustomerDataError: When a present date column is malformed
    """
    if today is None:
        today = date.today()

    def get(name: str) -> str:
        return _find_field(headers, values, name)

    def get_date(name: str) -> date:
        raw = get(name)
        if not raw:
            return today
        try:
            return parse_iso_date(raw)
        except ValueError as e:
            raise InvalidCustomerDataError(f"Invalid {name} '{raw}' on row {index}") from e

    return Customer(
        id=get("id") or f"CUST-{index:04d}",
        name=get("name") or f"Customer {index}",
        age=_parse_int(get("age"), DEFAULT_AGE),
        income=_parse_int(get("income"), DEFAULT_INCOME),
        credit_score=_parse_int(get("credit"), DEFAULT_CREDIT_SCORE),
        account_balance=_parse_int(get("balance"), DEFAULT_BALANCE),
        transaction_count=_parse_int(get("transactions"), DEFAULT_TRANSACTION_COUNT),
        avg_transaction_amount=_parse_int(get("avg_transaction"), DEFAULT_AVG_TRANSACTION),
        city=get("city") or DEFAULT_CITY,
        state=get("state") or DEFAULT_STATE,
        join_date=get_date("join_date"),
        last_transaction_date=get_date("last_transaction"),
        fraud_alerts=_parse_int(get("fraud_alerts"), DEFAULT_FRAUD_ALERTS),
        payment_history=_parse_int(get("payment_history"), DEFAULT_PAYMENT_HISTORY),
        utilization_rate=_parse_int(get("utilization"), DEFAULT_UTILIZATION),
        account_age=_parse_int(get("account_age"), DEFAULT_ACCOUNT_AGE),
    )


def load_customers_csv(text: str, today: date | None = None) -> LoadResult:
    """
    Parse a customer CSV. Rows that fail to parse are dropped and counted.

    Raises:
        CSVFormatError: When there is no header row
    """
    lines = text.split("\n")
    if not lines[0].strip():
        raise CSVFormatError("CSV header row is missing")

    headers = [h.strip() for h in lines[0].split(",")]
    result = LoadResult()

    for index, line in enumerate(lines[1:], start=1):
        if not line.strip():
            continue

        result.total_rows += 1
        values = [v.strip() for v in line.split(",")]
        try:
            result.customers.append(parse_customer_row(headers, values, index, today=today))
        except InvalidCustomerDataError as e:
            result.dropped_rows += 1
            csv_rows_dropped_counter.inc()
            logger.warning(f"Dropping CSV row: {e}", extra={"line": index})

    logger.info(
        "CSV parsed",
        extra={"total_rows": result.total_rows, "dropped_rows": result.dropped_rows},
    )
    return result


def export_customers_csv(customers: List[Customer]) -> str:
    """Processed customers as CSV, one row per customer"""
    lines = [",".join(column for column, _ in EXPORT_COLUMNS)]
    for customer in customers:
        lines.append(
            ",".join(
                "" if getattr(customer, attr) is None else str(getattr(customer, attr))
                for _, attr in EXPORT_COLUMNS
            )
        )
    return "\n".join(lines)


def summarize_upload(loaded: LoadResult, processed: List[Customer]) -> dict:
    """Counts shown after an upload"""
    avg_risk: Optional[float] = (
        mean(c.risk_score for c in processed) if processed else None
    )
    return {
        "total_records": loaded.total_rows,
        "valid_records": len(processed),
        "dropped_records": loaded.dropped_rows,
        "high_risk": sum(1 for c in processed if c.risk_category == "High"),
        "avg_risk_score": avg_risk,
    }
