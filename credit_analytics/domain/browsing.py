"""Search, filter, sort and page through a scored customer list"""

import math
from dataclasses import dataclass, field
from typing import List, Optional
from credit_analytics.domain.models import Customer

SORTABLE_FIELDS = (
    "id",
    "name",
    "age",
    "income",
    "credit_score",
    "account_balance",
    "city",
    "join_date",
    "fraud_alerts",
    "payment_history",
    "utilization_rate",
    "account_age",
    "risk_score",
    "segment",
)


@dataclass
class CustomerPage:
    customers: List[Customer] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 25
    total_pages: int = 0


def filter_customers(
    customers: List[Customer],
    search: Optional[str] = None,
    risk_category: Optional[str] = None,
) -> List[Customer]:
    """
    Keep customers whose id or name contains search, in the given category.

    Both checks ignore case; "all" or an empty value skips the category check.
    """
    needle = (search or "").lower()
    category = (risk_category or "all").lower()

    return [
        c for c in customers
        if (needle in c.id.lower() or needle in c.name.lower())
        and (category == "all" or (c.risk_category or "").lower() == category)
    ]


def sort_customers(customers: List[Customer], sort_by: str = "risk_score", descending: bool = True) -> List[Customer]:
    """Stable sort on one field; text compares case-insensitively"""
    if sort_by not in SORTABLE_FIELDS:
        raise ValueError(f"Cannot sort by {sort_by}")

    def key(customer: Customer):
        value = getattr(customer, sort_by)
        if isinstance(value, str) or value is None:
            return str(value or "").lower()
        return value

    return sorted(customers, key=key, reverse=descending)


def paginate(customers: List[Customer], page: int = 1, page_size: int = 25) -> CustomerPage:
    """Slice one page; a page past the end is empty"""
    start = (page - 1) * page_size
    return CustomerPage(
        customers=customers[start:start + page_size],
        total=len(customers),
        page=page,
        page_size=page_size,
        total_pages=math.ceil(len(customers) / page_size),
    )


def browse_customers(
    customers: List[Customer],
    search: Optional[str] = None,
    risk_category: Optional[str] = None,
    sort_by: str = "risk_score",
    descending: bool = True,
    page: int = 1,
    page_size: int = 25,
) -> CustomerPage:
    """Main entry point: filter, then sort, then page"""
    matched = filter_customers(customers, search=search, risk_category=risk_category)
    ordered = sort_customers(matched, sort_by=sort_by, descending=descending)
    return paginate(ordered, page=page, page_size=page_size)
