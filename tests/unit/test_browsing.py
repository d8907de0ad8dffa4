"""Unit tests for customer search, sort and paging"""

import pytest
from credit_analytics.domain.browsing import (
    browse_customers,
    filter_customers,
    paginate,
    sort_customers,
)


@pytest.fixture
def customers(make_customer):
    return [
        make_customer(id="CUST-0001", name="Asha Rao", risk_score=20, risk_category="Low", income=400_000),
        make_customer(id="CUST-0002", name="ravi kumar", risk_score=75, risk_category="High", income=150_000),
        make_customer(id="CUST-0003", name="Meera Iyer", risk_score=45, risk_category="Medium", income=650_000),
        make_customer(id="VIP-0004", name="Ravindra Nath", risk_score=72, risk_category="High", income=900_000),
    ]


def test_search_matches_id_or_name_ignoring_case(customers):
    assert [c.id for c in filter_customers(customers, search="RAVI")] == ["CUST-0002", "VIP-0004"]
    assert [c.id for c in filter_customers(customers, search="vip")] == ["VIP-0004"]


def test_risk_category_filter(customers):
    assert [c.id for c in filter_customers(customers, risk_category="high")] == ["CUST-0002", "VIP-0004"]
    assert len(filter_customers(customers, risk_category="all")) == 4
    assert len(filter_customers(customers)) == 4


def test_sort_numeric_descending_by_default(customers):
    assert [c.risk_score for c in sort_customers(customers)] == [75, 72, 45, 20]


def test_sort_text_ignores_case(customers):
    names = [c.name for c in sort_customers(customers, sort_by="name", descending=False)]
    assert names == ["Asha Rao", "Meera Iyer", "ravi kumar", "Ravindra Nath"]


def test_sort_rejects_unknown_field(customers):
    with pytest.raises(ValueError):
        sort_customers(customers, sort_by="password")


def test_paginate(customers):
    second = paginate(customers, page=2, page_size=3)

    assert [c.id for c in second.customers] == ["VIP-0004"]
    assert second.total == 4
    assert second.total_pages == 2


def test_paginate_past_the_end_is_empty(customers):
    assert paginate(customers, page=5, page_size=3).customers == []


def test_browse_customers(customers):
    result = browse_customers(customers, search="ravi", sort_by="income", descending=False, page_size=1)

    assert [c.id for c in result.customers] == ["CUST-0002"]
    assert result.total == 2
    assert result.total_pages == 2
