from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from analytics.kpis import (
    KPIContext,
    compose_kpis,
    is_open_opportunity,
    open_opportunities,
    percentage_change,
)
from analytics.records import CategoryType, CustomerRecord, InterestCategory, LeadStatus, Product

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def _interest(*price_ranges):
    return (
        InterestCategory(
            CategoryType.DIAMOND,
            tuple(Product(f"Item {i}", pr) for i, pr in enumerate(price_ranges)),
        ),
    )


@pytest.fixture
def scenario():
    return [
        CustomerRecord(id=1, interest_categories=_interest("1L-2L"), created_at=NOW - timedelta(days=2)),
        CustomerRecord(id=2, purchase_amount=Decimal("75000"), created_at=NOW - timedelta(days=40)),
        CustomerRecord(
            id=3,
            lead_status=LeadStatus.CLOSED_WON.value,
            interest_categories=_interest("25K-50K", "50K-75K"),
            created_at=NOW - timedelta(days=1),
        ),
    ]


@pytest.mark.parametrize(
    "current,previous,expected",
    [
        (5000, 0, Decimal("100")),
        (0, 0, Decimal("0")),
        (1500, 1000, Decimal("50.0")),
        (500, 1000, Decimal("-50.0")),
        (1, 3, Decimal("-66.7")),
        (0, 1000, Decimal("-100.0")),
        (None, None, Decimal("0")),
    ],
)
def test_percentage_change(current, previous, expected):
    assert percentage_change(current, previous) == expected


def test_closed_won_is_never_an_open_opportunity(scenario):
    assert [c.id for c in open_opportunities(scenario)] == [1, 2]
    assert is_open_opportunity(scenario[2]) is False
    assert is_open_opportunity(CustomerRecord(id=4, lead_status="Closed Lost")) is False


def test_three_customer_scenario(scenario):
    kpis = compose_kpis(KPIContext(customers=scenario))

    assert kpis.active_pipeline_value == Decimal("150000")
    assert kpis.open_opportunities == 2
    assert kpis.converted_revenue == Decimal("75000")
    assert kpis.converted_customers == 1
    assert kpis.conversion_rate == "33.3"


def test_compose_kpis_sales_and_counts(scenario):
    kpis = compose_kpis(
        KPIContext(
            customers=scenario,
            current_sales=Decimal("1500"),
            previous_sales=Decimal("1000"),
            total_showrooms=4,
            total_managers=3,
            total_salespeople=12,
            new_customers_since=NOW - timedelta(days=7),
        )
    )
    assert kpis.gross_sales == Decimal("1500")
    assert kpis.previous_gross_sales == Decimal("1000")
    assert kpis.sales_percentage_change == Decimal("50.0")
    assert (kpis.total_showrooms, kpis.total_managers, kpis.total_salespeople) == (4, 3, 12)
    assert kpis.new_customers == 2


def test_compose_kpis_on_empty_input():
    kpis = compose_kpis(KPIContext())
    assert kpis.active_pipeline_value == Decimal("0")
    assert kpis.open_opportunities == 0
    assert kpis.conversion_rate == "0.0"
    assert kpis.sales_percentage_change == Decimal("0")
    assert kpis.new_customers == 0


def test_as_display_formats_money_only(scenario):
    display = compose_kpis(
        KPIContext(customers=scenario, current_sales=Decimal("5000"), total_showrooms=2)
    ).as_display()

    assert display["active_pipeline_value"] == "150000.00"
    assert display["active_pipeline_value_display"] == "₹1,50,000"
    assert display["converted_revenue_display"] == "₹75,000"
    assert display["gross_sales_display"] == "₹5,000"
    assert display["sales_percentage_change"] == 100.0
    assert display["total_showrooms"] == 2
    assert display["conversion_rate"] == "33.3"
