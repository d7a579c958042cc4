"""Dashboard KPI composition.

``compose_kpis`` is the single place where transaction sums, pipeline value
and conversion counts are combined into the record the dashboards render.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional, Sequence

from analytics.pipeline import aggregate_pipeline_value, summarize_conversions
from analytics.price_ranges import PriceRangeParser
from analytics.records import CustomerRecord, LeadStatus
from core.formatting import RUPEE_SYMBOL, format_inr, safe_decimal

HUNDRED = Decimal("100")
ONE_PLACE = Decimal("0.1")

OPEN_LEAD_STATUSES = frozenset(
    {
        LeadStatus.NEW_LEAD.value,
        LeadStatus.CONTACTED.value,
        LeadStatus.QUALIFIED.value,
        LeadStatus.PROPOSAL_SENT.value,
        LeadStatus.NEGOTIATION.value,
    }
)


def percentage_change(current, previous) -> Decimal:
    """Relative change of *current* against *previous*, in percent (1 dp)."""
    current = safe_decimal(current)
    previous = safe_decimal(previous)
    if previous > 0:
        change = (current - previous) / previous * HUNDRED
    elif current > 0:
        # Policy: growth from a zero base is shown as +100%, not infinity.
        change = HUNDRED
    else:
        change = Decimal("0")
    return change.quantize(ONE_PLACE, rounding=ROUND_HALF_UP)


def is_open_opportunity(customer: CustomerRecord) -> bool:
    return customer.lead_status in OPEN_LEAD_STATUSES


def open_opportunities(customers: Iterable[CustomerRecord]) -> list[CustomerRecord]:
    return [c for c in customers if is_open_opportunity(c)]


# ---------------------------------------------------------------------------
# Composition
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KPIContext:
    customers: Sequence[CustomerRecord] = ()
    current_sales: Decimal = Decimal("0")
    previous_sales: Decimal = Decimal("0")
    total_showrooms: int = 0
    total_managers: int = 0
    total_salespeople: int = 0
    new_customers_since: Optional[datetime] = None
    parser: Optional[PriceRangeParser] = None
    prefer_revenue_opportunity: bool = False


@dataclass(frozen=True)
class KPIRecord:
    total_showrooms: int
    total_managers: int
    total_salespeople: int
    gross_sales: Decimal
    previous_gross_sales: Decimal
    sales_percentage_change: Decimal
    new_customers: int
    active_pipeline_value: Decimal
    open_opportunities: int
    converted_revenue: Decimal
    converted_customers: int
    conversion_rate: str

    MONEY_FIELDS = ("gross_sales", "previous_gross_sales", "active_pipeline_value", "converted_revenue")

    def as_dict(self) -> dict:
        return asdict(self)

    def as_display(self, currency_symbol: str = RUPEE_SYMBOL) -> dict:
        """Money rendered as INR strings; counts and percentages left as data."""
        data = self.as_dict()
        for name in self.MONEY_FIELDS:
            data[f"{name}_display"] = format_inr(data[name], currency_symbol)
            data[name] = str(data[name].quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))
        data["sales_percentage_change"] = float(self.sales_percentage_change)
        return data


def compose_kpis(context: KPIContext) -> KPIRecord:
    customers = list(context.customers)
    open_customers = open_opportunities(customers)
    conversions = summarize_conversions(customers)

    if context.new_customers_since is None:
        new_customers = 0
    else:
        new_customers = sum(
            1
            for c in customers
            if c.created_at is not None and c.created_at >= context.new_customers_since
        )

    current_sales = safe_decimal(context.current_sales)
    previous_sales = safe_decimal(context.previous_sales)

    return KPIRecord(
        total_showrooms=context.total_showrooms,
        total_managers=context.total_managers,
        total_salespeople=context.total_salespeople,
        gross_sales=current_sales,
        previous_gross_sales=previous_sales,
        sales_percentage_change=percentage_change(current_sales, previous_sales),
        new_customers=new_customers,
        active_pipeline_value=aggregate_pipeline_value(
            open_customers,
            parser=context.parser,
            prefer_revenue_opportunity=context.prefer_revenue_opportunity,
        ),
        open_opportunities=len(open_customers),
        converted_revenue=conversions.converted_revenue,
        converted_customers=conversions.converted_customers,
        conversion_rate=conversions.conversion_rate,
    )
