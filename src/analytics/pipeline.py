"""Pipeline valuation: price-range interest summed per customer and per set.

Callers pass customer sets that are already scoped to the requesting user.
Nothing here filters by role, showroom or lead status.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Optional

from analytics.price_ranges import PriceRangeParser, default_parser
from analytics.records import CustomerRecord
from core.formatting import safe_decimal

ZERO = Decimal("0")
HUNDRED = Decimal("100")
ONE_PLACE = Decimal("0.1")


def customer_pipeline_value(
    customer: CustomerRecord,
    *,
    parser: Optional[PriceRangeParser] = None,
    prefer_revenue_opportunity: bool = False,
) -> Decimal:
    """Sum of bucket estimates over every product in every interest category.

    With ``prefer_revenue_opportunity`` a product's own positive
    ``revenue_opportunity`` is used instead of its bucket estimate.
    """
    parser = parser or default_parser
    total = ZERO
    for category in customer.interest_categories:
        for product in category.products:
            if prefer_revenue_opportunity and product.revenue_opportunity:
                explicit = safe_decimal(product.revenue_opportunity)
                if explicit > 0:
                    total += explicit
                    continue
            total += parser.estimate(product.price_range)
    return total


def aggregate_pipeline_value(
    customers: Iterable[CustomerRecord],
    *,
    parser: Optional[PriceRangeParser] = None,
    prefer_revenue_opportunity: bool = False,
) -> Decimal:
    return sum(
        (
            customer_pipeline_value(
                c, parser=parser, prefer_revenue_opportunity=prefer_revenue_opportunity
            )
            for c in customers
        ),
        ZERO,
    )


# ---------------------------------------------------------------------------
# Conversions
# ---------------------------------------------------------------------------


def conversion_rate(converted: int, total: int) -> Decimal:
    """Percentage of *converted* over *total*, one decimal, 0 for an empty base."""
    if not total:
        return Decimal("0.0")
    rate = Decimal(converted) * HUNDRED / Decimal(total)
    return rate.quantize(ONE_PLACE, rounding=ROUND_HALF_UP)


def format_rate(converted: int, total: int) -> str:
    return f"{conversion_rate(converted, total):.1f}"


@dataclass(frozen=True)
class ConversionSummary:
    total_customers: int
    converted_customers: int
    converted_revenue: Decimal

    @property
    def conversion_rate(self) -> str:
        return format_rate(self.converted_customers, self.total_customers)


def summarize_conversions(customers: Iterable[CustomerRecord]) -> ConversionSummary:
    """Count customers with a recorded purchase and total their purchases."""
    total = 0
    converted = 0
    revenue = ZERO
    for customer in customers:
        total += 1
        amount = safe_decimal(customer.purchase_amount)
        if amount > 0:
            converted += 1
            revenue += amount
    return ConversionSummary(
        total_customers=total,
        converted_customers=converted,
        converted_revenue=revenue,
    )
