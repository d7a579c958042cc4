"""Grouped report rows for the admin dashboard.

All sorts are stable: ties keep the order in which labels were first seen
(or seeded), so output is deterministic for a given input order.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Iterable, Mapping, Optional, Sequence

from analytics.pipeline import conversion_rate
from analytics.records import CustomerRecord
from core.formatting import safe_decimal

UNKNOWN_SOURCE = "Unknown"

WALKOUT_REASONS = (
    ("wants_more_discount", "Wants More Discount"),
    ("checking_other_jewellers", "Checking Other Jewellers"),
    ("felt_less_variety", "Felt Less Variety"),
    ("others", "Other Reasons"),
)


@dataclass(frozen=True)
class GroupConversion:
    label: str
    seen: int
    converted: int
    rate: Decimal


@dataclass(frozen=True)
class GroupCount:
    label: str
    count: int


@dataclass(frozen=True)
class SalespersonCount:
    id: object
    name: str
    sales_count: int


def is_closed_won(customer: CustomerRecord) -> bool:
    return customer.is_closed_won


# ---------------------------------------------------------------------------
# Dimensions
# ---------------------------------------------------------------------------


def lead_source_of(customer: CustomerRecord) -> list[str]:
    source = (customer.lead_source or "").strip()
    return [source or UNKNOWN_SOURCE]


def category_types_of(customer: CustomerRecord) -> list[str]:
    labels = []
    for category in customer.interest_categories:
        if category.category_type is None:
            continue
        label = category.category_type.value
        if label not in labels:
            labels.append(label)
    return labels


def conversion_by(
    customers: Iterable[CustomerRecord],
    dimension: Callable[[CustomerRecord], Iterable[str]],
    *,
    converted: Callable[[CustomerRecord], bool] = is_closed_won,
) -> list[GroupConversion]:
    seen: dict[str, int] = {}
    won: dict[str, int] = {}
    for customer in customers:
        is_won = converted(customer)
        for label in dict.fromkeys(dimension(customer)):
            seen[label] = seen.get(label, 0) + 1
            won[label] = won.get(label, 0) + (1 if is_won else 0)
    return [
        GroupConversion(label=label, seen=count, converted=won[label], rate=conversion_rate(won[label], count))
        for label, count in seen.items()
    ]


def _exact_rate(row: GroupConversion) -> Decimal:
    return Decimal(row.converted) / row.seen if row.seen else Decimal("0")


def lowest_category_conversion(customers: Iterable[CustomerRecord], limit: int = 5) -> list[GroupConversion]:
    rows = conversion_by(customers, category_types_of)
    # rank on the exact ratio; rate is rounded for display
    return sorted(rows, key=_exact_rate)[:limit]


def lead_source_breakdown(customers: Iterable[CustomerRecord]) -> list[GroupCount]:
    counts: dict[str, int] = {}
    for customer in customers:
        for label in lead_source_of(customer):
            counts[label] = counts.get(label, 0) + 1
    rows = [GroupCount(label=label, count=count) for label, count in counts.items()]
    return sorted(rows, key=lambda r: r.count, reverse=True)


def top_walkout_reasons(customers: Iterable[CustomerRecord], limit: int = 3) -> list[GroupCount]:
    """Why visitors who did not buy walked out, most frequent first."""
    counts = {label: 0 for _, label in WALKOUT_REASONS}
    for customer in customers:
        if customer.is_closed_won:
            continue
        for category in customer.interest_categories:
            prefs = category.preferences
            for attr, label in WALKOUT_REASONS:
                if getattr(prefs, attr):
                    counts[label] += 1
    rows = [GroupCount(label=label, count=count) for label, count in counts.items()]
    # sorted() with reverse=True keeps ties in seed order
    return sorted(rows, key=lambda r: r.count, reverse=True)[:limit]


def salesperson_performance(
    customers: Iterable[CustomerRecord],
    salespeople: Mapping[object, str],
    limit: int = 5,
) -> list[SalespersonCount]:
    """Closed Won counts per salesperson, weakest first.

    *salespeople* maps id to display name; everyone listed starts at zero and
    customers of unlisted salespeople are ignored.
    """
    counts = {sp_id: 0 for sp_id in salespeople}
    for customer in customers:
        sp_id = customer.assigned_salesperson_id
        if customer.is_closed_won and sp_id in counts:
            counts[sp_id] += 1
    rows = [SalespersonCount(id=sp_id, name=salespeople[sp_id], sales_count=n) for sp_id, n in counts.items()]
    return sorted(rows, key=lambda r: r.sales_count)[:limit]


def rank_rows(rows: Sequence[Mapping], key: str, limit: Optional[int] = None) -> list[Mapping]:
    """Rows sorted descending by their *key* value; missing values rank as zero."""
    return sorted(rows, key=lambda r: safe_decimal(r.get(key)), reverse=True)[:limit]


def rank_showrooms(rows: Sequence[Mapping], limit: int = 5) -> list[Mapping]:
    return rank_rows(rows, "ytd_sales", limit=limit)


def top_by(rows: Sequence[Mapping], key: str) -> Optional[Mapping]:
    """First row with the largest *key* value, or None for no rows."""
    ranked = rank_rows(rows, key, limit=1)
    return ranked[0] if ranked else None


def sum_by(records: Iterable, key: Callable, amount: str = "total_amount") -> dict:
    """Total *amount* per ``key(record)``, in first-seen order; None keys are skipped."""
    totals: dict = {}
    for record in records:
        label = key(record)
        if label is None:
            continue
        totals[label] = totals.get(label, Decimal("0")) + safe_decimal(getattr(record, amount))
    return totals
