"""Immutable snapshot records consumed by the pipeline and KPI code.

Rows are read from the database once (see ``customers.services``) and turned
into these frozen dataclasses, so nothing below this layer touches the ORM.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class CategoryType(str, Enum):
    DIAMOND = "Diamond"
    GOLD = "Gold"
    POLKI = "Polki"


class LeadStatus(str, Enum):
    NEW_LEAD = "New Lead"
    CONTACTED = "Contacted"
    QUALIFIED = "Qualified"
    PROPOSAL_SENT = "Proposal Sent"
    NEGOTIATION = "Negotiation"
    CLOSED_WON = "Closed Won"
    CLOSED_LOST = "Closed Lost"


# ---------------------------------------------------------------------------
# Interest categories
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Product:
    product_name: str
    price_range: Optional[str]
    revenue_opportunity: Optional[Decimal] = None


@dataclass(frozen=True)
class DiamondProduct(Product):
    color_stone: bool = False
    fancy: bool = False
    pressure_setting: bool = False
    solitaire: bool = False
    traditional: bool = False


@dataclass(frozen=True)
class GoldProduct(Product):
    internal_categories: tuple[str, ...] = ()


@dataclass(frozen=True)
class PolkiProduct(Product):
    polki_categories: tuple[str, ...] = ()


AnyProduct = Union[Product, DiamondProduct, GoldProduct, PolkiProduct]


@dataclass(frozen=True)
class PreferenceFlags:
    """Reasons captured when a visit did not end in a purchase."""

    design_selected: bool = False
    wants_more_discount: bool = False
    checking_other_jewellers: bool = False
    felt_less_variety: bool = False
    others: str = ""


@dataclass(frozen=True)
class InterestCategory:
    # None when the stored category_type is missing or not recognised
    category_type: Optional[CategoryType]
    products: tuple[AnyProduct, ...] = ()
    preferences: PreferenceFlags = field(default_factory=PreferenceFlags)


# ---------------------------------------------------------------------------
# Row snapshots
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CustomerRecord:
    id: object
    lead_status: str = LeadStatus.NEW_LEAD.value
    interest_categories: tuple[InterestCategory, ...] = ()
    purchase_amount: Optional[Decimal] = None
    created_at: Optional[datetime] = None
    assigned_salesperson_id: object = None
    lead_source: Optional[str] = None
    assigned_showroom_id: object = None

    @property
    def is_closed_won(self) -> bool:
        return self.lead_status == LeadStatus.CLOSED_WON.value


@dataclass(frozen=True)
class TransactionRecord:
    total_amount: Decimal
    transaction_date: datetime
    showroom_id: object = None
    salesperson_id: object = None
