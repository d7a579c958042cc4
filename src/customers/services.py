"""Customer scoping and the ORM -> record boundary used by every report."""

from __future__ import annotations

import logging

from accounts.models import User
from analytics.records import CustomerRecord
from customers.interests import parse_interest_categories
from customers.models import Customer

logger = logging.getLogger("jewelcrm")

RECORD_FIELDS = (
    "id",
    "lead_status",
    "interest_categories_json",
    "purchase_amount",
    "created_at",
    "assigned_salesperson_id",
    "lead_source",
    "assigned_showroom_id",
)


def scoped_customers(user):
    """Alive customers *user* is allowed to report on.

    - superuser: everything
    - admin: every customer of the admin's enterprise
    - manager: customers assigned to the manager's team
    - salesperson: their own customers
    """
    qs = Customer.objects.alive()
    if user is None or not user.is_authenticated:
        return qs.none()
    if user.is_superuser:
        return qs
    if user.role == User.Role.ADMIN:
        if user.enterprise_id is None:
            return qs.none()
        return qs.filter(assigned_showroom__enterprise_id=user.enterprise_id)
    if user.role == User.Role.MANAGER:
        return qs.filter(assigned_salesperson__supervising_manager=user)
    return qs.filter(assigned_salesperson=user)


def _build_record(
    *,
    id,
    lead_status,
    interest_categories_json,
    purchase_amount,
    created_at,
    assigned_salesperson_id,
    lead_source,
    assigned_showroom_id,
) -> CustomerRecord:
    return CustomerRecord(
        id=id,
        lead_status=lead_status,
        interest_categories=parse_interest_categories(interest_categories_json, customer_id=id),
        purchase_amount=purchase_amount,
        created_at=created_at,
        assigned_salesperson_id=assigned_salesperson_id,
        lead_source=lead_source or None,
        assigned_showroom_id=assigned_showroom_id,
    )


def customer_record(customer: Customer) -> CustomerRecord:
    return _build_record(**{field: getattr(customer, field) for field in RECORD_FIELDS})


def load_customer_records(queryset) -> list[CustomerRecord]:
    """Read only the reporting columns and build immutable records."""
    return [_build_record(**row) for row in queryset.values(*RECORD_FIELDS)]
