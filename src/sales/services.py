"""Transaction scoping and windowed sums."""

from __future__ import annotations

from decimal import Decimal

from django.db.models import DecimalField, Sum, Value
from django.db.models.functions import Coalesce

from accounts.models import User
from analytics.records import TransactionRecord
from sales.models import SalesTransaction

ZERO = Decimal("0.00")


def scoped_transactions(user):
    """Transactions visible to *user*, following the customer scoping rules."""
    qs = SalesTransaction.objects.all()
    if user is None or not user.is_authenticated:
        return qs.none()
    if user.is_superuser:
        return qs
    if user.role == User.Role.ADMIN:
        if user.enterprise_id is None:
            return qs.none()
        return qs.filter(showroom__enterprise_id=user.enterprise_id)
    if user.role == User.Role.MANAGER:
        return qs.filter(salesperson__supervising_manager=user)
    return qs.filter(salesperson=user)


def sum_transactions(queryset, start, end) -> Decimal:
    """Sum ``total_amount`` over ``start <= transaction_date <= end``."""
    total = queryset.filter(
        transaction_date__gte=start,
        transaction_date__lte=end,
    ).aggregate(
        total=Coalesce(
            Sum("total_amount"),
            Value(ZERO),
            output_field=DecimalField(max_digits=16, decimal_places=2),
        )
    )["total"]
    return total if total is not None else ZERO


def load_transaction_records(queryset) -> list[TransactionRecord]:
    return [
        TransactionRecord(
            total_amount=row["total_amount"],
            transaction_date=row["transaction_date"],
            showroom_id=row["showroom_id"],
            salesperson_id=row["salesperson_id"],
        )
        for row in queryset.values("total_amount", "transaction_date", "showroom_id", "salesperson_id")
    ]
