"""Models for the sales app."""
from decimal import Decimal

from django.conf import settings
from django.db import models
from django.utils import timezone

from core.models import TimeStampedModel


class SalesTransaction(TimeStampedModel):
    """A completed sale recorded at a showroom."""

    showroom = models.ForeignKey(
        "showrooms.Showroom",
        on_delete=models.PROTECT,
        related_name="transactions",
        verbose_name="showroom",
    )
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="transactions",
        verbose_name="customer",
    )
    salesperson = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="transactions",
        verbose_name="salesperson",
    )
    total_amount = models.DecimalField(
        "total amount",
        max_digits=14,
        decimal_places=2,
        default=Decimal("0.00"),
    )
    transaction_date = models.DateTimeField("transaction date", default=timezone.now, db_index=True)
    notes = models.TextField("notes", blank=True, default="")

    class Meta:
        verbose_name = "sales transaction"
        verbose_name_plural = "sales transactions"
        ordering = ["-transaction_date"]
        indexes = [
            models.Index(fields=["showroom", "transaction_date"], name="txn_showroom_date_idx"),
        ]

    def __str__(self):
        return f"{self.showroom_id} {self.total_amount} @ {self.transaction_date:%Y-%m-%d}"
