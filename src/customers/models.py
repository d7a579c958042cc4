"""Models for the customers app."""
from django.conf import settings
from django.db import models
from django.utils import timezone

from analytics.records import LeadStatus as CoreLeadStatus
from core.models import TimeStampedModel
from customers.interests import validate_interest_categories


class CustomerQuerySet(models.QuerySet):
    def alive(self):
        """Rows that have not been soft-deleted."""
        return self.filter(deleted_at__isnull=True)


class Customer(TimeStampedModel):
    """A walk-in or lead tracked by a showroom's sales team."""

    class LeadStatus(models.TextChoices):
        NEW_LEAD = CoreLeadStatus.NEW_LEAD.value, "New Lead"
        CONTACTED = CoreLeadStatus.CONTACTED.value, "Contacted"
        QUALIFIED = CoreLeadStatus.QUALIFIED.value, "Qualified"
        PROPOSAL_SENT = CoreLeadStatus.PROPOSAL_SENT.value, "Proposal Sent"
        NEGOTIATION = CoreLeadStatus.NEGOTIATION.value, "Negotiation"
        CLOSED_WON = CoreLeadStatus.CLOSED_WON.value, "Closed Won"
        CLOSED_LOST = CoreLeadStatus.CLOSED_LOST.value, "Closed Lost"

    class InterestLevel(models.TextChoices):
        HOT = "Hot", "Hot"
        WARM = "Warm", "Warm"
        COLD = "Cold", "Cold"
        NONE = "None", "None"

    assigned_showroom = models.ForeignKey(
        "showrooms.Showroom",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="customers",
        verbose_name="assigned showroom",
    )
    assigned_salesperson = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="customers",
        verbose_name="assigned salesperson",
    )
    full_name = models.CharField("full name", max_length=200)
    phone_number = models.CharField("phone number", max_length=20, blank=True, default="", db_index=True)
    email = models.EmailField("email", blank=True, default="")
    lead_status = models.CharField(
        "lead status",
        max_length=20,
        choices=LeadStatus.choices,
        default=LeadStatus.NEW_LEAD,
        db_index=True,
    )
    lead_source = models.CharField("lead source", max_length=100, blank=True, default="")
    interest_level = models.CharField(
        "interest level",
        max_length=10,
        choices=InterestLevel.choices,
        default=InterestLevel.NONE,
    )
    interest_categories_json = models.JSONField(
        "interest categories",
        null=True,
        blank=True,
        validators=[validate_interest_categories],
    )
    purchase_amount = models.DecimalField(
        "purchase amount",
        max_digits=14,
        decimal_places=2,
        null=True,
        blank=True,
    )
    follow_up_date = models.DateField("follow-up date", null=True, blank=True, db_index=True)
    notes = models.TextField("notes", blank=True, default="")
    deleted_at = models.DateTimeField("deleted at", null=True, blank=True, db_index=True)

    objects = CustomerQuerySet.as_manager()

    class Meta:
        verbose_name = "customer"
        verbose_name_plural = "customers"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["assigned_showroom", "lead_status"], name="customer_showroom_status_idx"),
            models.Index(fields=["assigned_salesperson", "created_at"], name="customer_sp_created_idx"),
        ]

    def __str__(self):
        return self.full_name or self.phone_number

    def soft_delete(self):
        self.deleted_at = timezone.now()
        self.save(update_fields=["deleted_at", "updated_at"])
