"""Models for the showrooms app."""
from django.conf import settings
from django.db import models

from core.models import TimeStampedModel


class Enterprise(TimeStampedModel):
    """The jewellery business that owns one or more showrooms (the tenant)."""

    name = models.CharField("name", max_length=255)
    code = models.CharField("code", max_length=50, unique=True)
    currency = models.CharField("currency", max_length=10, default="INR")
    email = models.EmailField("email", blank=True, default="")
    phone = models.CharField("phone", max_length=30, blank=True, default="")
    is_active = models.BooleanField("active", default=True)

    class Meta:
        verbose_name = "enterprise"
        verbose_name_plural = "enterprises"
        ordering = ["name"]

    def __str__(self):
        return self.name


class ShowroomQuerySet(models.QuerySet):
    def active(self):
        return self.filter(status=Showroom.Status.ACTIVE)

    def for_enterprise(self, enterprise):
        return self.filter(enterprise=enterprise)


class Showroom(TimeStampedModel):
    """A physical showroom belonging to an Enterprise."""

    class Status(models.TextChoices):
        ACTIVE = "active", "Active"
        INACTIVE = "inactive", "Inactive"
        UNDER_RENOVATION = "under_renovation", "Under renovation"

    enterprise = models.ForeignKey(
        Enterprise,
        on_delete=models.CASCADE,
        related_name="showrooms",
        verbose_name="enterprise",
    )
    name = models.CharField("name", max_length=255)
    code = models.CharField("code", max_length=50, unique=True)
    address = models.TextField("address", blank=True, default="")
    city = models.CharField("city", max_length=100, blank=True, default="")
    state = models.CharField("state", max_length=100, blank=True, default="")
    phone = models.CharField("phone", max_length=30, blank=True, default="")
    status = models.CharField(
        "status",
        max_length=20,
        choices=Status.choices,
        default=Status.ACTIVE,
        db_index=True,
    )
    manager = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="managed_showrooms",
        verbose_name="manager",
    )

    objects = ShowroomQuerySet.as_manager()

    class Meta:
        verbose_name = "showroom"
        verbose_name_plural = "showrooms"
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} ({self.code})"
