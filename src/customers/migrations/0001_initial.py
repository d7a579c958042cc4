import uuid

import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models

import customers.interests


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("showrooms", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("full_name", models.CharField(max_length=200, verbose_name="full name")),
                (
                    "phone_number",
                    models.CharField(blank=True, db_index=True, default="", max_length=20, verbose_name="phone number"),
                ),
                ("email", models.EmailField(blank=True, default="", max_length=254, verbose_name="email")),
                (
                    "lead_status",
                    models.CharField(
                        choices=[
                            ("New Lead", "New Lead"),
                            ("Contacted", "Contacted"),
                            ("Qualified", "Qualified"),
                            ("Proposal Sent", "Proposal Sent"),
                            ("Negotiation", "Negotiation"),
                            ("Closed Won", "Closed Won"),
                            ("Closed Lost", "Closed Lost"),
                        ],
                        db_index=True,
                        default="New Lead",
                        max_length=20,
                        verbose_name="lead status",
                    ),
                ),
                ("lead_source", models.CharField(blank=True, default="", max_length=100, verbose_name="lead source")),
                (
                    "interest_level",
                    models.CharField(
                        choices=[("Hot", "Hot"), ("Warm", "Warm"), ("Cold", "Cold"), ("None", "None")],
                        default="None",
                        max_length=10,
                        verbose_name="interest level",
                    ),
                ),
                (
                    "interest_categories_json",
                    models.JSONField(
                        blank=True,
                        null=True,
                        validators=[customers.interests.validate_interest_categories],
                        verbose_name="interest categories",
                    ),
                ),
                (
                    "purchase_amount",
                    models.DecimalField(
                        blank=True, decimal_places=2, max_digits=14, null=True, verbose_name="purchase amount"
                    ),
                ),
                (
                    "follow_up_date",
                    models.DateField(blank=True, db_index=True, null=True, verbose_name="follow-up date"),
                ),
                ("notes", models.TextField(blank=True, default="", verbose_name="notes")),
                ("deleted_at", models.DateTimeField(blank=True, db_index=True, null=True, verbose_name="deleted at")),
                (
                    "assigned_showroom",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="customers",
                        to="showrooms.showroom",
                        verbose_name="assigned showroom",
                    ),
                ),
                (
                    "assigned_salesperson",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="customers",
                        to=settings.AUTH_USER_MODEL,
                        verbose_name="assigned salesperson",
                    ),
                ),
            ],
            options={
                "verbose_name": "customer",
                "verbose_name_plural": "customers",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["assigned_showroom", "lead_status"], name="customer_showroom_status_idx"),
                    models.Index(fields=["assigned_salesperson", "created_at"], name="customer_sp_created_idx"),
                ],
            },
        ),
    ]
