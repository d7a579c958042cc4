import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("showrooms", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="PipelineSnapshot",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="created at")),
                ("updated_at", models.DateTimeField(auto_now=True, verbose_name="updated at")),
                ("date", models.DateField(verbose_name="date")),
                ("total_customers", models.IntegerField(default=0, verbose_name="total customers")),
                ("open_opportunities", models.IntegerField(default=0, verbose_name="open opportunities")),
                (
                    "active_pipeline_value",
                    models.DecimalField(decimal_places=2, default=0, max_digits=16, verbose_name="active pipeline value"),
                ),
                ("converted_customers", models.IntegerField(default=0, verbose_name="converted customers")),
                (
                    "converted_revenue",
                    models.DecimalField(decimal_places=2, default=0, max_digits=16, verbose_name="converted revenue"),
                ),
                (
                    "gross_sales",
                    models.DecimalField(decimal_places=2, default=0, max_digits=16, verbose_name="gross sales"),
                ),
                (
                    "showroom",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="pipeline_snapshots",
                        to="showrooms.showroom",
                        verbose_name="showroom",
                    ),
                ),
            ],
            options={
                "verbose_name": "pipeline snapshot",
                "verbose_name_plural": "pipeline snapshots",
                "ordering": ["-date"],
                "unique_together": {("showroom", "date")},
            },
        ),
    ]
