"""Models for the reports app."""
from django.db import models

from core.models import TimeStampedModel


class PipelineSnapshot(TimeStampedModel):
    """Daily pipeline and conversion figures for one showroom.

    Written once per day by the ``daily_pipeline_snapshot`` Celery task so
    trends can be charted without re-reading every customer row.
    """

    showroom = models.ForeignKey(
        "showrooms.Showroom",
        on_delete=models.CASCADE,
        related_name="pipeline_snapshots",
        verbose_name="showroom",
    )
    date = models.DateField("date")

    total_customers = models.IntegerField("total customers", default=0)
    open_opportunities = models.IntegerField("open opportunities", default=0)
    active_pipeline_value = models.DecimalField(
        "active pipeline value",
        max_digits=16,
        decimal_places=2,
        default=0,
    )
    converted_customers = models.IntegerField("converted customers", default=0)
    converted_revenue = models.DecimalField(
        "converted revenue",
        max_digits=16,
        decimal_places=2,
        default=0,
    )
    gross_sales = models.DecimalField(
        "gross sales",
        max_digits=16,
        decimal_places=2,
        default=0,
    )

    class Meta:
        verbose_name = "pipeline snapshot"
        verbose_name_plural = "pipeline snapshots"
        ordering = ["-date"]
        unique_together = [["showroom", "date"]]

    def __str__(self):
        return f"Pipeline {self.showroom} {self.date}"
