"""Admin configuration for the reports app."""
from django.contrib import admin

from reports.models import PipelineSnapshot


@admin.register(PipelineSnapshot)
class PipelineSnapshotAdmin(admin.ModelAdmin):
    list_display = (
        "showroom",
        "date",
        "total_customers",
        "open_opportunities",
        "active_pipeline_value",
        "converted_customers",
        "converted_revenue",
        "gross_sales",
    )
    list_filter = ("showroom", "date")
    search_fields = ("showroom__name", "showroom__code")
    list_select_related = ("showroom",)
    date_hierarchy = "date"
    readonly_fields = ("id", "created_at", "updated_at")
    ordering = ["-date"]
