from django.contrib import admin

from customers.models import Customer


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = (
        "full_name",
        "phone_number",
        "lead_status",
        "lead_source",
        "assigned_showroom",
        "assigned_salesperson",
        "purchase_amount",
        "created_at",
    )
    list_filter = ("lead_status", "interest_level", "assigned_showroom", "deleted_at")
    search_fields = ("full_name", "phone_number", "email")
    list_select_related = ("assigned_showroom", "assigned_salesperson")
    readonly_fields = ("id", "created_at", "updated_at")
    date_hierarchy = "created_at"
