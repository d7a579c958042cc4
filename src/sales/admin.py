from django.contrib import admin

from sales.models import SalesTransaction


@admin.register(SalesTransaction)
class SalesTransactionAdmin(admin.ModelAdmin):
    list_display = ("transaction_date", "showroom", "salesperson", "customer", "total_amount")
    list_filter = ("showroom",)
    search_fields = ("customer__full_name", "salesperson__email", "notes")
    list_select_related = ("showroom", "salesperson", "customer")
    readonly_fields = ("id", "created_at", "updated_at")
    date_hierarchy = "transaction_date"
