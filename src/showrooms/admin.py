"""Django admin configuration for the showrooms app."""
from django.contrib import admin

from showrooms.models import Enterprise, Showroom


@admin.register(Enterprise)
class EnterpriseAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "currency", "is_active", "created_at")
    list_filter = ("is_active",)
    search_fields = ("name", "code", "email", "phone")
    readonly_fields = ("id", "created_at", "updated_at")


@admin.register(Showroom)
class ShowroomAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "enterprise", "city", "state", "status", "manager")
    list_filter = ("status", "enterprise", "state")
    search_fields = ("name", "code", "city", "enterprise__name")
    readonly_fields = ("id", "created_at", "updated_at")
    list_select_related = ("enterprise", "manager")
    list_per_page = 50
