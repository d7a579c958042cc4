from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import User


@admin.register(User)
class UserAdmin(BaseUserAdmin):
    """Admin configuration for staff accounts."""

    # ------------------------------------------------------------------
    # List view
    # ------------------------------------------------------------------
    list_display = (
        "email",
        "first_name",
        "last_name",
        "role",
        "status",
        "assigned_showroom",
        "supervising_manager",
        "is_active",
    )
    list_filter = ("role", "status", "is_active", "enterprise")
    search_fields = ("email", "first_name", "last_name", "phone_number", "employee_id")
    ordering = ("first_name", "last_name")
    list_select_related = ("assigned_showroom", "supervising_manager")
    actions = ("approve_users", "deactivate_users")

    # ------------------------------------------------------------------
    # Detail / edit view
    # ------------------------------------------------------------------
    fieldsets = (
        (None, {"fields": ("email", "password")}),
        (
            _("Personal info"),
            {"fields": ("first_name", "last_name", "phone_number", "employee_id")},
        ),
        (
            _("Organisation"),
            {
                "fields": (
                    "enterprise",
                    "role",
                    "status",
                    "assigned_showroom",
                    "supervising_manager",
                ),
            },
        ),
        (
            _("Permissions"),
            {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")},
        ),
        (
            _("Important dates"),
            {"fields": ("last_login", "date_joined")},
        ),
    )

    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": (
                    "email",
                    "first_name",
                    "last_name",
                    "enterprise",
                    "role",
                    "password1",
                    "password2",
                ),
            },
        ),
    )

    readonly_fields = ("date_joined", "last_login")

    @admin.action(description="Approve selected users")
    def approve_users(self, request, queryset):
        queryset.update(status=User.Status.ACTIVE, is_active=True)

    @admin.action(description="Deactivate selected users")
    def deactivate_users(self, request, queryset):
        queryset.update(status=User.Status.INACTIVE, is_active=False)
