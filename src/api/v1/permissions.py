"""Role-based DRF permissions for the reporting API."""
from rest_framework.permissions import BasePermission


def _is_active_staff(user):
    if not (user and user.is_authenticated):
        return False
    if user.is_superuser:
        return True
    return user.is_active and user.status == "active"


class IsActiveStaff(BasePermission):
    """Authenticated users whose account has been approved."""

    message = "Your account is not active."

    def has_permission(self, request, view):
        return _is_active_staff(request.user)


class IsAdmin(BasePermission):
    """Allow access to enterprise administrators."""

    message = "Admin access required."

    def has_permission(self, request, view):
        user = request.user
        return _is_active_staff(user) and (user.is_superuser or user.role == "admin")


class IsManagerOrAdmin(BasePermission):
    """Allow access to users with the admin or manager role."""

    message = "Manager or admin access required."

    def has_permission(self, request, view):
        user = request.user
        return _is_active_staff(user) and (user.is_superuser or user.role in ("admin", "manager"))
