"""Custom DRF permissions for the distribution dashboard."""
from rest_framework.permissions import SAFE_METHODS, BasePermission


class CanViewSupplierPerformance(BasePermission):
    """Read access to supplier targets, incentives and revenue."""

    def has_permission(self, request, view):
        user = request.user
        return bool(user and user.is_authenticated and user.can_view_supplier_performance)


class CanManageSupplierPerformance(BasePermission):
    """Any role that may view can read; only supplier managers can write."""

    message = "You do not have permission to manage supplier targets and incentives."

    def has_permission(self, request, view):
        user = request.user
        if not (user and user.is_authenticated):
            return False
        if request.method in SAFE_METHODS:
            return user.can_view_supplier_performance
        return user.can_manage_supplier_performance
