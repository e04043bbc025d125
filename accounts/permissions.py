"""
Role-based permissions for the admin console
"""
from rest_framework import permissions

from .auth import resolve_role


def is_panel_admin(user):
    return bool(user and user.is_authenticated and resolve_role(user) == 'admin')


class IsPanelAdmin(permissions.BasePermission):
    """Only admins may use the view."""
    message = 'Admin role required.'

    def has_permission(self, request, view):
        return is_panel_admin(request.user)


class IsPanelAdminOrReadOnly(permissions.BasePermission):
    """Any signed-in user may read; only admins may create, update or delete."""
    message = 'Admin role required.'

    def has_permission(self, request, view):
        if not (request.user and request.user.is_authenticated):
            return False
        if request.method in permissions.SAFE_METHODS:
            return True
        return is_panel_admin(request.user)
