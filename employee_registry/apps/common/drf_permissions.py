"""
Django REST Framework permission classes for route-level role gates.

Field-level rules for updates are not decided here; they belong to
``employees.domain.permissions.PermissionResolver``.
"""
from rest_framework import permissions

from employee_registry.apps.employees.domain.fields import Role


class RoleRequiredPermission(permissions.BasePermission):
    """
    Base class for checking that the authenticated employee has one of
    ``allowed_roles``.

    Usage:
        class IsAdmin(RoleRequiredPermission):
            allowed_roles = (Role.ADMIN,)
    """
    allowed_roles = ()
    message = 'You do not have permission to perform this action'

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return getattr(user, 'role', None) in self.allowed_roles


class IsAdmin(RoleRequiredPermission):
    allowed_roles = (Role.ADMIN,)
    message = 'Admin access only'


class IsManagerOrAdmin(RoleRequiredPermission):
    allowed_roles = (Role.MANAGER, Role.ADMIN)
    message = 'Admin or Manager access only'
