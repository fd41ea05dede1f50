from rest_framework.permissions import SAFE_METHODS, BasePermission

from .services import is_admin_user


class IsAdminRole(BasePermission):
    """Staff users or profiles with the admin role."""

    message = 'Se requieren permisos de administrador.'

    def has_permission(self, request, view):
        return is_admin_user(request.user)


class IsAdminOrReadOnly(BasePermission):
    message = 'Se requieren permisos de administrador.'

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return True
        return is_admin_user(request.user)


class IsAuthenticatedReadOrAdmin(BasePermission):
    """Authenticated users may read; writes are admin-only."""

    message = 'Se requieren permisos de administrador.'

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return bool(request.user and request.user.is_authenticated)
        return is_admin_user(request.user)
