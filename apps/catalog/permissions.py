from rest_framework import permissions


class IsCatalogAdminOrReadOnly(permissions.BasePermission):
    """
    Permission: anyone may read the catalog; only admin users edit it.
    """

    def has_permission(self, request, view):
        if request.method in permissions.SAFE_METHODS:
            return True
        return bool(request.user and request.user.is_authenticated and request.user.is_staff)
