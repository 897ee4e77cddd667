from rest_framework import permissions


class IsShopStaff(permissions.BasePermission):
    """
    Permission: User must work at the shop (or be a superuser).
    """

    def has_object_permission(self, request, view, obj):
        # obj is a Shop instance
        return obj.has_staff(request.user)


class IsShopOwner(permissions.BasePermission):
    """
    Permission: User must own the shop.
    """

    def has_object_permission(self, request, view, obj):
        return obj.owner_id == request.user.id or request.user.is_superuser
