from rest_framework import permissions


class IsStockShopStaff(permissions.BasePermission):
    """
    Permission: User must work at the shop the stock batch belongs to.
    """

    def has_object_permission(self, request, view, obj):
        # obj is a RegularStock instance
        return obj.shop.has_staff(request.user)
