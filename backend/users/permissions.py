from rest_framework import permissions
from .models import User


class IsAdminRole(permissions.BasePermission):
    message = "You don't have authorization!"

    def has_permission(self, request, view):
        return bool(
            request.user
            and request.user.is_authenticated
            and request.user.role == User.Role.ADMIN
        )


class IsCustomerRole(permissions.BasePermission):
    message = "You don't have authorization!"

    def has_permission(self, request, view):
        return bool(
            request.user
            and request.user.is_authenticated
            and request.user.role == User.Role.USER
        )
