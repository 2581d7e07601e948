# permissions.py
from rest_framework.permissions import BasePermission

from .models import CustomUser


class HasRole(BasePermission):
    role = None

    def has_permission(self, request, view):
        return hasattr(request.user, 'role') and request.user.role == self.role


class IsCustomer(HasRole):
    role = CustomUser.CUSTOMER

class IsVendor(HasRole):
    role = CustomUser.VENDOR

class IsAgency(HasRole):
    role = CustomUser.AGENCY

class IsAdmin(HasRole):
    role = CustomUser.ADMIN


class IsCustomerOrAdmin(BasePermission):
    def has_permission(self, request, view):
        return getattr(request.user, 'role', None) in (CustomUser.CUSTOMER, CustomUser.ADMIN)
