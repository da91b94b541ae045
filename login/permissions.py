# login/permissions.py

import logging

from rest_framework.permissions import BasePermission

logger = logging.getLogger(__name__)


class RolePermission(BasePermission):
    """
    Generic role permission: subclass and set `allowed_roles`.
    """

    allowed_roles = ()

    def has_permission(self, request, view):
        user = getattr(request, "user", None)
        if not user or not getattr(user, "is_authenticated", False):
            return False
        role = (getattr(user, "role", "") or "").lower()
        allowed = role in self.allowed_roles
        if not allowed:
            logger.info("Permission denied: user=%s role=%s path=%s",
                        getattr(user, "id", None), role, request.path)
        return allowed


class IsHRManager(RolePermission):
    allowed_roles = ("hr_manager",)


class IsSystemAdmin(RolePermission):
    allowed_roles = ("system_admin",)


class IsHROrAdmin(RolePermission):
    allowed_roles = ("hr_manager", "system_admin")
