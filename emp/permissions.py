# emp/permissions.py
from rest_framework.permissions import BasePermission
import logging

logger = logging.getLogger(__name__)

HR_ROLES = ("hr_manager", "system_admin")


def can_access_employee(user, employee):
    """
    HR manager / system admin -> every employee
    Employee -> only the employee record linked to their own user
    """
    if not user or not getattr(user, "is_authenticated", False):
        return False
    if getattr(user, "role", None) in HR_ROLES:
        return True
    return bool(employee is not None and employee.user_id
                and employee.user_id == user.id)


def scope_to_user(queryset, user, employee_field="employee"):
    """Restrict an employee-owned queryset to what `user` may see."""
    if getattr(user, "role", None) in HR_ROLES:
        return queryset
    return queryset.filter(**{f"{employee_field}__user": user})


class IsOwnerOrHR(BasePermission):
    """
    Object-level gate for Employee objects and anything with an
    `employee` attribute (attendance, payroll).
    """

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        employee = obj if hasattr(obj, "employee_code") else getattr(
            obj, "employee", None)
        allowed = can_access_employee(request.user, employee)
        if not allowed:
            logger.info("Object access denied: user=%s obj=%s path=%s",
                        request.user.id, obj.pk, request.path)
        return allowed
