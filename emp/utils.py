from .exceptions import EmployeeNotFound
from .models import Employee

EMP_CODE_PREFIX = "EMP"
EMP_CODE_WIDTH = 4


def generate_employee_code():
    last = Employee.objects.filter(
        employee_code__startswith=EMP_CODE_PREFIX).order_by('-id').first()
    if not last:
        next_number = 1
    else:
        try:
            next_number = int(last.employee_code[len(EMP_CODE_PREFIX):]) + 1
        except ValueError:
            next_number = last.id + 1
    code = f"{EMP_CODE_PREFIX}{next_number:0{EMP_CODE_WIDTH}d}"
    while Employee.objects.filter(employee_code=code).exists():
        next_number += 1
        code = f"{EMP_CODE_PREFIX}{next_number:0{EMP_CODE_WIDTH}d}"
    return code


def get_employee_for_user(user):
    """
    Employee record linked to `user`; EmployeeNotFound if there is none.
    """
    try:
        return user.employee
    except Employee.DoesNotExist:
        raise EmployeeNotFound()


def employee_display_name(employee):
    """Best-effort employee display name."""
    if employee is None:
        return "Employee"
    name = employee.full_name()
    if name:
        return name
    if employee.user_id and employee.user.get_full_name():
        return employee.user.get_full_name()
    return employee.employee_code
