from datetime import date
from decimal import Decimal
from itertools import count

import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from emp.models import Department, Employee, LeaveType

User = get_user_model()


@pytest.fixture
def department(db):
    return Department.objects.create(name="Engineering", description="Builds things")


@pytest.fixture
def make_user(db):
    def _make(email, role="employee", password="secret123"):
        return User.objects.create_user(
            username=email, email=email, password=password, role=role)
    return _make


@pytest.fixture
def make_employee(db, department):
    seq = count(1)

    def _make(first="John", last="Doe", salary="5000", user=None, email=None, **extra):
        n = next(seq)
        return Employee.objects.create(
            employee_code=f"T{n:03d}",
            first_name=first,
            last_name=last,
            email=email or f"emp{n}@example.com",
            department=department,
            position="Developer",
            salary=Decimal(salary),
            hire_date=date(2023, 1, 15),
            user=user,
            **extra,
        )
    return _make


@pytest.fixture
def employee_user(make_user):
    return make_user("employee@example.com")


@pytest.fixture
def employee(make_employee, employee_user):
    return make_employee(user=employee_user, email="employee@example.com")


@pytest.fixture
def other_employee(make_employee, make_user):
    user = make_user("other@example.com")
    return make_employee(first="Ann", last="Lee", user=user, email="other@example.com")


@pytest.fixture
def hr_user(make_user):
    return make_user("hr@example.com", role="hr_manager")


@pytest.fixture
def sysadmin_user(make_user):
    return make_user("admin@example.com", role="system_admin")


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for():
    def _client(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client
    return _client


@pytest.fixture
def leave_type(db):
    return LeaveType.objects.create(name="Annual Leave", days=20)
