from decimal import Decimal

import pytest
from django.contrib.auth import get_user_model

from emp.models import Department, Employee

pytestmark = pytest.mark.django_db

User = get_user_model()


class TestAuth:

    def test_login_with_email(self, api_client, hr_user):
        res = api_client.post("/api/auth/login/", {
            "email": "hr@example.com", "password": "secret123"}, format="json")

        assert res.status_code == 200
        assert "access" in res.data and "refresh" in res.data
        assert res.data["user"]["role"] == "hr_manager"

    def test_bad_password(self, api_client, hr_user):
        res = api_client.post("/api/auth/login/", {
            "email": "hr@example.com", "password": "nope"}, format="json")

        assert res.status_code == 401

    def test_token_authenticates_requests(self, api_client, employee_user, employee):
        login = api_client.post("/api/auth/login/", {
            "email": "employee@example.com", "password": "secret123"}, format="json")
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")

        res = api_client.get("/api/auth/me/")

        assert res.status_code == 200
        assert res.data["user"]["employee"]["id"] == employee.pk
        assert res.data["user"]["employee_id"] == employee.pk

    def test_me_without_employee_record(self, client_for, hr_user):
        res = client_for(hr_user).get("/api/auth/me/")

        assert res.data["user"]["employee"] is None

    def test_only_system_admin_registers(self, client_for, hr_user, sysadmin_user):
        body = {"email": "New@Example.com", "password": "Str0ng-pass-123",
                "role": "hr_manager"}

        assert client_for(hr_user).post(
            "/api/auth/register/", body, format="json").status_code == 403

        res = client_for(sysadmin_user).post("/api/auth/register/", body, format="json")
        assert res.status_code == 201
        user = User.objects.get(email="new@example.com")
        assert user.role == "hr_manager"
        assert user.check_password("Str0ng-pass-123")

    def test_health_is_public(self, api_client):
        res = api_client.get("/api/health/")

        assert res.status_code == 200
        assert res.data["status"] == "ok"


class TestEmployees:

    def test_hr_creates_employee_with_login(self, client_for, hr_user, department):
        res = client_for(hr_user).post("/api/employees/", {
            "first_name": "Mia",
            "last_name": "Wong",
            "email": "Mia@Example.com",
            "department_id": department.pk,
            "position": "Analyst",
            "salary": "4200.00",
            "hire_date": "2024-01-02",
            "password": "welcome1",
        }, format="json")

        assert res.status_code == 201
        assert res.data["employee_code"] == "EMP0001"
        assert res.data["department"]["name"] == "Engineering"
        employee = Employee.objects.get(pk=res.data["id"])
        assert employee.email == "mia@example.com"
        assert employee.user.role == "employee"
        assert employee.user.check_password("welcome1")

    def test_negative_salary_rejected(self, client_for, hr_user, department):
        res = client_for(hr_user).post("/api/employees/", {
            "first_name": "Mia", "last_name": "Wong", "email": "mia@example.com",
            "department_id": department.pk, "position": "Analyst",
            "salary": "-1", "hire_date": "2024-01-02",
        }, format="json")

        assert res.status_code == 400
        assert "salary" in res.data

    def test_duplicate_email_rejected(self, client_for, hr_user, employee, department):
        res = client_for(hr_user).post("/api/employees/", {
            "first_name": "Jo", "last_name": "Doe", "email": "EMPLOYEE@example.com",
            "department_id": department.pk, "position": "Dev",
            "salary": "100", "hire_date": "2024-01-02",
        }, format="json")

        assert res.status_code == 400
        assert "email" in res.data

    def test_list_is_hr_only(self, client_for, employee_user, hr_user, employee, other_employee):
        assert client_for(employee_user).get("/api/employees/").status_code == 403

        res = client_for(hr_user).get("/api/employees/", {"search": "lee"})
        assert [e["full_name"] for e in res.data] == ["Ann Lee"]

    def test_employee_reads_only_own_record(self, client_for, employee_user, employee, other_employee):
        client = client_for(employee_user)

        assert client.get(f"/api/employees/{employee.pk}/").status_code == 200
        assert client.get(f"/api/employees/{other_employee.pk}/").status_code == 403
        assert client.get("/api/employees/me/").data["id"] == employee.pk

    def test_hr_updates_salary(self, client_for, hr_user, employee):
        res = client_for(hr_user).patch(
            f"/api/employees/{employee.pk}/", {"salary": "6100.50"}, format="json")

        assert res.status_code == 200
        employee.refresh_from_db()
        assert employee.salary == Decimal("6100.50")

    def test_delete_requires_system_admin(self, client_for, hr_user, sysadmin_user, employee):
        url = f"/api/employees/{employee.pk}/"

        assert client_for(hr_user).delete(url).status_code == 403
        assert client_for(sysadmin_user).delete(url).status_code == 204
        assert not Employee.objects.filter(pk=employee.pk).exists()


class TestDepartments:

    def test_list_with_employee_count(self, client_for, employee_user, employee):
        res = client_for(employee_user).get("/api/departments/")

        assert res.status_code == 200
        assert res.data[0]["name"] == "Engineering"
        assert res.data[0]["employee_count"] == 1

    def test_create_is_hr_only(self, client_for, employee_user, hr_user, employee):
        body = {"name": "Finance"}

        assert client_for(employee_user).post(
            "/api/departments/", body, format="json").status_code == 403
        res = client_for(hr_user).post("/api/departments/", body, format="json")
        assert res.status_code == 201
        assert res.data["status"] == "active"

    def test_delete_blocked_while_staffed(self, client_for, sysadmin_user, employee, department):
        res = client_for(sysadmin_user).delete(f"/api/departments/{department.pk}/")

        assert res.status_code == 400
        assert Department.objects.filter(pk=department.pk).exists()

    def test_delete_empty_department(self, client_for, sysadmin_user):
        empty = Department.objects.create(name="Legal")

        res = client_for(sysadmin_user).delete(f"/api/departments/{empty.pk}/")

        assert res.status_code == 204


def test_logout_blacklists_refresh_token(api_client, client_for, employee_user):
    login = api_client.post("/api/auth/login/", {
        "email": "employee@example.com", "password": "secret123"}, format="json")
    refresh = login.data["refresh"]

    res = client_for(employee_user).post(
        "/api/auth/logout/", {"refresh": refresh}, format="json")
    assert res.status_code == 205

    res = api_client.post("/api/auth/refresh/", {"refresh": refresh}, format="json")
    assert res.status_code == 401
