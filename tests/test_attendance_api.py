from datetime import date

import pytest

from emp.models import Attendance

pytestmark = pytest.mark.django_db

LIST_URL = "/api/attendance/"


class TestCheckInOut:

    def test_check_in_then_out(self, client_for, employee_user, employee):
        client = client_for(employee_user)

        res = client.post("/api/attendance/checkin/")
        assert res.status_code == 201
        assert res.data["attendance"]["status"] == "present"
        assert res.data["attendance"]["check_out"] is None

        res = client.post("/api/attendance/checkout/")
        assert res.status_code == 200
        assert res.data["attendance"]["check_out"] is not None
        assert res.data["attendance"]["hours_worked"] is not None

    def test_double_check_in_is_rejected_with_code(self, client_for, employee_user, employee):
        client = client_for(employee_user)
        client.post("/api/attendance/checkin/")

        res = client.post("/api/attendance/checkin/")

        assert res.status_code == 400
        assert res.data["code"] == "already_checked_in"
        assert Attendance.objects.filter(employee=employee).count() == 1

    def test_check_out_without_check_in(self, client_for, employee_user, employee):
        res = client_for(employee_user).post("/api/attendance/checkout/")

        assert res.status_code == 400
        assert res.data["code"] == "not_checked_in"

    def test_double_check_out(self, client_for, employee_user, employee):
        client = client_for(employee_user)
        client.post("/api/attendance/checkin/")
        client.post("/api/attendance/checkout/")

        res = client.post("/api/attendance/checkout/")

        assert res.status_code == 400
        assert res.data["code"] == "already_checked_out"

    def test_user_without_employee_record(self, client_for, make_user):
        res = client_for(make_user("ghost@example.com")).post("/api/attendance/checkin/")

        assert res.status_code == 404
        assert res.data["code"] == "employee_not_found"

    def test_requires_authentication(self, api_client):
        res = api_client.post("/api/attendance/checkin/")

        assert res.status_code == 401


class TestAttendanceList:

    @pytest.fixture
    def records(self, employee, other_employee):
        return [
            Attendance.objects.create(employee=employee, date=date(2024, 3, 4), status="present"),
            Attendance.objects.create(employee=employee, date=date(2024, 3, 5), status="late"),
            Attendance.objects.create(employee=other_employee, date=date(2024, 3, 5), status="present"),
        ]

    def test_employee_sees_only_own(self, client_for, employee_user, employee, records):
        res = client_for(employee_user).get(LIST_URL)

        assert res.status_code == 200
        ids = {row["employee"]["id"] for row in res.data["attendance"]}
        assert ids == {employee.pk}
        assert [row["date"] for row in res.data["attendance"]] == ["2024-03-05", "2024-03-04"]

    def test_employee_filter_ignored_for_employees(
            self, client_for, employee_user, employee, other_employee, records):
        res = client_for(employee_user).get(LIST_URL, {"employee_id": other_employee.pk})

        ids = {row["employee"]["id"] for row in res.data["attendance"]}
        assert ids == {employee.pk}

    def test_hr_sees_all_and_can_filter(self, client_for, hr_user, other_employee, records):
        client = client_for(hr_user)

        assert len(client.get(LIST_URL).data["attendance"]) == 3

        res = client.get(LIST_URL, {"employee_id": other_employee.pk})
        assert len(res.data["attendance"]) == 1

    def test_date_window(self, client_for, hr_user, records):
        res = client_for(hr_user).get(
            LIST_URL, {"start_date": "2024-03-05", "end_date": "2024-03-05"})

        assert len(res.data["attendance"]) == 2

    def test_inverted_window(self, client_for, hr_user, records):
        res = client_for(hr_user).get(
            LIST_URL, {"start_date": "2024-03-06", "end_date": "2024-03-01"})

        assert res.status_code == 400
        assert res.data["code"] == "invalid_range"

    def test_impossible_filter_date(self, client_for, hr_user, records):
        res = client_for(hr_user).get(LIST_URL, {"start_date": "2024-02-30T00:00:00"})

        assert res.status_code == 400
        assert "start_date" in res.data

    def test_user_without_employee_record(self, client_for, make_user):
        res = client_for(make_user("ghost@example.com")).get(LIST_URL)

        assert res.status_code == 404


class TestAttendanceEntry:

    def test_hr_creates_then_updates_same_day(self, client_for, hr_user, employee):
        client = client_for(hr_user)
        payload = {
            "employee_id": employee.pk,
            "date": "2024-03-05",
            "status": "present",
            "check_in": "2024-03-05T09:00:00Z",
            "check_out": "2024-03-05T17:30:00Z",
        }

        res = client.post(LIST_URL, payload, format="json")
        assert res.status_code == 201
        assert res.data["attendance"]["hours_worked"] == "8.50"

        payload["status"] = "late"
        payload["check_in"] = "2024-03-05T10:00:00Z"
        res = client.post(LIST_URL, payload, format="json")
        assert res.status_code == 200
        assert res.data["attendance"]["hours_worked"] == "7.50"
        assert Attendance.objects.filter(employee=employee).count() == 1

    def test_datetime_date_is_truncated_to_day(self, client_for, hr_user, employee):
        res = client_for(hr_user).post(LIST_URL, {
            "employee_id": employee.pk,
            "date": "2024-03-05T13:45:00Z",
            "status": "absent",
        }, format="json")

        assert res.status_code == 201
        assert res.data["attendance"]["date"] == "2024-03-05"

    def test_check_out_before_check_in(self, client_for, hr_user, employee):
        res = client_for(hr_user).post(LIST_URL, {
            "employee_id": employee.pk,
            "date": "2024-03-05",
            "status": "present",
            "check_in": "2024-03-05T17:00:00Z",
            "check_out": "2024-03-05T09:00:00Z",
        }, format="json")

        assert res.status_code == 400
        assert res.data["code"] == "invalid_range"

    def test_span_over_a_day_is_rejected_and_not_stored(self, client_for, hr_user, employee):
        res = client_for(hr_user).post(LIST_URL, {
            "employee_id": employee.pk,
            "date": "2024-01-01",
            "status": "present",
            "check_in": "2024-01-01T09:00:00Z",
            "check_out": "2024-03-01T09:00:00Z",
        }, format="json")

        assert res.status_code == 400
        assert res.data["code"] == "invalid_range"
        assert not Attendance.objects.exists()

    def test_impossible_calendar_date(self, client_for, hr_user, employee):
        res = client_for(hr_user).post(LIST_URL, {
            "employee_id": employee.pk,
            "date": "2024-02-30T10:00:00Z",
            "status": "present",
        }, format="json")

        assert res.status_code == 400
        assert "date" in res.data
        assert not Attendance.objects.exists()

    def test_employee_cannot_record(self, client_for, employee_user, employee):
        res = client_for(employee_user).post(LIST_URL, {
            "employee_id": employee.pk, "date": "2024-03-05", "status": "present",
        }, format="json")

        assert res.status_code == 403


class TestAttendanceDetail:

    def test_owner_and_hr_can_read(self, client_for, employee_user, hr_user, employee):
        record = Attendance.objects.create(
            employee=employee, date=date(2024, 3, 5), status="present")
        url = f"/api/attendance/{record.pk}/"

        assert client_for(employee_user).get(url).data["attendance"]["id"] == record.pk
        assert client_for(hr_user).get(url).status_code == 200

    def test_other_employee_is_forbidden(self, client_for, employee_user, other_employee):
        record = Attendance.objects.create(
            employee=other_employee, date=date(2024, 3, 5), status="present")

        res = client_for(employee_user).get(f"/api/attendance/{record.pk}/")

        assert res.status_code == 403
