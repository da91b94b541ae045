from datetime import date, datetime, timedelta, timezone as dt_timezone
from decimal import Decimal

import pytest

from emp.exceptions import AlreadyCheckedIn, AlreadyCheckedOut, InvalidRange, NotCheckedIn
from emp.models import Attendance
from emp.services import AttendanceService, hours_between

MORNING = datetime(2024, 3, 5, 9, 0, tzinfo=dt_timezone.utc)


@pytest.mark.parametrize("delta, expected", [
    (timedelta(hours=8, minutes=30), Decimal("8.50")),
    (timedelta(hours=1, minutes=20), Decimal("1.33")),
    (timedelta(minutes=10), Decimal("0.17")),
    (timedelta(seconds=45), Decimal("0.01")),
    (timedelta(hours=24), Decimal("24.00")),
])
def test_hours_between_rounds_to_two_places(delta, expected):
    assert hours_between(MORNING, MORNING + delta) == expected


@pytest.mark.parametrize("delta", [
    timedelta(0),
    timedelta(minutes=-5),
    timedelta(hours=24, microseconds=1),
    timedelta(days=60),
])
def test_hours_between_rejects_empty_negative_or_overlong_span(delta):
    with pytest.raises(InvalidRange):
        hours_between(MORNING, MORNING + delta)


@pytest.mark.django_db
class TestCheckIn:

    def test_creates_present_record_for_the_day(self, employee):
        record = AttendanceService.check_in(employee, now=MORNING)

        assert record.date == date(2024, 3, 5)
        assert record.check_in == MORNING
        assert record.status == "present"
        assert record.check_out is None

    def test_second_check_in_same_day_fails(self, employee):
        AttendanceService.check_in(employee, now=MORNING)

        with pytest.raises(AlreadyCheckedIn):
            AttendanceService.check_in(employee, now=MORNING + timedelta(hours=1))

        assert Attendance.objects.filter(employee=employee).count() == 1

    def test_next_day_gets_its_own_record(self, employee):
        AttendanceService.check_in(employee, now=MORNING)
        AttendanceService.check_in(employee, now=MORNING + timedelta(days=1))

        assert Attendance.objects.filter(employee=employee).count() == 2

    def test_lost_create_race_stamps_existing_row(self, employee, monkeypatch):
        AttendanceService.record_entry(employee, date(2024, 3, 5), "absent")
        real_lock = AttendanceService._lock_day
        calls = []

        def lock_after_race(emp, day):
            calls.append(day)
            if len(calls) == 1:
                return None
            return real_lock(emp, day)

        monkeypatch.setattr(AttendanceService, "_lock_day", staticmethod(lock_after_race))

        record = AttendanceService.check_in(employee, now=MORNING)

        assert len(calls) == 2
        assert record.check_in == MORNING
        assert record.status == "present"
        assert Attendance.objects.filter(employee=employee).count() == 1

    def test_lost_create_race_against_check_in(self, employee, monkeypatch):
        AttendanceService.check_in(employee, now=MORNING)
        real_lock = AttendanceService._lock_day
        calls = []

        def lock_after_race(emp, day):
            calls.append(day)
            return None if len(calls) == 1 else real_lock(emp, day)

        monkeypatch.setattr(AttendanceService, "_lock_day", staticmethod(lock_after_race))

        with pytest.raises(AlreadyCheckedIn):
            AttendanceService.check_in(employee, now=MORNING + timedelta(minutes=5))

        assert Attendance.objects.get(employee=employee).check_in == MORNING

    def test_fills_in_hr_record_without_check_in(self, employee):
        AttendanceService.record_entry(employee, date(2024, 3, 5), "absent")

        record = AttendanceService.check_in(employee, now=MORNING)

        assert record.status == "present"
        assert record.check_in == MORNING
        assert Attendance.objects.filter(employee=employee).count() == 1


@pytest.mark.django_db
class TestCheckOut:

    def test_without_record_fails(self, employee):
        with pytest.raises(NotCheckedIn):
            AttendanceService.check_out(employee, now=MORNING)

    def test_record_without_check_in_fails(self, employee):
        AttendanceService.record_entry(employee, date(2024, 3, 5), "absent")

        with pytest.raises(NotCheckedIn):
            AttendanceService.check_out(employee, now=MORNING)

    def test_sets_check_out_and_hours(self, employee):
        AttendanceService.check_in(employee, now=MORNING)

        record = AttendanceService.check_out(
            employee, now=MORNING + timedelta(hours=7, minutes=45))

        record.refresh_from_db()
        assert record.check_out == MORNING + timedelta(hours=7, minutes=45)
        assert record.hours_worked == Decimal("7.75")

    def test_twice_fails(self, employee):
        AttendanceService.check_in(employee, now=MORNING)
        AttendanceService.check_out(employee, now=MORNING + timedelta(hours=8))

        with pytest.raises(AlreadyCheckedOut):
            AttendanceService.check_out(employee, now=MORNING + timedelta(hours=9))

        record = Attendance.objects.get(employee=employee)
        assert record.hours_worked == Decimal("8.00")


@pytest.mark.django_db
class TestRecordEntry:

    def test_upserts_on_employee_and_day(self, employee):
        first, created = AttendanceService.record_entry(
            employee, date(2024, 3, 5), "late", notes="traffic")
        second, created_again = AttendanceService.record_entry(
            employee, date(2024, 3, 5), "present",
            check_in=MORNING, check_out=MORNING + timedelta(hours=4))

        assert created is True
        assert created_again is False
        assert first.pk == second.pk
        second.refresh_from_db()
        assert second.status == "present"
        assert second.hours_worked == Decimal("4.00")
        assert second.notes is None

    def test_hours_left_empty_without_both_timestamps(self, employee):
        record, _ = AttendanceService.record_entry(
            employee, date(2024, 3, 5), "half_day", check_in=MORNING)

        assert record.hours_worked is None

    def test_overwrites_existing_check_in(self, employee):
        AttendanceService.check_in(employee, now=MORNING)

        record, _ = AttendanceService.record_entry(
            employee, date(2024, 3, 5), "present",
            check_in=MORNING - timedelta(hours=1),
            check_out=MORNING + timedelta(hours=7))

        assert record.hours_worked == Decimal("8.00")

    def test_rejects_multi_day_span(self, employee):
        with pytest.raises(InvalidRange):
            AttendanceService.record_entry(
                employee, date(2024, 1, 1), "present",
                check_in=datetime(2024, 1, 1, 9, tzinfo=dt_timezone.utc),
                check_out=datetime(2024, 3, 1, 9, tzinfo=dt_timezone.utc))

        assert not Attendance.objects.exists()

    def test_rejects_check_out_before_check_in(self, employee):
        with pytest.raises(InvalidRange):
            AttendanceService.record_entry(
                employee, date(2024, 3, 5), "present",
                check_in=MORNING, check_out=MORNING - timedelta(hours=1))

        assert not Attendance.objects.exists()
