import logging
from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP

from django.db import IntegrityError, transaction
from django.utils import timezone

from emp.exceptions import (
    AlreadyCheckedIn, AlreadyCheckedOut, InvalidRange, LeaveOverlap, NotCheckedIn)
from emp.models import Attendance, Employee, LeaveRequest
from emp.permissions import scope_to_user

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
MICROSECONDS_PER_HOUR = Decimal(3600 * 10**6)
MAX_SHIFT = timedelta(hours=24)


def hours_between(check_in, check_out):
    """
    Elapsed hours from check_in to check_out as a Decimal rounded
    half-up to 2 places. check_out must be strictly after check_in and
    at most MAX_SHIFT later.
    """
    if check_out <= check_in:
        raise InvalidRange("Check-out must be after check-in.")
    if check_out - check_in > MAX_SHIFT:
        raise InvalidRange("A shift cannot be longer than 24 hours.")
    micros = (check_out - check_in) // timedelta(microseconds=1)
    return (Decimal(micros) / MICROSECONDS_PER_HOUR).quantize(
        TWO_PLACES, rounding=ROUND_HALF_UP)


class AttendanceService:

    @staticmethod
    def _lock_day(employee, day):
        return (Attendance.objects.select_for_update()
                .filter(employee=employee, date=day).first())

    @staticmethod
    def _stamp_check_in(record, now):
        if record.check_in:
            raise AlreadyCheckedIn()
        record.check_in = now
        record.status = 'present'
        record.save(update_fields=['check_in', 'status', 'updated_at'])
        return record

    @staticmethod
    @transaction.atomic
    def check_in(employee, now=None):
        now = now or timezone.now()
        day = timezone.localdate(now)

        record = AttendanceService._lock_day(employee, day)
        if record is None:
            try:
                with transaction.atomic():
                    record = Attendance.objects.create(
                        employee=employee, date=day, check_in=now, status='present')
                logger.info("Check-in: employee=%s date=%s",
                            employee.employee_code, day)
                return record
            except IntegrityError:
                # a concurrent request created the row first
                record = AttendanceService._lock_day(employee, day)

        record = AttendanceService._stamp_check_in(record, now)
        logger.info("Check-in: employee=%s date=%s", employee.employee_code, day)
        return record

    @staticmethod
    @transaction.atomic
    def check_out(employee, now=None):
        now = now or timezone.now()
        day = timezone.localdate(now)

        record = AttendanceService._lock_day(employee, day)

        if record is None or record.check_in is None:
            raise NotCheckedIn()

        if record.check_out:
            raise AlreadyCheckedOut()

        record.check_out = now
        record.hours_worked = hours_between(record.check_in, now)
        record.save(update_fields=['check_out', 'hours_worked', 'updated_at'])

        logger.info("Check-out: employee=%s date=%s hours=%s",
                    employee.employee_code, day, record.hours_worked)
        return record

    @staticmethod
    @transaction.atomic
    def record_entry(employee, date, status, check_in=None, check_out=None, notes=None):
        """
        HR/admin upsert of the (employee, date) record. Hours are derived
        only when both timestamps are given.
        """
        hours = None
        if check_in and check_out:
            hours = hours_between(check_in, check_out)

        record, created = Attendance.objects.update_or_create(
            employee=employee,
            date=date,
            defaults={
                'check_in': check_in,
                'check_out': check_out,
                'hours_worked': hours,
                'status': status,
                'notes': notes,
            }
        )
        logger.info("Attendance %s by HR: employee=%s date=%s status=%s",
                    "created" if created else "updated",
                    employee.employee_code, date, status)
        return record, created


class AttendanceQueryService:
    """
    Handles attendance query logic based on user roles
    """

    @staticmethod
    def list_for(user, employee_id=None, start_date=None, end_date=None):
        if start_date and end_date and end_date < start_date:
            raise InvalidRange("end_date must not be before start_date.")

        queryset = scope_to_user(Attendance.objects.all(), user)

        # only HR/admin may pick another employee; scoping already pins employees
        if employee_id and getattr(user, "is_hr_or_admin", False):
            queryset = queryset.filter(employee_id=employee_id)
        if start_date:
            queryset = queryset.filter(date__gte=start_date)
        if end_date:
            queryset = queryset.filter(date__lte=end_date)

        return queryset.select_related(
            "employee", "employee__department").order_by("-date")


def leave_days(start_date, end_date):
    """Calendar days covered by a leave, both ends included."""
    if end_date < start_date:
        raise InvalidRange("End date must not be before start date.")
    return (end_date - start_date).days + 1


class LeaveService:

    @staticmethod
    @transaction.atomic
    def apply(employee, leave_type, start_date, end_date, reason=None):
        days = leave_days(start_date, end_date)

        # serialize applications per employee so the overlap check holds
        Employee.objects.select_for_update().filter(pk=employee.pk).first()

        overlapping = LeaveRequest.objects.filter(
            employee=employee,
            start_date__lte=end_date,
            end_date__gte=start_date,
        ).exclude(status=LeaveRequest.STATUS_REJECTED)
        if overlapping.exists():
            raise LeaveOverlap()

        leave = LeaveRequest.objects.create(
            employee=employee,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            days=days,
            reason=reason,
        )
        logger.info("Leave applied: employee=%s type=%s %s..%s days=%s",
                    employee.employee_code, leave_type.name,
                    start_date, end_date, days)
        return leave

    @staticmethod
    def list_for(user, employee_id=None, status=None, start_date=None, end_date=None):
        queryset = scope_to_user(LeaveRequest.objects.all(), user)

        if employee_id and getattr(user, "is_hr_or_admin", False):
            queryset = queryset.filter(employee_id=employee_id)
        if status:
            queryset = queryset.filter(status=status)
        if start_date:
            queryset = queryset.filter(start_date__gte=start_date)
        if end_date:
            queryset = queryset.filter(end_date__lte=end_date)

        return queryset.select_related(
            "employee", "employee__department", "leave_type")
