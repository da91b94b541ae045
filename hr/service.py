import calendar
import logging
from datetime import date, datetime, time
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.utils import timezone

from emp.exceptions import (
    AlreadyPaid, DuplicatePayroll, EmployeeNotFound, InvalidRange,
    LeaveAlreadyDecided, RecordNotFound)
from emp.models import Attendance, Department, Employee, LeaveRequest
from emp.utils import employee_display_name
from recruitment.models import JobVacancy
from .constants import (
    DASHBOARD_ACTIVITY_LIMIT, LEAVE_TRANSITIONS, PAYROLL_MIN_YEAR, PAYROLL_TRANSITIONS)
from .models import Payroll

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")


def month_window(year, month):
    """
    Inclusive (start, end) of a calendar month as aware local datetimes:
    the 1st at 00:00:00 through the last day at 23:59:59.999999.
    """
    if not 1 <= month <= 12:
        raise InvalidRange("month must be between 1 and 12.")
    last_day = calendar.monthrange(year, month)[1]
    start = timezone.make_aware(datetime(year, month, 1))
    end = timezone.make_aware(
        datetime.combine(date(year, month, last_day), time.max))
    return start, end


def _money(value):
    return value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)


def salary_breakdown(basic_salary):
    """
    Returns (allowances, deductions, net_salary) for a basic salary.
    All values are Decimals with two places.
    """
    basic = _money(Decimal(basic_salary))
    allowances = _money(basic * Decimal(settings.PAYROLL_ALLOWANCE_RATE))
    deductions = _money(basic * Decimal(settings.PAYROLL_DEDUCTION_RATE))
    net_salary = basic + allowances - deductions
    return allowances, deductions, net_salary


class PayrollService:

    @staticmethod
    def count_present_days(employee, year, month):
        start, end = month_window(year, month)
        return Attendance.objects.filter(
            employee=employee,
            date__gte=timezone.localdate(start),
            date__lte=timezone.localdate(end),
            status='present'
        ).count()

    @staticmethod
    def generate(employee_id, month, year, generated_by=None):
        if not 1 <= month <= 12:
            raise InvalidRange("month must be between 1 and 12.")
        if year < PAYROLL_MIN_YEAR:
            raise InvalidRange(f"year must be {PAYROLL_MIN_YEAR} or later.")

        try:
            employee = Employee.objects.get(pk=employee_id)
        except Employee.DoesNotExist:
            raise EmployeeNotFound("Employee not found.")

        working_days = PayrollService.count_present_days(employee, year, month)
        basic_salary = _money(employee.salary)
        allowances, deductions, net_salary = salary_breakdown(basic_salary)

        try:
            with transaction.atomic():
                payroll = Payroll.objects.create(
                    employee=employee,
                    month=month,
                    year=year,
                    basic_salary=basic_salary,
                    allowances=allowances,
                    deductions=deductions,
                    net_salary=net_salary,
                    working_days=working_days,
                    status=Payroll.STATUS_PENDING,
                    generated_by=generated_by,
                )
        except IntegrityError:
            logger.info("Duplicate payroll rejected: employee=%s period=%s/%s",
                        employee.employee_code, month, year)
            raise DuplicatePayroll(
                f"Payroll for {employee_display_name(employee)} for {month}/{year} "
                "already exists. Please check the payroll list or delete the "
                "existing record first."
            )

        logger.info("Payroll generated: employee=%s period=%s/%s net=%s days=%s",
                    employee.employee_code, month, year, net_salary, working_days)
        return payroll

    @staticmethod
    @transaction.atomic
    def mark_paid(payroll_id, now=None):
        payroll = Payroll.objects.select_for_update().filter(pk=payroll_id).first()
        if payroll is None:
            raise RecordNotFound("Payroll record not found.")

        if Payroll.STATUS_PAID not in PAYROLL_TRANSITIONS[payroll.status]:
            raise AlreadyPaid()

        payroll.status = Payroll.STATUS_PAID
        payroll.paid_date = now or timezone.now()
        payroll.save(update_fields=["status", "paid_date", "updated_at"])

        logger.info("Payroll %s marked paid", payroll.pk)
        return payroll


class LeaveDecisionService:

    @staticmethod
    @transaction.atomic
    def decide(leave_id, approve, decided_by, comments=None, now=None):
        """
        Moves a pending leave request to approved or rejected. A decided
        request cannot be decided again.
        """
        leave = (LeaveRequest.objects.select_for_update()
                 .filter(pk=leave_id).first())
        if leave is None:
            raise RecordNotFound("Leave request not found.")

        target = (LeaveRequest.STATUS_APPROVED if approve
                  else LeaveRequest.STATUS_REJECTED)
        if target not in LEAVE_TRANSITIONS[leave.status]:
            raise LeaveAlreadyDecided(
                f"Leave request is already {leave.status}.")

        leave.status = target
        leave.approved_by = decided_by
        leave.approved_date = now or timezone.now()
        leave.comments = comments
        leave.save(update_fields=["status", "approved_by", "approved_date",
                                  "comments", "updated_at"])

        logger.info("Leave %s %s by user=%s", leave.pk, target,
                    getattr(decided_by, "id", None))
        return leave


class DashboardService:
    """Headline counts and a short activity feed, scoped by role."""

    @staticmethod
    def stats_for(user, today=None):
        employee = getattr(user, "employee", None)

        if not user.is_hr_or_admin:
            if employee is None:
                return {"employees": 0, "departments": 0,
                        "pending_leaves": 0, "recruitments": 0}
            leaves = LeaveRequest.objects.filter(employee=employee)
            return {
                "my_pending_leaves": leaves.filter(
                    status=LeaveRequest.STATUS_PENDING).count(),
                "my_total_leaves": leaves.count(),
                "my_payroll": Payroll.objects.filter(employee=employee).count(),
            }

        today = today or timezone.localdate()
        stats = {
            "total_employees": Employee.objects.filter(status="active").count(),
            "total_departments": Department.objects.filter(status="active").count(),
            "pending_leaves": LeaveRequest.objects.filter(
                status=LeaveRequest.STATUS_PENDING).count(),
            "today_attendance": Attendance.objects.filter(
                date=today, status="present").count(),
        }
        if user.role == user.SYSTEM_ADMIN:
            stats["active_recruitments"] = JobVacancy.objects.filter(
                status=JobVacancy.STATUS_OPEN).count()
            stats["total_users"] = get_user_model().objects.count()
        return stats

    @staticmethod
    def recent_activity(user, limit=DASHBOARD_ACTIVITY_LIMIT):
        activities = []

        if not user.is_hr_or_admin:
            employee = getattr(user, "employee", None)
            if employee is not None:
                leaves = (LeaveRequest.objects.filter(employee=employee)
                          .select_related("leave_type")[:limit])
                for leave in leaves:
                    activities.append({
                        "type": "leave",
                        "title": f"Leave Request {leave.status}",
                        "description": (f"{leave.leave_type.name} - "
                                        f"{leave.start_date} to {leave.end_date}"),
                        "time": leave.applied_date,
                    })
        else:
            for emp in Employee.objects.select_related("department").order_by("-created_at")[:2]:
                activities.append({
                    "type": "employee",
                    "title": "New Employee Added",
                    "description": f"{emp.full_name()} joined {emp.department.name}",
                    "time": emp.created_at,
                })
            approved = (LeaveRequest.objects
                        .filter(status=LeaveRequest.STATUS_APPROVED)
                        .select_related("employee")
                        .order_by("-approved_date")[:2])
            for leave in approved:
                activities.append({
                    "type": "leave",
                    "title": "Leave Approved",
                    "description": (f"{employee_display_name(leave.employee)}'s "
                                    "leave request approved"),
                    "time": leave.approved_date or leave.applied_date,
                })
            for job in JobVacancy.objects.order_by("-posted_date")[:1]:
                activities.append({
                    "type": "job",
                    "title": "New Job Posted",
                    "description": f"{job.title} position opened",
                    "time": job.posted_date,
                })

        activities.sort(key=lambda a: a["time"], reverse=True)
        return activities[:limit]
