# emp/exceptions.py
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler


class HRMSError(APIException):
    """Base for attendance and payroll rule violations."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotCheckedIn(HRMSError):
    default_detail = "Please check in first."
    default_code = "not_checked_in"


class AlreadyCheckedIn(HRMSError):
    default_detail = "Already checked in today."
    default_code = "already_checked_in"


class AlreadyCheckedOut(HRMSError):
    default_detail = "Already checked out today."
    default_code = "already_checked_out"


class AlreadyPaid(HRMSError):
    default_detail = "Payroll record is already paid."
    default_code = "already_paid"


class InvalidRange(HRMSError):
    default_detail = "End must not be before start."
    default_code = "invalid_range"


class LeaveOverlap(HRMSError):
    default_detail = "You already have a leave request that overlaps these dates."
    default_code = "leave_overlap"


class LeaveAlreadyDecided(HRMSError):
    default_detail = "Leave request has already been decided."
    default_code = "leave_already_decided"


class VacancyClosed(HRMSError):
    default_detail = "This job vacancy is no longer accepting applications."
    default_code = "vacancy_closed"


class DuplicateApplication(HRMSError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "You have already applied for this position."
    default_code = "duplicate_application"


class DuplicatePayroll(HRMSError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Payroll for this period already exists."
    default_code = "duplicate_payroll"


class EmployeeNotFound(HRMSError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Employee record not found."
    default_code = "employee_not_found"


class RecordNotFound(HRMSError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Record not found."
    default_code = "record_not_found"


def api_exception_handler(exc, context):
    """DRF's handler, plus a stable `code` on domain errors."""
    response = exception_handler(exc, context)
    if response is not None and isinstance(exc, HRMSError):
        response.data["code"] = exc.get_codes()
    return response
