# hr/constants.py

PAYROLL_MIN_YEAR = 2000

# Payroll.status transitions; pending -> paid is one-way
PAYROLL_TRANSITIONS = {
    "pending": ("paid",),
    "paid": (),
}

# LeaveRequest.status transitions; HR decides a pending request once
LEAVE_TRANSITIONS = {
    "pending": ("approved", "rejected"),
    "approved": (),
    "rejected": (),
}

DASHBOARD_ACTIVITY_LIMIT = 3
