from datetime import date
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.contrib.auth import get_user_model
from django.db import transaction

from emp.models import Department, Employee, LeaveType

User = get_user_model()

DEPARTMENTS = [
    ("IT Department", "Information Technology"),
    ("HR Department", "Human Resources"),
    ("Finance Department", "Finance & Accounting"),
    ("Marketing Department", "Marketing & Sales"),
    ("Operations Department", "Operations"),
]

LEAVE_TYPES = [
    ("Annual Leave", 20, "Annual vacation leave"),
    ("Sick Leave", 10, "Medical leave"),
    ("Personal Leave", 5, "Personal time off"),
    ("Maternity Leave", 90, "Maternity leave"),
    ("Paternity Leave", 14, "Paternity leave"),
    ("Emergency Leave", 3, "Emergency situations"),
    ("Study Leave", 10, "Educational purposes"),
]

# (email, role, code, first, last, department, position, salary, hire_date)
USERS = [
    ("employee@hrms.local", "employee", "EMP001", "John", "Doe",
     "IT Department", "Software Developer", "5000", date(2023, 1, 15)),
    ("hr@hrms.local", "hr_manager", "HR001", "Jane", "Smith",
     "HR Department", "HR Manager", "6000", date(2022, 6, 1)),
    ("admin@hrms.local", "system_admin", "ADM001", "Admin", "User",
     "IT Department", "System Administrator", "7000", date(2022, 1, 1)),
]


class Command(BaseCommand):
    help = "Seed sample departments, leave types and one user per role"

    def add_arguments(self, parser):
        parser.add_argument(
            "--password", default="testpassword",
            help="Password set on newly created seed users")

    @transaction.atomic
    def handle(self, *args, **options):
        departments = {}
        for name, description in DEPARTMENTS:
            dept, created = Department.objects.get_or_create(
                name=name, defaults={"description": description})
            departments[name] = dept
            if created:
                self.stdout.write(f"Created department {name}")

        for name, days, description in LEAVE_TYPES:
            LeaveType.objects.get_or_create(
                name=name, defaults={"days": days, "description": description})

        for (email, role, code, first, last, dept_name,
             position, salary, hire_date) in USERS:
            user, created = User.objects.get_or_create(
                email=email,
                defaults={
                    "username": email,
                    "first_name": first,
                    "last_name": last,
                    "role": role,
                    "is_staff": role == "system_admin",
                    "is_superuser": role == "system_admin",
                },
            )
            if created:
                user.set_password(options["password"])
                user.save(update_fields=["password"])

            Employee.objects.get_or_create(
                email=email,
                defaults={
                    "user": user,
                    "employee_code": code,
                    "first_name": first,
                    "last_name": last,
                    "department": departments[dept_name],
                    "position": position,
                    "salary": Decimal(salary),
                    "hire_date": hire_date,
                },
            )
            self.stdout.write(f"{'Created' if created else 'Kept'} {role} {email}")

        self.stdout.write(self.style.SUCCESS("Seed data ready"))
