from django.contrib.auth.models import AbstractUser
from django.db import models


class User(AbstractUser):
    EMPLOYEE = 'employee'
    HR_MANAGER = 'hr_manager'
    SYSTEM_ADMIN = 'system_admin'

    ROLE_CHOICES = [
        (EMPLOYEE, 'Employee'),
        (HR_MANAGER, 'HR Manager'),
        (SYSTEM_ADMIN, 'System Admin'),
    ]

    email = models.EmailField(unique=True)
    role = models.CharField(
        max_length=20, choices=ROLE_CHOICES, default=EMPLOYEE)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username']

    @property
    def is_hr_or_admin(self):
        return self.role in (self.HR_MANAGER, self.SYSTEM_ADMIN)

    def __str__(self):
        return f"{self.email} - {self.role}"
