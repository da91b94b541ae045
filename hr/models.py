# hr/models.py
from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models

from .constants import PAYROLL_MIN_YEAR


class Payroll(models.Model):
    STATUS_PENDING = 'pending'
    STATUS_PAID = 'paid'

    STATUS_CHOICES = [
        (STATUS_PENDING, 'Pending'),
        (STATUS_PAID, 'Paid'),
    ]

    employee = models.ForeignKey(
        "emp.Employee",
        on_delete=models.CASCADE,
        related_name="payrolls"
    )

    month = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(1), MaxValueValidator(12)])
    year = models.PositiveIntegerField(
        validators=[MinValueValidator(PAYROLL_MIN_YEAR)])

    basic_salary = models.DecimalField(max_digits=12, decimal_places=2)
    allowances = models.DecimalField(
        max_digits=12, decimal_places=2, default=0.00
    )
    deductions = models.DecimalField(
        max_digits=12, decimal_places=2, default=0.00
    )
    net_salary = models.DecimalField(max_digits=12, decimal_places=2)

    working_days = models.PositiveIntegerField(default=0)

    status = models.CharField(
        max_length=20, choices=STATUS_CHOICES, default=STATUS_PENDING)
    paid_date = models.DateTimeField(null=True, blank=True)

    generated_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="generated_payrolls"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["employee", "month", "year"],
                name="unique_payroll_per_employee_period"),
        ]
        ordering = ["-year", "-month"]

    @property
    def is_paid(self):
        return self.status == self.STATUS_PAID

    def __str__(self):
        return f"Payroll: {self.employee.employee_code} - {self.month}/{self.year}"
