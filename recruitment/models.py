# recruitment/models.py
from django.conf import settings
from django.db import models


class JobVacancy(models.Model):
    STATUS_OPEN = 'open'
    STATUS_CLOSED = 'closed'
    STATUS_ON_HOLD = 'on_hold'

    STATUS_CHOICES = [
        (STATUS_OPEN, 'Open'),
        (STATUS_CLOSED, 'Closed'),
        (STATUS_ON_HOLD, 'On Hold'),
    ]

    title = models.CharField(max_length=200)
    department = models.ForeignKey(
        "emp.Department", on_delete=models.PROTECT, related_name="vacancies")
    description = models.TextField(null=True, blank=True)
    requirements = models.TextField(null=True, blank=True)
    salary_range = models.CharField(max_length=100, null=True, blank=True)
    status = models.CharField(
        max_length=20, choices=STATUS_CHOICES, default=STATUS_OPEN)
    closing_date = models.DateField(null=True, blank=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL, null=True, blank=True,
        on_delete=models.SET_NULL, related_name="posted_vacancies")
    posted_date = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-posted_date"]
        verbose_name_plural = "job vacancies"

    def __str__(self):
        return f"{self.title} ({self.status})"


class Applicant(models.Model):
    STATUS_CHOICES = [
        ('pending', 'Pending'),
        ('shortlisted', 'Shortlisted'),
        ('rejected', 'Rejected'),
        ('hired', 'Hired'),
    ]

    job = models.ForeignKey(
        JobVacancy, on_delete=models.CASCADE, related_name="applicants")
    first_name = models.CharField(max_length=80)
    last_name = models.CharField(max_length=80)
    email = models.EmailField()
    phone = models.CharField(max_length=20, null=True, blank=True)
    resume = models.TextField(null=True, blank=True)
    cover_letter = models.TextField(null=True, blank=True)

    status = models.CharField(
        max_length=20, choices=STATUS_CHOICES, default='pending')
    notes = models.TextField(null=True, blank=True)
    interview_date = models.DateTimeField(null=True, blank=True)

    applied_date = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        constraints = [
            models.UniqueConstraint(
                fields=["job", "email"], name="unique_application_per_job"),
        ]
        ordering = ["-applied_date"]

    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def __str__(self):
        return f"{self.full_name()} -> {self.job.title}"
