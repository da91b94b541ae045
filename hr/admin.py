from django.contrib import admin
from .models import Payroll


@admin.register(Payroll)
class PayrollAdmin(admin.ModelAdmin):
    list_display = (
        "employee",
        "year",
        "month",
        "basic_salary",
        "net_salary",
        "working_days",
        "status",
    )
    list_filter = ("year", "month", "status")
    readonly_fields = ("paid_date", "generated_by", "created_at")
