# emp/admin.py
from django.contrib import admin
from . import models


@admin.register(models.Department)
class DepartmentAdmin(admin.ModelAdmin):
    list_display = ('name', 'status', 'created_at')
    list_filter = ('status',)
    search_fields = ('name',)


@admin.register(models.Employee)
class EmployeeAdmin(admin.ModelAdmin):
    list_display = ('employee_code', 'full_name', 'email',
                    'department', 'position', 'status')
    list_filter = ('status', 'department')
    search_fields = ('employee_code', 'first_name', 'last_name', 'email')


@admin.register(models.Attendance)
class AttendanceAdmin(admin.ModelAdmin):
    list_display = ('employee', 'date', 'check_in',
                    'check_out', 'hours_worked', 'status')
    list_filter = ('status', 'date')


@admin.register(models.LeaveType)
class LeaveTypeAdmin(admin.ModelAdmin):
    list_display = ('name', 'days')
    search_fields = ('name',)


@admin.register(models.LeaveRequest)
class LeaveRequestAdmin(admin.ModelAdmin):
    list_display = ('employee', 'leave_type', 'start_date',
                    'end_date', 'days', 'status', 'approved_by')
    list_filter = ('status', 'leave_type')
