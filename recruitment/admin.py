from django.contrib import admin

from .models import Applicant, JobVacancy


@admin.register(JobVacancy)
class JobVacancyAdmin(admin.ModelAdmin):
    list_display = ('title', 'department', 'status', 'closing_date', 'posted_date')
    list_filter = ('status', 'department')
    search_fields = ('title',)


@admin.register(Applicant)
class ApplicantAdmin(admin.ModelAdmin):
    list_display = ('full_name', 'email', 'job', 'status', 'applied_date')
    list_filter = ('status',)
    search_fields = ('first_name', 'last_name', 'email')
