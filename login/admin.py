from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import User


@admin.register(User)
class HRMSUserAdmin(UserAdmin):
    list_display = ("email", "username", "role", "is_active")
    list_filter = ("role", "is_active")
    search_fields = ("email", "username", "first_name", "last_name")
    ordering = ("email",)
    fieldsets = UserAdmin.fieldsets + (("Role", {"fields": ("role",)}),)
