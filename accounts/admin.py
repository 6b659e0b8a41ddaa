from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import Organization, User


# ───────────────────────────────
#  Organization
# ───────────────────────────────
@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = ("name", "created_at")
    search_fields = ("name",)


# ───────────────────────────────
#  User
# ───────────────────────────────
@admin.register(User)
class UserAdmin(BaseUserAdmin):
    list_display = ("username", "email", "name", "organization", "department", "position_level", "role", "status")
    list_filter = ("role", "position_level", "status", "organization")
    search_fields = ("username", "email", "name", "department")
    autocomplete_fields = ["organization", "manager"]
    ordering = ("-date_joined",)
    fieldsets = (
        (None, {"fields": ("username", "email", "password")}),
        ("Personal info", {"fields": ("name", "phone", "title", "preferred_language")}),
        ("Organization", {"fields": ("organization", "department", "manager", "position_level", "status")}),
        ("Permissions", {"fields": ("is_active", "is_staff", "is_superuser", "role", "groups", "user_permissions")}),
        ("Dates", {"fields": ("last_login", "date_joined")}),
    )
