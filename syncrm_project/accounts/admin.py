from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin

from .models import Organization, User


# ============================================================
# USER ADMIN
# ============================================================

@admin.register(User)
class UserAdmin(BaseUserAdmin):
    ordering = ("username",)

    list_display = (
        "username",
        "email",
        "full_name",
        "organization",
        "timezone",
        "role",
        "is_active",
    )

    list_filter = (
        "role",
        "is_active",
        "organization",
    )

    search_fields = (
        "username",
        "email",
        "full_name",
        "name",
    )

    fieldsets = BaseUserAdmin.fieldsets + (
        ("CRM Profile", {
            "fields": (
                "full_name",
                "name",
                "timezone",
                "role",
                "organization",
            )
        }),
    )


# ============================================================
# ORGANIZATIONS
# ============================================================

@admin.register(Organization)
class OrganizationAdmin(admin.ModelAdmin):
    list_display = ("name", "created_at")
    search_fields = ("name",)
    ordering = ("name",)
