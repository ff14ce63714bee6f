from django.contrib import admin

from .models import Lead, Activity


# ---------------------------------------------------------------------
# LEAD ADMIN
# ---------------------------------------------------------------------
@admin.register(Lead)
class LeadAdmin(admin.ModelAdmin):
    list_display = ("full_name", "phone", "owner", "organization", "created_at")
    list_filter = ("organization",)
    search_fields = ("full_name", "phone", "email")
    ordering = ("full_name",)


# ---------------------------------------------------------------------
# ACTIVITY ADMIN
# ---------------------------------------------------------------------
@admin.register(Activity)
class ActivityAdmin(admin.ModelAdmin):
    list_display = (
        "title",
        "type",
        "status",
        "scheduled_at",
        "assigned_to",
        "lead",
    )
    list_filter = ("type", "status", "organization")
    search_fields = ("title", "lead__full_name", "assigned_to__email")
    ordering = ("-scheduled_at",)
    list_select_related = ("assigned_to", "lead")
