from django.contrib import admin
from django.utils.html import format_html

from .models import ReminderEvent


@admin.register(ReminderEvent)
class ReminderEventAdmin(admin.ModelAdmin):
    """
    Read-only view of the reminder ledger.
    Rows are written once by the reminder engine and never edited.
    """

    # =====================================================
    # LIST VIEW
    # =====================================================
    list_display = (
        "dedupe_key",
        "colored_type",
        "user",
        "activity",
        "digest_date",
        "sent_at",
    )

    list_filter = (
        "reminder_type",
        "sent_at",
        "organization",
    )

    search_fields = (
        "dedupe_key",
        "user__email",
        "user__full_name",
        "activity__title",
    )

    ordering = ("-sent_at",)
    list_per_page = 50
    list_select_related = ("user", "activity")

    # =====================================================
    # CUSTOM DISPLAY HELPERS
    # =====================================================
    def colored_type(self, obj):
        color_map = {
            ReminderEvent.ReminderType.PRE_START.value: "#2563eb",     # blue
            ReminderEvent.ReminderType.OVERDUE.value: "#dc2626",       # red
            ReminderEvent.ReminderType.DAILY_DIGEST.value: "#16a34a",  # green
        }

        color = color_map.get(obj.reminder_type, "#000000")

        return format_html(
            '<span style="color:{}; font-weight:600;">{}</span>',
            color,
            obj.get_reminder_type_display(),
        )

    colored_type.short_description = "Type"

    # =====================================================
    # WRITE-ONCE LEDGER: NO MANUAL EDITS
    # =====================================================
    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
