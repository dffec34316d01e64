from django.contrib import admin
from .models import Notification, NotificationRecipient


class NotificationRecipientInline(admin.TabularInline):
    model = NotificationRecipient
    extra = 0
    raw_id_fields = ("user",)


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("id", "type", "message", "for_role", "related_order", "created_at")
    list_filter = ("type", "for_role")
    search_fields = ("message",)
    date_hierarchy = "created_at"
    inlines = [NotificationRecipientInline]
