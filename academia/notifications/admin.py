from django.contrib import admin

from .models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ["title", "user", "type", "is_read", "created"]
    list_filter = ["type", "is_read", "created"]
    search_fields = ["title", "message", "user__email"]
    readonly_fields = ["created", "modified"]
    raw_id_fields = ["user"]
