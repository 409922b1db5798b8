from django.contrib import admin

from .models import Message


@admin.register(Message)
class MessageAdmin(admin.ModelAdmin):
    list_display = ["subject", "sender", "receiver", "is_read", "created"]
    list_filter = ["is_read", "deleted_by_sender", "deleted_by_receiver", "created"]
    search_fields = ["subject", "content", "sender__email", "receiver__email"]
    raw_id_fields = ["sender", "receiver", "parent"]
    readonly_fields = ["read_at", "created", "modified"]
