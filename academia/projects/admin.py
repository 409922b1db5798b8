from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import Project
from .models import ProjectFile


class ProjectFileInline(admin.TabularInline):
    model = ProjectFile
    extra = 0
    readonly_fields = ["file_name", "file_type", "file_size", "uploaded_by", "created"]
    fields = readonly_fields
    can_delete = False


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ["title", "student", "instructor", "advisor", "status", "submitted_at"]
    list_filter = ["status", "submitted_at"]
    search_fields = ["title", "student__email", "instructor__email", "advisor__email"]
    raw_id_fields = ["student", "instructor", "advisor", "assigned_by"]
    # Status only changes through the FSM transitions
    readonly_fields = ["status", "submitted_at", "approved_at", "rejected_at", "created", "modified"]
    inlines = [ProjectFileInline]
    fieldsets = (
        (None, {"fields": ("title", "description", "status")}),
        (_("People"), {"fields": ("student", "instructor")}),
        (_("Advisor"), {"fields": ("advisor", "assigned_by", "assigned_at")}),
        (_("Dates"), {"fields": ("submitted_at", "approved_at", "rejected_at", "created", "modified")}),
    )


@admin.register(ProjectFile)
class ProjectFileAdmin(admin.ModelAdmin):
    list_display = ["file_name", "project", "uploaded_by", "file_type", "file_size", "created"]
    list_filter = ["file_type", "created"]
    search_fields = ["file_name", "project__title", "uploaded_by__email"]
    readonly_fields = ["created", "modified", "file_size", "file_type"]
    raw_id_fields = ["project", "uploaded_by"]
