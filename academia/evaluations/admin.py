from django.contrib import admin

from .models import Evaluation


@admin.register(Evaluation)
class EvaluationAdmin(admin.ModelAdmin):
    list_display = ["project", "evaluation_type", "score", "status", "instructor", "created"]
    list_filter = ["evaluation_type", "status", "created"]
    search_fields = ["project__title", "student__email", "instructor__email"]
    raw_id_fields = ["project", "student", "instructor"]
    readonly_fields = ["student", "created", "modified"]
