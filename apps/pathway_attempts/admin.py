from django.contrib import admin
from .models import QuizAttempt, AttemptAnswer

class AttemptAnswerInline(admin.TabularInline):
    model = AttemptAnswer
    extra = 0
    can_delete = False
    fields = ("question", "selected_options", "updated_at")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False

@admin.register(QuizAttempt)
class QuizAttemptAdmin(admin.ModelAdmin):
    list_display = ("id", "quiz", "language", "started_at", "is_submitted", "score", "total_questions")
    list_filter = ("is_submitted", "language")
    search_fields = ("token",)
    readonly_fields = (
        "id", "quiz", "token", "language", "started_at", "total_questions",
        "is_submitted", "submitted_at", "score",
    )
    inlines = [AttemptAnswerInline]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
