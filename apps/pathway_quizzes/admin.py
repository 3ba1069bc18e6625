from django.contrib import admin
from .models import Quiz, Question, Option

class QuestionInline(admin.StackedInline):
    model = Question
    extra = 0
    show_change_link = True

class OptionInline(admin.TabularInline):
    model = Option
    extra = 0

@admin.register(Quiz)
class QuizAdmin(admin.ModelAdmin):
    list_display = ("id", "title", "token", "duration_minutes", "is_active")
    list_filter = ("is_active",)
    search_fields = ("title", "token")
    readonly_fields = ("token",)
    inlines = [QuestionInline]

@admin.register(Question)
class QuestionAdmin(admin.ModelAdmin):
    list_display = ("id", "quiz", "qtype", "order", "text")
    list_filter = ("qtype",)
    search_fields = ("text", "text_alt")
    inlines = [OptionInline]
