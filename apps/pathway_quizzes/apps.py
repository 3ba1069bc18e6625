from django.apps import AppConfig


class PathwayQuizzesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.pathway_quizzes"
    verbose_name = "Pathway Quizzes"
