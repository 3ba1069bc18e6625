from django.apps import AppConfig


class PathwayAttemptsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.pathway_attempts"
    verbose_name = "Pathway Quiz Attempts"
