from django.apps import AppConfig


class PathwayCommonConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.pathway_common"
    verbose_name = "Pathway Common"
