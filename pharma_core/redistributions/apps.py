from django.apps import AppConfig


class RedistributionsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "pharma_core.redistributions"
