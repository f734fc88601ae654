from django.apps import AppConfig


class ColorgameConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "colorgame"
    verbose_name = "Live colour game"
