from django.apps import AppConfig


class RepetitionConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "repetition"
    verbose_name = "Spaced repetition"
