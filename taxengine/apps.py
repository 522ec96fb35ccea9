from django.apps import AppConfig


class TaxEngineConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'taxengine'
    verbose_name = 'Tax Engine'
