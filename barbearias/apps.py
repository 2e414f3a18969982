from django.apps import AppConfig


class BarbeariasConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'barbearias'
    verbose_name = 'Barbeiros'
