from django.apps import AppConfig


class HistoricoConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'historico'
    verbose_name = 'Histórico'
