from django.apps import AppConfig


class FilaConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'fila'
    verbose_name = 'Fila'

    def ready(self):
        from django.conf import settings
        from . import signals  # noqa
        from .notifications import build_notifier

        self.notifier = build_notifier(settings)
