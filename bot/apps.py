from django.apps import AppConfig
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured


class BotConfig(AppConfig):
    name = 'bot'
    verbose_name = 'Reactions Bot'

    def ready(self):
        from reactions import get_codec
        try:
            get_codec(settings.PANEL_PAYLOAD_FORMAT)
        except ValueError as e:
            raise ImproperlyConfigured(str(e)) from e
