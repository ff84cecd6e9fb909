import logging

from django.conf import settings
from django.core.management import BaseCommand, CommandError

from bot.dispatcher import run

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = 'Start bot.'

    def handle(self, *args, **options):
        if not settings.TG_BOT_TOKEN:
            logger.error("Must supply TG_BOT_TOKEN environment variable with bot token inside.")
            raise CommandError("TG_BOT_TOKEN is not set.", returncode=1)
        run()
