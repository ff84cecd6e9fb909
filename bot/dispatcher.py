import logging
from typing import List

from django.conf import settings
from telegram import Update
from telegram.ext import Application, CallbackQueryHandler, CommandHandler

from . import core, panel
from .core import handle_error
from .wrapper import HandlerWrapper

logger = logging.getLogger(__name__)


def extract_handlers(module):
    res = []
    for key, value in vars(module).items():
        if isinstance(value, HandlerWrapper):
            res.append(value)
    return res


def inspect_handlers(handlers: List[HandlerWrapper]):
    text = 'Handlers:\n'
    text += '\n'.join([
        f"  > {i + 1:2d}. {handler.module:40s} > {handler.name}"
        for i, handler in enumerate(handlers)
    ])
    logger.debug(text)


def sort_by_type(handlers: List[HandlerWrapper]):
    """
    0 commands
    1 query callback handlers
    """
    priority = dict(
        map(
            lambda e: (e[1], e[0]),
            enumerate([
                CommandHandler,
                CallbackQueryHandler,
            ])
        )
    )
    handlers.sort(key=lambda h: priority[h.handler_class])


def setup_application(application: Application, inspect=True):
    handlers = []
    for module in [core, panel]:
        handlers.extend(extract_handlers(module))

    sort_by_type(handlers)
    for wrapper in handlers:
        application.add_handler(wrapper.handler)
    application.add_error_handler(handle_error)
    if inspect:
        inspect_handlers(handlers)


def build_application() -> Application:
    application = Application.builder().token(settings.TG_BOT_TOKEN).build()
    setup_application(application)
    return application


def run():
    application = build_application()

    if settings.WEBHOOK_URL:
        logger.info('start webhook...')
        application.run_webhook(
            listen=settings.WEBHOOK_LISTEN,
            port=settings.WEBHOOK_PORT,
            url_path=settings.WEBHOOK_PATH,
            webhook_url=settings.WEBHOOK_URL,
            secret_token=settings.WEBHOOK_SECRET,
            allowed_updates=[Update.MESSAGE, Update.CALLBACK_QUERY],
        )
    else:
        logger.info('start polling...')
        application.run_polling(allowed_updates=[Update.MESSAGE, Update.CALLBACK_QUERY])
    logger.info('bye')
