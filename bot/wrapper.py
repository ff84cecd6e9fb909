import functools
import logging

from telegram.ext import CallbackQueryHandler, CommandHandler


class HandlerWrapper:
    def __init__(self, func, handler_class, use_async=False, *args, **kwargs):
        @functools.wraps(func)
        async def callback(update, context):
            logger = logging.getLogger(func.__module__)
            logger.debug(f"☎️  CALLING: {func.__name__:30s}")
            logger.debug(f"📑\n{update}")
            return await func(update, context)

        self.callback = callback
        self.handler_class = handler_class
        self.args = args
        self.handler = handler_class(*args, callback=callback, block=not use_async, **kwargs)
        self.__doc__ = func.__doc__

    @property
    def name(self):
        return self.callback.__name__

    @property
    def module(self):
        return self.callback.__module__

    @property
    def commands(self):
        if self.handler_class is not CommandHandler:
            return []
        names = self.args[0] if self.args else self.handler.commands
        if isinstance(names, str):
            names = [names]
        return list(names)

    def __call__(self, *args, **kwargs):
        return self.callback(*args, **kwargs)


def handler_decorator_factory(handler_class, use_async=False):
    def handler_decorator(*args, use_async=use_async, **kwargs):
        def decorator(func):
            return HandlerWrapper(func, handler_class, use_async, *args, **kwargs)

        return decorator

    return handler_decorator


command = handler_decorator_factory(CommandHandler)
callback_query_handler = handler_decorator_factory(CallbackQueryHandler, use_async=True)
