import logging

from django.conf import settings
from telegram import Bot, CallbackQuery, Message
from telegram.error import TelegramError

from reactions import ReactionCodec, get_codec

logger = logging.getLogger(__name__)


def get_panel_codec() -> ReactionCodec:
    return get_codec(settings.PANEL_PAYLOAD_FORMAT)


def is_bot_message(bot: Bot, msg: Message):
    return bool(msg.from_user and msg.from_user.id == bot.id)


async def try_delete(bot: Bot, msg: Message):
    try:
        await bot.delete_message(chat_id=msg.chat_id, message_id=msg.message_id)
    except TelegramError as e:
        # usually bot is not an admin of the chat
        logger.warning(f"can't delete message {msg.chat_id}/{msg.message_id}: {e}")


async def try_answer(bot: Bot, query: CallbackQuery, **kwargs):
    try:
        await bot.answer_callback_query(query.id, **kwargs)
    except TelegramError as e:
        # query is too old
        logger.warning(f"can't answer callback query {query.id}: {e}")
