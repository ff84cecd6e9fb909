import logging

from django.conf import settings
from telegram import Bot, CallbackQuery, Update
from telegram.error import TelegramError
from telegram.ext import ContextTypes

from bot.markup import make_panel_keyboard, read_panel
from bot.utils import get_panel_codec, try_answer
from bot.wrapper import callback_query_handler
from reactions import press

logger = logging.getLogger(__name__)

REMOVED_MARK = '❎'


async def update_panel(bot: Bot, query: CallbackQuery) -> dict:
    """Apply the press to the panel. Return kwargs for the query answer."""
    codec = get_panel_codec()
    msg = query.message
    info = f"user={query.from_user.id} data={query.data!r}"

    pressed = codec.decode(query.data)
    if pressed is None:
        logger.warning(f"can't decode pressed button: {info}")
        return {}

    markup = getattr(msg, 'reply_markup', None)
    if markup is None:
        logger.warning(f"panel message is not available: {info}")
        return {
            'text': "Something's wrong with that message. Try this on another message.",
            'show_alert': True,
        }
    info = f"{info} message={msg.chat_id}/{msg.message_id}"

    row = read_panel(markup, codec)
    if row is None:
        logger.warning(f"can't decode panel: {info}")
        return {}

    row, added = press(
        row,
        pressed.reaction,
        query.from_user.id,
        exclusive=settings.PANEL_EXCLUSIVE_REACTIONS,
    )
    reply_markup = make_panel_keyboard(row, codec)
    if reply_markup is None:
        logger.info(f"panel is full: {info}")
        return {'text': "Too many reactions on this panel."}

    await bot.edit_message_reply_markup(
        chat_id=msg.chat_id,
        message_id=msg.message_id,
        reply_markup=reply_markup,
    )
    return {'text': pressed.reaction.emoji if added else REMOVED_MARK}


@callback_query_handler()
async def handle_button_callback(update: Update, context: ContextTypes.DEFAULT_TYPE):
    query = update.callback_query
    answer = {}
    try:
        answer = await update_panel(context.bot, query)
    except TelegramError as e:
        logger.warning(f"😡 can't update panel: {e}\n   {query}")
    finally:
        await try_answer(context.bot, query, **answer)
