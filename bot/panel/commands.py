import logging
from typing import Optional

from django.conf import settings
from telegram import Message, ReplyParameters, Update
from telegram.error import TelegramError
from telegram.ext import ContextTypes, filters

from bot.markup import make_panel_keyboard
from bot.utils import get_panel_codec, is_bot_message, try_delete
from bot.wrapper import command
from reactions import Reaction, empty_panel, press

logger = logging.getLogger(__name__)


def check_target(bot, msg: Message) -> Optional[Message]:
    """Return message the panel should be attached to."""
    target = msg.reply_to_message
    if not target:
        logger.debug(f"command {msg.chat_id}/{msg.message_id} is not a reply")
        return
    if settings.PANEL_REPLY_TO_BOT_ONLY and not is_bot_message(bot, target):
        logger.debug(f"message {target.chat_id}/{target.message_id} doesn't belong to the bot")
        return
    return target


async def send_panel(bot, msg: Message, target: Message, reaction: Reaction = None):
    row = empty_panel()
    if reaction and msg.from_user:
        row, _ = press(
            row,
            reaction,
            msg.from_user.id,
            exclusive=settings.PANEL_EXCLUSIVE_REACTIONS,
        )
    try:
        await bot.send_message(
            chat_id=target.chat_id,
            text=settings.PANEL_TEXT,
            reply_parameters=ReplyParameters(message_id=target.message_id),
            reply_markup=make_panel_keyboard(row, get_panel_codec()),
            disable_notification=True,
        )
    except TelegramError as e:
        logger.warning(f"😡 can't send panel for {target.chat_id}/{target.message_id}: {e}")


async def create_panel(update: Update, context: ContextTypes.DEFAULT_TYPE, reaction=None):
    msg = update.effective_message
    try:
        target = check_target(context.bot, msg)
        if target:
            await send_panel(context.bot, msg, target, reaction)
    finally:
        await try_delete(context.bot, msg)


@command(('r', 'react'), filters=filters.UpdateType.MESSAGE)
async def command_react(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Add reactions panel to the message."""
    await create_panel(update, context)


@command('heart', filters=filters.UpdateType.MESSAGE)
async def command_heart(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Add reactions panel and react with ❤️."""
    await create_panel(update, context, Reaction.heart)


@command('up', filters=filters.UpdateType.MESSAGE)
async def command_up(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Add reactions panel and react with 👍."""
    await create_panel(update, context, Reaction.approve)


@command('down', filters=filters.UpdateType.MESSAGE)
async def command_down(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Add reactions panel and react with 👎."""
    await create_panel(update, context, Reaction.disapprove)
