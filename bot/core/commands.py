import logging

from telegram import Update
from telegram.ext import ContextTypes, filters

from bot.panel.commands import command_down, command_heart, command_react, command_up
from bot.wrapper import command
from .utils import get_commands_help, normalize_text

logger = logging.getLogger(__name__)


@command(('help', 'h'))
async def command_help(update: Update, _: ContextTypes.DEFAULT_TYPE):
    """Show list of commands."""
    text = '\n'.join([
        "This bot adds a reactions panel to any message you reply to.",
        '',
        *get_commands_help(command_help),
        '',
        "*Reply to a message with:*",
        *get_commands_help(command_react, command_heart, command_up, command_down),
    ])
    await update.effective_message.reply_markdown(text)


@command('start', filters=filters.ChatType.PRIVATE)
async def command_start(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Show how to use the bot."""
    text = """
    - add bot to the group
    - give it "delete messages" permission to keep the chat clean
    - reply to a message with /r
    - press buttons under the panel to react, press again to take the reaction back
    """
    await update.effective_message.reply_markdown(normalize_text(text))
    await command_help(update, context)
