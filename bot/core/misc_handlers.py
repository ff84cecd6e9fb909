import logging

from telegram.ext import ContextTypes

logger = logging.getLogger(__name__)


async def handle_error(update: object, context: ContextTypes.DEFAULT_TYPE):
    logger.error(f"📑\n{update}")
    logger.error("🔥 update caused error", exc_info=context.error)
