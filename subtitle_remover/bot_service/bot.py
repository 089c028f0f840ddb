"""Entrypoint for the subtitle remover Telegram bot."""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress

from aiogram import Bot, Dispatcher, Router

from subtitle_remover.api import GeminiClient
from subtitle_remover.bot_service.context import BotContext
from subtitle_remover.bot_service.handlers import setup_handlers
from subtitle_remover.config.settings import get_settings
from subtitle_remover.logic import SubtitleRemover
from subtitle_remover.monitoring.logging import configure_logging
from subtitle_remover.workflow import SessionStore

logger = logging.getLogger(__name__)


async def main() -> None:
    """Initialise dependencies and start polling Telegram."""

    configure_logging()

    settings = get_settings()
    if not settings.telegram_bot_token:
        raise RuntimeError("TELEGRAM_BOT_TOKEN is not configured.")
    if not settings.gemini_api_key:
        raise RuntimeError("GEMINI_API_KEY is not configured.")

    client = GeminiClient(settings)
    context = BotContext(sessions=SessionStore(), remover=SubtitleRemover(client))

    bot = Bot(token=settings.telegram_bot_token)
    dispatcher = Dispatcher()
    router = Router()
    setup_handlers(router, context)
    dispatcher.include_router(router)

    try:
        logger.info("Starting subtitle remover bot polling (model %s).", settings.gemini_image_model)
        await dispatcher.start_polling(bot)
    finally:
        with suppress(Exception):
            await bot.session.close()
        with suppress(Exception):
            await client.close()


if __name__ == "__main__":
    asyncio.run(main())
