"""Start command handler."""

from __future__ import annotations

from aiogram import Router
from aiogram.filters import CommandStart
from aiogram.types import Message, ReplyKeyboardRemove

from subtitle_remover.bot_service.context import BotContext
from subtitle_remover.workflow import Reset

GREETING = (
    "AI Subtitle Remover\n"
    "Send me an image (PNG, JPG, etc.) as a photo or a file and I will erase the subtitles and "
    "other text from it.\n\n"
    "/remove starts processing the selected image, /download sends the cleaned file, "
    "/reset starts over."
)


def setup(router: Router, context: BotContext) -> None:
    """Register /start handler."""

    @router.message(CommandStart())
    async def handle_start(message: Message) -> None:
        await context.sessions.dispatch(message.chat.id, Reset())
        await message.answer(GREETING, reply_markup=ReplyKeyboardRemove())
