"""Handler that discards the current image and result."""

from __future__ import annotations

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import Message, ReplyKeyboardRemove

from subtitle_remover.bot_service.context import BotContext
from subtitle_remover.bot_service.keyboards import RESET_BUTTON
from subtitle_remover.workflow import Reset


async def reset_session(message: Message, context: BotContext) -> None:
    await context.sessions.dispatch(message.chat.id, Reset())
    await message.answer("Start over: send a new image.", reply_markup=ReplyKeyboardRemove())


def setup(router: Router, context: BotContext) -> None:
    """Register /reset handler."""

    @router.message(Command("reset"))
    @router.message(F.text == RESET_BUTTON)
    async def handle_reset(message: Message) -> None:
        await reset_session(message, context)
