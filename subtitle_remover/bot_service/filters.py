"""Custom aiogram filters."""

from __future__ import annotations

from typing import Any

from aiogram.filters import BaseFilter
from aiogram.types import Message

from subtitle_remover.bot_service.context import BotContext
from subtitle_remover.workflow import Phase


class PhaseFilter(BaseFilter):
    """Matches messages when the chat's workflow is in one of the expected phases."""

    def __init__(self, context: BotContext, *expected: Phase) -> None:
        self._context = context
        self._expected = frozenset(expected)

    async def __call__(self, message: Message) -> bool | dict[str, Any]:
        state = await self._context.sessions.get(message.chat.id)
        if state.phase in self._expected:
            return {"state": state}
        return False
