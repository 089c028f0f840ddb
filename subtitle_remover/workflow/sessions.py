"""In-memory workflow state per chat."""

from __future__ import annotations

import asyncio
import itertools
from typing import NamedTuple

from subtitle_remover.workflow.state_machine import (
    Phase,
    ProcessRequested,
    WorkflowEvent,
    WorkflowState,
    reduce,
)


class Transition(NamedTuple):
    previous: WorkflowState
    current: WorkflowState

    @property
    def changed(self) -> bool:
        return self.current is not self.previous


class SessionStore:
    """Holds the workflow state of every chat; nothing is persisted.

    Chats back in a clean idle state are forgotten. Processing runs are
    numbered store-wide, so a result that arrives after its chat was
    forgotten can never match a later run.
    """

    def __init__(self) -> None:
        self._states: dict[int, WorkflowState] = {}
        self._locks: dict[int, asyncio.Lock] = {}
        self._episodes = itertools.count(1)

    def __len__(self) -> int:
        return len(self._states)

    def _lock_for(self, chat_id: int) -> asyncio.Lock:
        if chat_id not in self._locks:
            self._locks[chat_id] = asyncio.Lock()
        return self._locks[chat_id]

    async def get(self, chat_id: int) -> WorkflowState:
        """Return the chat's state, starting from idle."""

        async with self._lock_for(chat_id):
            return self._states.get(chat_id, WorkflowState())

    async def dispatch(self, chat_id: int, event: WorkflowEvent) -> Transition:
        """Apply ``event`` atomically and return the states before and after."""

        async with self._lock_for(chat_id):
            previous = self._states.get(chat_id, WorkflowState())
            if isinstance(event, ProcessRequested) and event.episode is None and previous.can_submit:
                event = ProcessRequested(next(self._episodes))
            current = reduce(previous, event)
            if current.phase is Phase.IDLE and current.error is None:
                self._states.pop(chat_id, None)
            else:
                self._states[chat_id] = current
            return Transition(previous, current)
