"""Shared dependencies passed into handler setup functions."""

from __future__ import annotations

from dataclasses import dataclass

from subtitle_remover.logic import SubtitleRemover
from subtitle_remover.workflow import SessionStore


@dataclass(slots=True)
class BotContext:
    """Container for objects shared across handlers."""

    sessions: SessionStore
    remover: SubtitleRemover
