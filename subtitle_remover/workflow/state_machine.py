"""Finite state machine for a single upload-and-clean session.

The state is an immutable :class:`WorkflowState`; :func:`reduce` computes the
next one from an event. Events that are not allowed in the current phase
return the state object unchanged, so callers can detect a refused
transition with an identity check.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Union

from subtitle_remover.imaging.encoder import ImageResource

INVALID_FILE_MESSAGE = "Please upload a valid image file (PNG, JPG, etc.)."


class Phase(str, Enum):
    """Stages of the workflow."""

    IDLE = "idle"
    IMAGE_SELECTED = "image_selected"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class WorkflowState:
    """Everything the UI needs to render one session."""

    phase: Phase = Phase.IDLE
    resource: ImageResource | None = None
    image_data: str | None = None
    error: str | None = None
    # Number of the current or last processing run; late results are matched against it.
    episode: int = 0

    @property
    def can_submit(self) -> bool:
        return self.phase is Phase.IMAGE_SELECTED

    @property
    def can_export(self) -> bool:
        return self.phase is Phase.COMPLETED and self.image_data is not None

    @property
    def is_busy(self) -> bool:
        return self.phase is Phase.PROCESSING


@dataclass(slots=True, frozen=True)
class FileSelected:
    resource: ImageResource


@dataclass(slots=True, frozen=True)
class SelectionRejected:
    message: str


@dataclass(slots=True, frozen=True)
class ProcessRequested:
    # Run number to use; the next one after the state's when omitted.
    episode: int | None = None


@dataclass(slots=True, frozen=True)
class ProcessSucceeded:
    episode: int
    image_data: str


@dataclass(slots=True, frozen=True)
class ProcessFailed:
    episode: int
    message: str


@dataclass(slots=True, frozen=True)
class Reset:
    pass


WorkflowEvent = Union[FileSelected, SelectionRejected, ProcessRequested, ProcessSucceeded, ProcessFailed, Reset]


def validate_selection(media_type: str | None) -> str | None:
    """Return a user-facing message when ``media_type`` is not an image type."""

    if not media_type or not media_type.startswith("image/"):
        return INVALID_FILE_MESSAGE
    return None


def reduce(state: WorkflowState, event: WorkflowEvent) -> WorkflowState:
    """Apply ``event`` to ``state``."""

    if isinstance(event, Reset):
        return WorkflowState(episode=state.episode)

    if isinstance(event, SelectionRejected):
        return replace(state, error=event.message)

    if isinstance(event, FileSelected):
        if state.is_busy:
            return state
        message = validate_selection(event.resource.media_type)
        if message:
            return replace(state, error=message)
        return WorkflowState(phase=Phase.IMAGE_SELECTED, resource=event.resource, episode=state.episode)

    if isinstance(event, ProcessRequested):
        if not state.can_submit:
            return state
        return replace(
            state,
            phase=Phase.PROCESSING,
            image_data=None,
            error=None,
            episode=state.episode + 1 if event.episode is None else event.episode,
        )

    if isinstance(event, (ProcessSucceeded, ProcessFailed)):
        if not state.is_busy or event.episode != state.episode:
            return state
        if isinstance(event, ProcessSucceeded):
            return replace(state, phase=Phase.COMPLETED, image_data=event.image_data, error=None)
        return replace(state, phase=Phase.FAILED, image_data=None, error=event.message)

    raise TypeError(f"Unsupported workflow event: {event!r}")
