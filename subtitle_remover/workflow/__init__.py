"""Upload/process/result workflow shared by the chat handlers."""

from .sessions import SessionStore, Transition
from .state_machine import (
    FileSelected,
    Phase,
    ProcessFailed,
    ProcessRequested,
    ProcessSucceeded,
    Reset,
    SelectionRejected,
    WorkflowState,
    reduce,
    validate_selection,
)

__all__ = [
    "FileSelected",
    "Phase",
    "ProcessFailed",
    "ProcessRequested",
    "ProcessSucceeded",
    "Reset",
    "SelectionRejected",
    "SessionStore",
    "Transition",
    "WorkflowState",
    "reduce",
    "validate_selection",
]
