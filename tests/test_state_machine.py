"""Tests for the upload workflow state machine."""

from __future__ import annotations

import pytest

from subtitle_remover.imaging import ImageResource
from subtitle_remover.workflow import (
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
from subtitle_remover.workflow.state_machine import INVALID_FILE_MESSAGE

IMAGE = ImageResource(data=b"png", media_type="image/png", name="a.png")
OTHER_IMAGE = ImageResource(data=b"gif", media_type="image/gif", name="b.gif")
PDF = ImageResource(data=b"%PDF", media_type="application/pdf", name="doc.pdf")


def _processing() -> WorkflowState:
    return reduce(reduce(WorkflowState(), FileSelected(IMAGE)), ProcessRequested())


def test_select_image_from_idle() -> None:
    state = reduce(WorkflowState(), FileSelected(IMAGE))

    assert state.phase is Phase.IMAGE_SELECTED
    assert state.resource is IMAGE
    assert state.can_submit


def test_non_image_selection_stays_idle() -> None:
    state = reduce(WorkflowState(), FileSelected(PDF))

    assert state.phase is Phase.IDLE
    assert state.resource is None
    assert state.error == INVALID_FILE_MESSAGE


def test_non_image_selection_keeps_current_image() -> None:
    selected = reduce(WorkflowState(), FileSelected(IMAGE))

    state = reduce(selected, FileSelected(PDF))

    assert state.phase is Phase.IMAGE_SELECTED
    assert state.resource is IMAGE
    assert state.error == INVALID_FILE_MESSAGE


def test_valid_selection_clears_validation_error() -> None:
    rejected = reduce(WorkflowState(), SelectionRejected(INVALID_FILE_MESSAGE))

    state = reduce(rejected, FileSelected(IMAGE))

    assert state.error is None


@pytest.mark.parametrize("media_type", ["", None, "application/pdf", "text/plain", "video/mp4"])
def test_validate_selection_rejects(media_type: str | None) -> None:
    assert validate_selection(media_type) == INVALID_FILE_MESSAGE


@pytest.mark.parametrize("media_type", ["image/png", "image/jpeg", "image/webp"])
def test_validate_selection_accepts(media_type: str) -> None:
    assert validate_selection(media_type) is None


def test_process_requested_starts_episode() -> None:
    state = _processing()

    assert state.phase is Phase.PROCESSING
    assert state.episode == 1
    assert state.is_busy
    assert not state.can_submit


def test_process_requested_without_image_is_ignored() -> None:
    idle = WorkflowState()

    assert reduce(idle, ProcessRequested()) is idle


def test_duplicate_submission_is_ignored() -> None:
    processing = _processing()

    assert reduce(processing, ProcessRequested()) is processing


def test_file_selection_ignored_while_processing() -> None:
    processing = _processing()

    assert reduce(processing, FileSelected(OTHER_IMAGE)) is processing


def test_success_completes() -> None:
    processing = _processing()

    state = reduce(processing, ProcessSucceeded(processing.episode, "AAAA"))

    assert state.phase is Phase.COMPLETED
    assert state.image_data == "AAAA"
    assert state.resource is IMAGE
    assert state.can_export


def test_failure_holds_message_and_blocks_retry() -> None:
    processing = _processing()

    failed = reduce(processing, ProcessFailed(processing.episode, "Failed to process image: quota exceeded"))

    assert failed.phase is Phase.FAILED
    assert failed.error == "Failed to process image: quota exceeded"
    assert not failed.can_export
    assert reduce(failed, ProcessRequested()) is failed


def test_new_selection_clears_failure() -> None:
    processing = _processing()
    failed = reduce(processing, ProcessFailed(processing.episode, "boom"))

    state = reduce(failed, FileSelected(OTHER_IMAGE))

    assert state.phase is Phase.IMAGE_SELECTED
    assert state.error is None
    assert state.resource is OTHER_IMAGE


def test_outcome_outside_processing_is_ignored() -> None:
    selected = reduce(WorkflowState(), FileSelected(IMAGE))

    assert reduce(selected, ProcessSucceeded(0, "AAAA")) is selected


def test_reset_discards_late_result() -> None:
    processing = _processing()
    reset = reduce(processing, Reset())
    restarted = reduce(reduce(reset, FileSelected(OTHER_IMAGE)), ProcessRequested())

    state = reduce(restarted, ProcessSucceeded(processing.episode, "stale"))

    assert state is restarted
    assert restarted.episode == processing.episode + 1


@pytest.mark.parametrize(
    "state",
    [
        WorkflowState(),
        WorkflowState(phase=Phase.IMAGE_SELECTED, resource=IMAGE),
        WorkflowState(phase=Phase.PROCESSING, resource=IMAGE, episode=3),
        WorkflowState(phase=Phase.COMPLETED, resource=IMAGE, image_data="AAAA", episode=3),
        WorkflowState(phase=Phase.FAILED, resource=IMAGE, error="boom", episode=3),
    ],
)
def test_reset_from_any_phase(state: WorkflowState) -> None:
    reset = reduce(state, Reset())

    assert reset.phase is Phase.IDLE
    assert reset.resource is None
    assert reset.image_data is None
    assert reset.error is None
    assert reset.episode == state.episode


def test_unknown_event_raises() -> None:
    with pytest.raises(TypeError):
        reduce(WorkflowState(), object())  # type: ignore[arg-type]


def test_process_requested_with_explicit_run_number() -> None:
    selected = reduce(WorkflowState(), FileSelected(IMAGE))

    state = reduce(selected, ProcessRequested(7))

    assert state.episode == 7
