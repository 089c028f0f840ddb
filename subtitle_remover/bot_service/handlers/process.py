"""Handlers that run the subtitle removal and deliver the result."""

from __future__ import annotations

import logging

from aiogram import F, Router
from aiogram.filters import Command
from aiogram.types import BufferedInputFile, Message, ReplyKeyboardRemove
from aiogram.utils.chat_action import ChatActionSender

from subtitle_remover.api import EditFailure, EditSuccess, MissingCredentialError
from subtitle_remover.api.gemini_client import UNKNOWN_ERROR_MESSAGE
from subtitle_remover.bot_service.context import BotContext
from subtitle_remover.bot_service.filters import PhaseFilter
from subtitle_remover.bot_service.keyboards import REMOVE_BUTTON, RESET_KEYBOARD
from subtitle_remover.imaging import decode_image_data, export_filename
from subtitle_remover.workflow import (
    Phase,
    ProcessFailed,
    ProcessRequested,
    ProcessSucceeded,
    WorkflowState,
)

logger = logging.getLogger(__name__)

REFUSAL_MESSAGES = {
    Phase.IDLE: "Send an image first.",
    Phase.PROCESSING: (
        "Still processing the current image. Please wait for the result or use /reset to start over."
    ),
    Phase.COMPLETED: "This image is already cleaned. Use /download to save it or send a new image.",
    Phase.FAILED: "Send a new image or use /reset to start over.",
}


async def process_image(message: Message, context: BotContext) -> None:
    """Run the selected image through the remover and show the outcome."""

    chat_id = message.chat.id
    transition = await context.sessions.dispatch(chat_id, ProcessRequested())
    if not transition.changed:
        await message.answer(REFUSAL_MESSAGES.get(transition.previous.phase, "Send an image first."))
        return

    state = transition.current
    try:
        await message.answer("Generating...", reply_markup=ReplyKeyboardRemove())
        async with ChatActionSender.upload_photo(chat_id=chat_id, bot=message.bot):
            result = await context.remover.remove(state.resource)
    except MissingCredentialError as exc:
        logger.error("Subtitle removal is not configured: %s", exc)
        event = ProcessFailed(state.episode, str(exc))
    except Exception as exc:
        logger.exception("Processing run %d for chat %s failed.", state.episode, chat_id)
        event = ProcessFailed(state.episode, str(exc) or UNKNOWN_ERROR_MESSAGE)
    else:
        if isinstance(result, EditSuccess):
            event = ProcessSucceeded(state.episode, result.image_data)
        elif isinstance(result, EditFailure):
            event = ProcessFailed(state.episode, result.message)
        else:
            logger.error("Unexpected edit result for chat %s: %r", chat_id, result)
            event = ProcessFailed(state.episode, UNKNOWN_ERROR_MESSAGE)

    transition = await context.sessions.dispatch(chat_id, event)
    if not transition.changed:
        logger.info("Discarding result of processing run %d for chat %s.", state.episode, chat_id)
        return
    await render_outcome(message, transition.current)


async def render_outcome(message: Message, state: WorkflowState) -> None:
    if state.phase is Phase.FAILED:
        await message.answer(f"Error: {state.error}")
        await message.answer("Send another image or use /reset to start over.", reply_markup=RESET_KEYBOARD)
        return

    photo = BufferedInputFile(decode_image_data(state.image_data), filename=_export_name(state))
    await message.answer_photo(photo, caption="Cleaned Image")
    await message.answer("Use /download to save the image, or /reset to start over.", reply_markup=RESET_KEYBOARD)


async def send_export(message: Message, state: WorkflowState) -> None:
    """Send the cleaned image as a file named after the upload."""

    document = BufferedInputFile(decode_image_data(state.image_data), filename=_export_name(state))
    await message.answer_document(document, caption="Download Image")


def _export_name(state: WorkflowState) -> str:
    return export_filename(state.resource.name if state.resource else None)


def setup(router: Router, context: BotContext) -> None:
    """Register processing and download handlers."""

    @router.message(Command("remove"))
    @router.message(F.text == REMOVE_BUTTON)
    async def handle_process(message: Message) -> None:
        await process_image(message, context)

    @router.message(Command("download"), PhaseFilter(context, Phase.COMPLETED))
    async def handle_download(message: Message, state: WorkflowState) -> None:
        await send_export(message, state)

    @router.message(Command("download"))
    async def handle_nothing_to_download(message: Message) -> None:
        await message.answer("There is no cleaned image to download yet.")
