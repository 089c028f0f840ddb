"""Handlers that take the user's image."""

from __future__ import annotations

import logging

from aiogram import F, Router
from aiogram.exceptions import TelegramBadRequest, TelegramNetworkError
from aiogram.types import Message

from subtitle_remover.bot_service.context import BotContext
from subtitle_remover.bot_service.keyboards import PROCESS_KEYBOARD
from subtitle_remover.imaging import ImageResource
from subtitle_remover.workflow import FileSelected, SelectionRejected, validate_selection

logger = logging.getLogger(__name__)

BUSY_MESSAGE = "Still processing the current image. Please wait for the result."
PHOTO_MEDIA_TYPE = "image/jpeg"
TOO_BIG_MESSAGE = (
    "Telegram did not let me download this image. Bots can only fetch files up to 20 MB, "
    "so please send a smaller image."
)


async def _download(message: Message, file_id: str) -> bytes | None:
    try:
        file_info = await message.bot.get_file(file_id)
        file_stream = await message.bot.download_file(file_info.file_path)
    except TelegramNetworkError:
        logger.warning("Failed to download file %s for chat %s.", file_id, message.chat.id)
        await message.answer("Could not download the image from Telegram. Please try again.")
        return None
    except TelegramBadRequest as exc:
        logger.warning("Telegram refused file %s for chat %s: %s", file_id, message.chat.id, exc.message)
        await message.answer(TOO_BIG_MESSAGE)
        return None

    data = file_stream.read()
    file_stream.close()
    return data


async def select_image(
    message: Message,
    context: BotContext,
    *,
    file_id: str,
    media_type: str,
    name: str,
) -> None:
    """Download an image the user picked and make it the current selection."""

    state = await context.sessions.get(message.chat.id)
    if state.is_busy:
        await message.answer(BUSY_MESSAGE)
        return

    data = await _download(message, file_id)
    if data is None:
        return

    resource = ImageResource(data=data, media_type=media_type, name=name)
    transition = await context.sessions.dispatch(message.chat.id, FileSelected(resource))
    if not transition.changed:
        await message.answer(BUSY_MESSAGE)
        return
    await message.answer(
        f"Image received: {name or 'image'}. Tap “Remove subtitles” to start.",
        reply_markup=PROCESS_KEYBOARD,
    )


async def handle_photo_upload(message: Message, context: BotContext) -> None:
    photo = message.photo[-1]
    await select_image(
        message,
        context,
        file_id=photo.file_id,
        media_type=PHOTO_MEDIA_TYPE,
        name=f"photo_{photo.file_unique_id}.jpg",
    )


async def handle_document_upload(message: Message, context: BotContext) -> None:
    document = message.document
    media_type = document.mime_type or ""
    rejection = validate_selection(media_type)
    if rejection:
        await context.sessions.dispatch(message.chat.id, SelectionRejected(rejection))
        await message.answer(f"Error: {rejection}")
        return
    await select_image(
        message,
        context,
        file_id=document.file_id,
        media_type=media_type,
        name=document.file_name or "",
    )


def setup(router: Router, context: BotContext) -> None:
    """Register media upload handlers."""

    @router.message(F.photo)
    async def handle_photo(message: Message) -> None:
        await handle_photo_upload(message, context)

    @router.message(F.document)
    async def handle_document(message: Message) -> None:
        await handle_document_upload(message, context)
