"""Subtitle removal pipeline: encode the upload, ask Gemini to clean it."""

from __future__ import annotations

import logging

from subtitle_remover.api import EditFailure, EditResult, FailureKind, GeminiClient
from subtitle_remover.api.gemini_client import failure_message
from subtitle_remover.imaging import ImageResource, UnreadableFormatError, encode_image

logger = logging.getLogger(__name__)

SUBTITLE_REMOVAL_INSTRUCTION = (
    "이미지에서 모든 자막과 텍스트를 제거해주세요. 원본 이미지의 스타일과 품질을 최대한 유지하고, "
    "자막이 있던 부분을 주변 배경과 어울리게 자연스럽게 복원해주세요. "
    "Please remove all subtitles and text from the image. Maintain the original image's style and "
    "quality as much as possible, and naturally restore the area where the subtitles were to blend "
    "with the background."
)


class SubtitleRemover:
    """Runs one upload through the encoder and the Gemini edit request."""

    def __init__(self, client: GeminiClient, instruction: str = SUBTITLE_REMOVAL_INSTRUCTION) -> None:
        self._client = client
        self._instruction = instruction

    async def remove(self, resource: ImageResource) -> EditResult:
        """Return the cleaned image or a failure message for ``resource``.

        Raises ``MissingCredentialError`` before touching the file when no API
        key is configured.
        """

        self._client.ensure_credential()
        try:
            encoded = await encode_image(resource)
        except UnreadableFormatError as exc:
            logger.error("Could not encode %s for upload: %s", resource.name, exc)
            return EditFailure(failure_message(str(exc)), FailureKind.UNREADABLE_FORMAT)

        logger.info(
            "Submitting %s (%s, %d bytes) for subtitle removal.",
            resource.name,
            encoded.media_type,
            len(resource.data),
        )
        return await self._client.submit_edit_request(encoded, self._instruction)
