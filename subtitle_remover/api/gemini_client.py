"""Async wrapper around the Gemini ``generateContent`` endpoint."""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Union

import httpx

from subtitle_remover.config.settings import Settings
from subtitle_remover.imaging.encoder import EncodedImage

logger = logging.getLogger(__name__)

FAILURE_PREFIX = "Failed to process image"
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred while processing the image."
RESPONSE_MODALITIES = ("IMAGE", "TEXT")


class MissingCredentialError(RuntimeError):
    """Raised when no Gemini API key is configured."""


class GeminiRequestError(RuntimeError):
    """Raised when the Gemini call itself fails."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class FailureKind(str, Enum):
    """Why an edit produced no image."""

    UNREADABLE_FORMAT = "unreadable_format"
    NO_IMAGE_RETURNED = "no_image_returned"
    TRANSPORT = "transport"


@dataclass(slots=True, frozen=True)
class EditSuccess:
    """The model returned an edited image."""

    image_data: str

    def image_bytes(self) -> bytes:
        return base64.b64decode(self.image_data)


@dataclass(slots=True, frozen=True)
class EditFailure:
    """The edit did not produce an image; ``message`` is shown to the user."""

    message: str
    kind: FailureKind


EditResult = Union[EditSuccess, EditFailure]


def failure_message(detail: str) -> str:
    return f"{FAILURE_PREFIX}: {detail}"


def _first_candidate_parts(payload: Mapping[str, Any]) -> list[Mapping[str, Any]]:
    candidates = payload.get("candidates") or []
    if not candidates or not isinstance(candidates[0], Mapping):
        return []
    content = candidates[0].get("content")
    if not isinstance(content, Mapping):
        return []
    parts = content.get("parts") or []
    return [part for part in parts if isinstance(part, Mapping)]


def extract_inline_image(payload: Mapping[str, Any]) -> str | None:
    """Return the data of the first inline-binary part of the first candidate."""

    for part in _first_candidate_parts(payload):
        inline = part.get("inlineData") or part.get("inline_data")
        if isinstance(inline, Mapping) and inline.get("data"):
            return inline["data"]
    return None


def extract_text(payload: Mapping[str, Any]) -> str:
    """Concatenate the text parts of the first candidate."""

    return "".join(
        part["text"] for part in _first_candidate_parts(payload) if isinstance(part.get("text"), str)
    )


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    error = body.get("error") if isinstance(body, Mapping) else None
    if isinstance(error, Mapping) and error.get("message"):
        return str(error["message"])
    return response.text


class GeminiClient:
    """Sends a single image-plus-instruction edit request to Gemini."""

    def __init__(self, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._settings = settings
        self._client = httpx.AsyncClient(
            base_url=settings.gemini_base_url.rstrip("/"),
            timeout=settings.request_timeout,
            headers={
                "x-goog-api-key": settings.gemini_api_key,
            },
            transport=transport,
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""

        await self._client.aclose()

    def ensure_credential(self) -> None:
        """Fail fast when the API key is missing."""

        if not self._settings.gemini_api_key:
            raise MissingCredentialError("The API_KEY environment variable is not set.")

    async def _request_json(self, endpoint: str, json_body: Mapping[str, Any]) -> dict[str, Any]:
        try:
            response = await self._client.post(endpoint, json=json_body)
            response.raise_for_status()
            body = response.json()
        except httpx.TimeoutException as exc:
            raise GeminiRequestError("Request to Gemini timed out.") from exc
        except httpx.HTTPStatusError as exc:
            raise GeminiRequestError(
                _error_detail(exc.response),
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise GeminiRequestError(str(exc)) from exc
        except ValueError as exc:
            raise GeminiRequestError("Gemini returned a malformed response.") from exc
        if not isinstance(body, dict):
            raise GeminiRequestError("Gemini returned a malformed response.")
        return body

    def build_payload(self, image: EncodedImage, instruction: str) -> dict[str, Any]:
        """Compose the ``generateContent`` body for one inline image and one instruction."""

        return {
            "contents": [
                {
                    "parts": [
                        {
                            "inline_data": {
                                "mime_type": image.media_type,
                                "data": image.data,
                            },
                        },
                        {"text": instruction},
                    ],
                },
            ],
            "generationConfig": {
                "responseModalities": list(RESPONSE_MODALITIES),
            },
        }

    async def submit_edit_request(self, image: EncodedImage, instruction: str) -> EditResult:
        """Send one edit request and interpret the single response."""

        self.ensure_credential()
        endpoint = f"/models/{self._settings.gemini_image_model}:generateContent"
        try:
            response = await self._request_json(endpoint, self.build_payload(image, instruction))
        except GeminiRequestError as exc:
            logger.error("Error processing image with Gemini API: %s", exc)
            detail = str(exc)
            if not detail:
                return EditFailure(UNKNOWN_ERROR_MESSAGE, FailureKind.TRANSPORT)
            return EditFailure(failure_message(detail), FailureKind.TRANSPORT)

        image_data = extract_inline_image(response)
        if image_data:
            return EditSuccess(image_data=image_data)

        text = extract_text(response)
        logger.error("Gemini returned no image; text response: %r", text)
        return EditFailure(
            failure_message(
                f'AI did not return an image. It may have provided a text response instead: "{text}"',
            ),
            FailureKind.NO_IMAGE_RETURNED,
        )
