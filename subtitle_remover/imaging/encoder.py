"""Turn uploaded images into base64 payloads accepted by the edit API."""

from __future__ import annotations

import asyncio
import base64
import mimetypes
from dataclasses import dataclass
from pathlib import Path


class UnreadableFormatError(ValueError):
    """Raised when an image cannot be expressed as ``(media type, payload)``."""


@dataclass(slots=True, frozen=True)
class ImageResource:
    """An uploaded file exactly as the user provided it."""

    data: bytes
    media_type: str
    name: str

    @classmethod
    async def from_path(cls, path: Path, media_type: str | None = None) -> "ImageResource":
        """Read ``path`` into memory, declaring its type from the extension unless given."""

        data = await asyncio.to_thread(path.read_bytes)
        if media_type is None:
            media_type, _ = mimetypes.guess_type(path.name)
        return cls(data=data, media_type=media_type or "", name=path.name)


@dataclass(slots=True, frozen=True)
class EncodedImage:
    """Base64 payload plus the media type it was declared with."""

    media_type: str
    data: str


def to_data_url(resource: ImageResource) -> str:
    """Return ``data:<type>;base64,<payload>`` for the resource."""

    payload = base64.b64encode(resource.data).decode("ascii")
    return f"data:{resource.media_type};base64,{payload}"


def parse_data_url(url: str) -> EncodedImage:
    """Split a base64 data URL into its media type and payload."""

    header, separator, payload = url.partition(",")
    if not separator or not header or not payload:
        raise UnreadableFormatError("Invalid file format for base64 conversion.")

    _, colon, type_spec = header.partition(":")
    media_type = type_spec.split(";", 1)[0].strip() if colon else ""
    if not media_type:
        raise UnreadableFormatError("Could not determine MIME type from file.")
    return EncodedImage(media_type=media_type, data=payload)


async def encode_image(resource: ImageResource) -> EncodedImage:
    """Encode the resource for transport; the resource itself is left untouched."""

    data_url = await asyncio.to_thread(to_data_url, resource)
    return parse_data_url(data_url)
