"""Helpers for handing the cleaned image back to the user."""

from __future__ import annotations

import base64
import binascii

EXPORT_PREFIX = "cleaned-"
DEFAULT_EXPORT_NAME = "image.png"


def export_filename(original_name: str | None) -> str:
    """Name the download after the uploaded file."""

    return f"{EXPORT_PREFIX}{original_name or DEFAULT_EXPORT_NAME}"


def to_png_data_url(image_data: str) -> str:
    return f"data:image/png;base64,{image_data}"


def decode_image_data(image_data: str) -> bytes:
    """Decode the base64 payload returned by the edit API."""

    try:
        return base64.b64decode(image_data, validate=True)
    except (ValueError, binascii.Error) as exc:
        raise ValueError("Edited image payload is not valid base64.") from exc
