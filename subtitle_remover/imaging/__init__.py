"""Image encoding and export helpers."""

from .encoder import (
    EncodedImage,
    ImageResource,
    UnreadableFormatError,
    encode_image,
    parse_data_url,
    to_data_url,
)
from .export import decode_image_data, export_filename, to_png_data_url

__all__ = [
    "EncodedImage",
    "ImageResource",
    "UnreadableFormatError",
    "decode_image_data",
    "encode_image",
    "export_filename",
    "parse_data_url",
    "to_data_url",
    "to_png_data_url",
]
