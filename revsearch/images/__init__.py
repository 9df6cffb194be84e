"""Images module -- upload limits, conversion, adaptation."""

from revsearch.images.adapter import ImageAdapter
from revsearch.images.converter import ImageConverter, PillowImageConverter
from revsearch.images.limits import MAX_IMAGE_UPLOAD_SIZE, get_max_image_upload_size

__all__ = [
    "ImageAdapter",
    "ImageConverter",
    "PillowImageConverter",
    "MAX_IMAGE_UPLOAD_SIZE",
    "get_max_image_upload_size",
]
