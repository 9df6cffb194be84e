"""Re-encode images so they fit under a byte ceiling (Pillow)."""

import asyncio
import io
from pathlib import PurePath
from typing import Optional, Protocol, Tuple

from PIL import Image

from revsearch.models import ImageRecord
from revsearch.utils.datauri import bytes_to_data_url, data_url_to_bytes
from revsearch.utils.logger import get_logger

log = get_logger(__name__)

# mime type -> (Pillow format, file extension, accepts quality)
FORMATS = {
    "image/jpeg": ("JPEG", ".jpg", True),
    "image/webp": ("WEBP", ".webp", True),
    "image/png": ("PNG", ".png", False),
}
QUALITY_STEPS = (92, 85, 75, 60, 45)
SCALE_STEPS = (1.0, 0.75, 0.5, 0.35, 0.25)
# Decode and re-encode failures Pillow raises for hostile or broken input.
IMAGE_ERRORS = (OSError, ValueError, Image.DecompressionBombError)


class ImageConverter(Protocol):
    async def convert(
        self,
        image: ImageRecord,
        *,
        max_size: int,
        new_type: str = "",
        set_blob: bool = True,
    ) -> Optional[ImageRecord]:
        """Return *image* re-encoded to at most *max_size* bytes, or None."""
        ...


class PillowImageConverter:
    """Lower quality first, then shrink dimensions, until the image fits."""

    def __init__(self, fallback_type: str = "image/jpeg"):
        self.fallback_type = fallback_type

    async def convert(
        self,
        image: ImageRecord,
        *,
        max_size: int,
        new_type: str = "",
        set_blob: bool = True,
    ) -> Optional[ImageRecord]:
        return await asyncio.to_thread(
            self._convert, image, max_size, new_type, set_blob
        )

    def _convert(
        self, image: ImageRecord, max_size: int, new_type: str, set_blob: bool
    ) -> Optional[ImageRecord]:
        mime_type = new_type or image.mime_type
        if mime_type not in FORMATS:
            mime_type = self.fallback_type
        fmt, ext, lossy = FORMATS[mime_type]

        source = image.blob if image.blob is not None else data_url_to_bytes(image.data_url)
        try:
            with Image.open(io.BytesIO(source)) as img:
                img.load()
                frame = _prepare_mode(img, fmt)
        except IMAGE_ERRORS:
            log.warning("Could not decode %s for conversion", image.filename, exc_info=True)
            return None

        try:
            data, scale, quality = _fit(frame, fmt, lossy, max_size)
        except IMAGE_ERRORS:
            log.warning("Could not re-encode %s as %s", image.filename, mime_type, exc_info=True)
            return None
        if data is None:
            log.info("Could not fit %s under %d bytes", image.filename, max_size)
            return None

        log.debug(
            "Converted %s to %s at scale=%.2f quality=%s (%d bytes)",
            image.filename, mime_type, scale, quality, len(data),
        )
        return ImageRecord(
            data_url=bytes_to_data_url(data, mime_type),
            filename=str(PurePath(image.filename).with_suffix(ext)),
            mime_type=mime_type,
            size=len(data),
            blob=data if set_blob else None,
        )


def _fit(
    frame: Image.Image, fmt: str, lossy: bool, max_size: int
) -> Tuple[Optional[bytes], float, Optional[int]]:
    """First (data, scale, quality) on the ladder that fits *max_size*."""
    width, height = frame.size
    for scale in SCALE_STEPS:
        size = (max(1, int(width * scale)), max(1, int(height * scale)))
        scaled = frame if scale == 1.0 else frame.resize(size, Image.Resampling.LANCZOS)
        for quality in QUALITY_STEPS if lossy else (None,):
            data = _encode(scaled, fmt, quality)
            if len(data) <= max_size:
                return data, scale, quality
    return None, 0.0, None


def _prepare_mode(img: Image.Image, fmt: str) -> Image.Image:
    """JPEG has no alpha channel -- flatten onto white."""
    if fmt == "JPEG" and img.mode not in ("RGB", "L"):
        rgba = img.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.split()[3])
        return background
    if img.mode == "P":
        return img.convert("RGBA")
    return img.copy()


def _encode(img: Image.Image, fmt: str, quality: Optional[int]) -> bytes:
    buffer = io.BytesIO()
    if quality is None:
        img.save(buffer, format=fmt, optimize=True)
    else:
        img.save(buffer, format=fmt, quality=quality)
    return buffer.getvalue()
