"""Fit images to an engine's upload size ceiling before searching."""

from typing import Mapping, Optional

from revsearch.errors import TypedEngineError
from revsearch.images.converter import ImageConverter, PillowImageConverter
from revsearch.images.limits import (
    MAX_IMAGE_UPLOAD_SIZE,
    UploadLimit,
    get_max_image_upload_size,
)
from revsearch.models import ImageRecord
from revsearch.notify.catalog import MessageCatalog
from revsearch.utils.logger import get_logger

log = get_logger(__name__)


class ImageAdapter:
    """Decide whether an image needs conversion and perform it.

    Images that already fit are returned with the same content; an image
    that is over the limit either comes back at or under the limit or the
    call raises ``TypedEngineError`` with a size-specific message.
    """

    def __init__(
        self,
        converter: ImageConverter | None = None,
        catalog: MessageCatalog | None = None,
        limits: Mapping[str, UploadLimit] = MAX_IMAGE_UPLOAD_SIZE,
    ):
        self.converter = converter or PillowImageConverter()
        self.catalog = catalog or MessageCatalog()
        self.limits = limits

    async def prepare_for_upload(
        self,
        image: ImageRecord,
        engine: str,
        target: Optional[str] = None,
        new_type: str = "",
        set_blob: bool = True,
    ) -> ImageRecord:
        max_size = get_max_image_upload_size(engine, target, self.limits)

        if max_size and image.size > max_size:
            log.info(
                "Image %s is %d bytes, %s accepts %d -- converting",
                image.filename, image.size, engine, max_size,
            )
            converted = await self.converter.convert(
                image, max_size=max_size, new_type=new_type, set_blob=set_blob
            )
            if converted is None or converted.size > max_size:
                raise TypedEngineError(self.catalog.large_image_message(engine, max_size))
            return converted

        if set_blob:
            return image.with_blob()
        return image
