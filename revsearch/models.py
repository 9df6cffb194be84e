"""Records read from transient storage: search tasks and their images."""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

from revsearch.utils.datauri import data_url_mime_type, data_url_to_bytes


@dataclass(frozen=True)
class SearchTask:
    """A queued unit of search work."""

    image_id: str
    session: Dict[str, Any] = field(default_factory=dict)
    search: Dict[str, Any] = field(default_factory=dict)

    @property
    def asset_type(self) -> Optional[str]:
        return self.search.get("assetType")

    @classmethod
    def from_message(cls, data: Dict[str, Any]) -> "SearchTask":
        return cls(
            image_id=data["imageId"],
            session=data.get("session") or {},
            search=data.get("search") or {},
        )

    def to_message(self) -> Dict[str, Any]:
        return {"imageId": self.image_id, "session": self.session, "search": self.search}


@dataclass(frozen=True)
class ImageRecord:
    """An image as stored by the task issuer.

    ``blob`` is materialized lazily from ``data_url``; ``size`` is the byte
    size of the encoded image.
    """

    data_url: str
    filename: str
    mime_type: str
    size: int
    blob: Optional[bytes] = None

    @classmethod
    def from_message(cls, data: Dict[str, Any]) -> "ImageRecord":
        data_url = data["imageDataUrl"]
        size = data.get("imageSize")
        if size is None:
            size = len(data_url_to_bytes(data_url))
        return cls(
            data_url=data_url,
            filename=data.get("imageFilename") or "image",
            mime_type=data.get("imageType") or data_url_mime_type(data_url),
            size=int(size),
        )

    def to_message(self) -> Dict[str, Any]:
        return {
            "imageDataUrl": self.data_url,
            "imageFilename": self.filename,
            "imageType": self.mime_type,
            "imageSize": self.size,
        }

    def with_blob(self) -> "ImageRecord":
        """Return the record with ``blob`` decoded from ``data_url``."""
        if self.blob is not None:
            return self
        return replace(self, blob=data_url_to_bytes(self.data_url))
