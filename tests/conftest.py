"""Shared fakes for the pipeline tests."""

from typing import Any, Dict, List, Optional

from revsearch.utils.datauri import bytes_to_data_url


class FakeBus:
    """In-memory message bus that records every message it receives."""

    def __init__(self, records: Optional[Dict[str, Any]] = None, large_error: Exception | None = None):
        self.records = dict(records or {})
        self.large_error = large_error
        self.sent: List[Dict[str, Any]] = []

    async def send_message(self, message: Dict[str, Any]) -> Any:
        self.sent.append(message)
        if message["id"] == "storageRequest":
            return self.records.get(message["storageId"])
        return None

    async def send_large_message(self, message: Dict[str, Any]) -> Any:
        self.sent.append({**message, "large": True})
        if self.large_error is not None:
            raise self.large_error
        return self.records.get(message["storageId"])

    def of(self, message_id: str) -> List[Dict[str, Any]]:
        return [m for m in self.sent if m["id"] == message_id]


def image_message(payload: bytes = b"\x89PNG fake", size: int | None = None,
                  mime_type: str = "image/png", filename: str = "cat.png") -> Dict[str, Any]:
    return {
        "imageDataUrl": bytes_to_data_url(payload, mime_type),
        "imageFilename": filename,
        "imageType": mime_type,
        "imageSize": len(payload) if size is None else size,
    }


def task_message(image_id: str = "i1", asset_type: str = "image") -> Dict[str, Any]:
    return {"imageId": image_id, "session": {}, "search": {"assetType": asset_type}}
