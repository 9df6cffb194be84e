"""Message bus interfaces and message builders.

Messages are plain dicts keyed by ``id``:

* ``storageRequest``  -- request/response, returns the stored record or None
* ``storageReceipt``  -- fire-and-forget, evicts the listed storage entries
* ``notification``    -- fire-and-forget, shown to the user
"""

from typing import Any, Dict, Iterable, Optional, Protocol


class MessageChannel(Protocol):
    async def send_message(self, message: Dict[str, Any]) -> Any:
        """Deliver *message* and return the receiver's response (if any)."""
        ...


class LargeMessageChannel(Protocol):
    async def send_large_message(self, message: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """Deliver *message* and transfer back a response of any size."""
        ...


def storage_request(storage_id: str) -> Dict[str, Any]:
    return {"id": "storageRequest", "storageId": storage_id}


def storage_receipt(storage_ids: Iterable[str]) -> Dict[str, Any]:
    return {"id": "storageReceipt", "storageIds": list(storage_ids)}


def notification(message: str, engine: str) -> Dict[str, Any]:
    return {"id": "notification", "message": message, "type": f"{engine}Error"}
