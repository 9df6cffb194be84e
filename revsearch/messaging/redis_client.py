"""Redis-backed message bus: transient storage, receipts, notifications."""

import json
import uuid
from typing import Any, Dict, Optional

import redis.asyncio as redis

from revsearch.models import ImageRecord, SearchTask
from revsearch.utils.config import settings
from revsearch.utils.logger import get_logger

log = get_logger(__name__)


class RedisMessageBus:
    """Thin wrapper around redis-py that answers pipeline messages.

    Transient entries live under ``<prefix><storage_id>`` as JSON strings
    with a TTL.  Image records can be large, so they are read through a
    second connection that skips response decoding.
    """

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        password: str | None = None,
        prefix: str | None = None,
        notification_channel: str | None = None,
    ):
        conn = {
            "host": host or settings.redis_host,
            "port": port or settings.redis_port,
            "password": password or settings.redis_password or None,
        }
        self.client = redis.Redis(decode_responses=True, **conn)
        self.binary_client = redis.Redis(decode_responses=False, **conn)
        self.prefix = prefix if prefix is not None else settings.storage_prefix
        self.notification_channel = notification_channel or settings.notification_channel

    def _key(self, storage_id: str) -> str:
        return f"{self.prefix}{storage_id}"

    # -- Message handling ---------------------------------------------------

    async def send_message(self, message: Dict[str, Any]) -> Any:
        message_id = message.get("id")
        if message_id == "storageRequest":
            raw = await self.client.get(self._key(message["storageId"]))
            return json.loads(raw) if raw else None
        if message_id == "storageReceipt":
            keys = [self._key(sid) for sid in message["storageIds"]]
            if keys:
                removed = await self.client.delete(*keys)
                log.debug("Receipt evicted %d of %d storage keys", removed, len(keys))
            return None
        if message_id == "notification":
            await self.client.publish(self.notification_channel, json.dumps(message))
            return None
        raise ValueError(f"Unsupported message id: {message_id!r}")

    async def send_large_message(self, message: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        if message.get("id") != "storageRequest":
            raise ValueError(f"Unsupported large message id: {message.get('id')!r}")
        raw = await self.binary_client.get(self._key(message["storageId"]))
        if not raw:
            return None
        return json.loads(raw.decode("utf-8"))

    # -- Storage ------------------------------------------------------------

    async def store(self, value: Dict[str, Any], storage_id: str | None = None) -> str:
        """Store *value* as a transient entry and return its storage id."""
        storage_id = storage_id or str(uuid.uuid4())
        await self.client.set(
            self._key(storage_id), json.dumps(value), ex=settings.storage_ttl_seconds
        )
        return storage_id

    async def queue_task(
        self,
        image: ImageRecord,
        search: Dict[str, Any],
        session: Dict[str, Any] | None = None,
    ) -> str:
        """Store *image* and a task pointing at it; returns the task id."""
        image_id = await self.store(image.to_message())
        task = SearchTask(image_id=image_id, session=session or {}, search=search)
        task_id = await self.store(task.to_message())
        log.info("Queued task %s (image %s)", task_id, image_id)
        return task_id

    async def exists(self, storage_id: str) -> bool:
        return bool(await self.client.exists(self._key(storage_id)))

    # -- Utilities ----------------------------------------------------------

    async def ping(self) -> bool:
        return await self.client.ping()

    async def aclose(self) -> None:
        await self.client.aclose()
        await self.binary_client.aclose()

