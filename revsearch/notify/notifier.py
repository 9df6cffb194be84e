"""User-facing engine error notifications."""

from typing import Any, Callable, Optional, TypeVar

from revsearch.errors import GENERIC_ERROR_ID, EngineFailure, TypedFailure
from revsearch.messaging.channels import MessageChannel, notification
from revsearch.notify.catalog import MessageCatalog
from revsearch.utils.logger import get_logger

log = get_logger(__name__)

SESSION_EXPIRED_ID = "error_sessionExpiredEngine"

T = TypeVar("T")


class EngineNotifier:
    """Resolves engine error messages and sends them to the UI layer."""

    def __init__(self, channel: MessageChannel, catalog: MessageCatalog | None = None):
        self.channel = channel
        self.catalog = catalog or MessageCatalog()

    async def show_engine_error(
        self,
        engine: str,
        message: Optional[str] = None,
        error_id: Optional[str] = None,
    ) -> str:
        """Send a notification and return the message that was shown."""
        if not message:
            message = self.catalog.get_message(
                error_id or GENERIC_ERROR_ID, self.catalog.engine_name(engine)
            )
        await self.channel.send_message(notification(message, engine))
        return message

    async def notify_failure(self, engine: str, failure: EngineFailure) -> str:
        if isinstance(failure, TypedFailure):
            return await self.show_engine_error(engine, message=failure.message)
        return await self.show_engine_error(engine, error_id=failure.error_id)

    async def session_expired(self, engine: str) -> str:
        return await self.show_engine_error(engine, error_id=SESSION_EXPIRED_ID)


async def run_upload_callback(
    response: Any,
    callback: Callable[[Any], T],
    engine: str,
    notifier: EngineNotifier,
) -> T:
    """Run an engine's upload *callback*; failures notify and propagate."""
    try:
        return callback(response)
    except Exception as exc:
        await notifier.show_engine_error(engine, error_id=GENERIC_ERROR_ID)
        log.error("%s upload callback failed: %s", engine, exc)
        raise
