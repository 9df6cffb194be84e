"""Storage receipts -- release a task's transient entries exactly once."""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Optional, Tuple

from revsearch.messaging.channels import MessageChannel, storage_receipt
from revsearch.utils.config import settings
from revsearch.utils.logger import get_logger

log = get_logger(__name__)


@dataclass(frozen=True)
class Receipt:
    """Snapshot of the storage keys consumed by one task."""

    storage_ids: Tuple[str, ...]

    @classmethod
    def for_task(cls, task_id: str, image_id: str) -> "Receipt":
        return cls((task_id, image_id))


class ReceiptTracker:
    """Sends each receipt at most once over *channel*.

    Only the ``max_tracked`` most recent receipts are remembered; older ones
    are forgotten so a long-running worker does not grow without bound.
    """

    def __init__(self, channel: MessageChannel, max_tracked: Optional[int] = None):
        self.channel = channel
        self.max_tracked = max(1, max_tracked or settings.receipt_cache_size)
        self._sent: "OrderedDict[Receipt, None]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._sent)

    async def send(self, receipt: Receipt) -> bool:
        """Send *receipt*; returns False when it was empty or already sent."""
        if not receipt.storage_ids:
            return False
        if receipt in self._sent:
            self._sent.move_to_end(receipt)
            return False
        self._sent[receipt] = None
        while len(self._sent) > self.max_tracked:
            self._sent.popitem(last=False)
        await self.channel.send_message(storage_receipt(receipt.storage_ids))
        log.debug("Sent storage receipt for %s", receipt.storage_ids)
        return True
