"""Node implementations for the search state machine.

Each node receives the full ``SearchState`` and returns a *partial* dict
with only the keys it updates.  Steps never raise: they record the
exception under ``error`` so the ``fail`` node can acknowledge (once a
receipt exists), classify and notify before ``run`` re-raises.
"""

from typing import Any, Dict

from revsearch.errors import classify_error
from revsearch.images.adapter import ImageAdapter
from revsearch.messaging.channels import LargeMessageChannel, MessageChannel, storage_request
from revsearch.messaging.receipts import Receipt, ReceiptTracker
from revsearch.models import ImageRecord, SearchTask
from revsearch.notify.notifier import EngineNotifier
from revsearch.pipeline.state import SearchState
from revsearch.utils.logger import get_logger
from revsearch.web.search_engine import SearchRequest

log = get_logger(__name__)


class SearchNodes:
    """Pipeline steps bound to their collaborators."""

    def __init__(
        self,
        channel: MessageChannel,
        large_channel: LargeMessageChannel,
        adapter: ImageAdapter,
        notifier: EngineNotifier,
        receipts: ReceiptTracker,
    ):
        self.channel = channel
        self.large_channel = large_channel
        self.adapter = adapter
        self.notifier = notifier
        self.receipts = receipts

    # ---- Storage ---------------------------------------------------------

    async def fetch_task(self, state: SearchState) -> Dict[str, Any]:
        """Request the queued task from transient storage."""
        try:
            raw = await self.channel.send_message(storage_request(state["task_id"]))
            task = SearchTask.from_message(raw) if raw else None
        except Exception as exc:
            return {"error": exc}
        log.info("Task %s: %s", state["task_id"], "found" if task else "missing")
        return {"task": task}

    async def fetch_image(self, state: SearchState) -> Dict[str, Any]:
        """Capture the receipt, then pull the image over the large channel."""
        task = state["task"]
        receipt = Receipt.for_task(state["task_id"], task.image_id)
        try:
            raw = await self.large_channel.send_large_message(storage_request(task.image_id))
            image = ImageRecord.from_message(raw) if raw else None
        except Exception as exc:
            return {"receipt": receipt, "error": exc}
        return {"receipt": receipt, "image": image}

    # ---- Search ----------------------------------------------------------

    async def adapt_image(self, state: SearchState) -> Dict[str, Any]:
        task = state["task"]
        if task.asset_type != "image":
            return {"image": state["image"]}
        try:
            image = await self.adapter.prepare_for_upload(state["image"], state["engine"])
        except Exception as exc:
            return {"error": exc}
        return {"image": image}

    async def run_search(self, state: SearchState) -> Dict[str, Any]:
        task = state["task"]
        request = SearchRequest(
            image=state["image"],
            session=task.session,
            search=task.search,
            storage_ids=state["receipt"].storage_ids,
        )
        try:
            results = await state["search_fn"](request)
        except Exception as exc:
            return {"error": exc}
        return {"results": results}

    # ---- Terminal states -------------------------------------------------

    async def finish(self, state: SearchState) -> Dict[str, Any]:
        await self.receipts.send(state["receipt"])
        log.info(
            "Search on %s succeeded with %d results",
            state["engine"], len(state.get("results") or []),
        )
        return {"outcome": "succeeded"}

    async def fail(self, state: SearchState) -> Dict[str, Any]:
        error = state["error"]
        receipt = state.get("receipt")
        if receipt is not None:
            await self.receipts.send(receipt)
        await self.notifier.notify_failure(state["engine"], classify_error(error))
        log.error("Search on %s failed: %r", state["engine"], error, exc_info=error)
        return {"outcome": "failed"}

    async def expire(self, state: SearchState) -> Dict[str, Any]:
        receipt = state.get("receipt")
        if receipt is not None:
            await self.receipts.send(receipt)
        await self.notifier.session_expired(state["engine"])
        log.info("Search session for task %s expired", state["task_id"])
        return {"outcome": "session_expired"}


# ---- Conditional edges ---------------------------------------------------


def route_after_task(state: SearchState) -> str:
    if state.get("error") is not None:
        return "fail"
    return "fetch_image" if state.get("task") else "expire"


def route_after_image(state: SearchState) -> str:
    if state.get("error") is not None:
        return "fail"
    return "adapt_image" if state.get("image") else "expire"


def route_after_adapt(state: SearchState) -> str:
    return "fail" if state.get("error") is not None else "run_search"


def route_after_search(state: SearchState) -> str:
    return "fail" if state.get("error") is not None else "finish"
