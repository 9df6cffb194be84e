"""Run one queued search task end to end."""

from typing import Awaitable, Callable, List, Optional

from revsearch.images.adapter import ImageAdapter
from revsearch.messaging.channels import LargeMessageChannel, MessageChannel
from revsearch.messaging.receipts import ReceiptTracker
from revsearch.notify.notifier import EngineNotifier
from revsearch.pipeline.graph import build_graph
from revsearch.pipeline.nodes import SearchNodes
from revsearch.utils.logger import get_logger
from revsearch.web.search_engine import SearchFn, SearchResult

log = get_logger(__name__)


class SearchOrchestrator:
    """Fetch task -> fetch image -> adapt -> search -> acknowledge -> notify.

    ``channel`` answers storage requests and receives receipts and
    notifications; ``large_channel`` delivers image records (defaults to
    ``channel``).  ``document_ready`` is awaited before anything else when
    the search runs inside a page.

    Receipts: every run that found its task sends the receipt
    ``(task_id, image_id)`` exactly once -- after the engine call on
    success, before notifying on failure or expiry.
    """

    def __init__(
        self,
        channel: MessageChannel,
        large_channel: LargeMessageChannel | None = None,
        adapter: ImageAdapter | None = None,
        notifier: EngineNotifier | None = None,
        document_ready: Optional[Callable[[], Awaitable[None]]] = None,
    ):
        self.receipts = ReceiptTracker(channel)
        self.notifier = notifier or EngineNotifier(channel)
        self.document_ready = document_ready
        nodes = SearchNodes(
            channel=channel,
            large_channel=large_channel or channel,
            adapter=adapter or ImageAdapter(catalog=self.notifier.catalog),
            notifier=self.notifier,
            receipts=self.receipts,
        )
        self._graph = build_graph(nodes)

    async def run(
        self, search_fn: SearchFn, engine: str, task_id: str
    ) -> Optional[List[SearchResult]]:
        """Execute task *task_id* on *engine*.

        Returns the engine's results, or None when the task or its image has
        expired.  Engine failures are acknowledged and notified, then
        re-raised.
        """
        if self.document_ready is not None:
            await self.document_ready()

        log.debug("Running task %s on %s", task_id, engine)
        final = await self._graph.ainvoke(
            {"task_id": task_id, "engine": engine, "search_fn": search_fn}
        )
        error = final.get("error")
        if error is not None:
            raise error
        return final.get("results")
