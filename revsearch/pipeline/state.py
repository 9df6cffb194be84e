"""Pipeline state schema -- the single TypedDict that flows through every node."""

from typing import List, Optional, TypedDict

from revsearch.messaging.receipts import Receipt
from revsearch.models import ImageRecord, SearchTask
from revsearch.web.search_engine import SearchFn, SearchResult


class SearchState(TypedDict, total=False):
    """State carried across the search state machine.

    Every node receives the full state and returns a *partial* dict with only
    the keys it wants to update.
    """

    # Input
    task_id: str
    engine: str
    search_fn: SearchFn

    # Storage
    task: Optional[SearchTask]
    image: Optional[ImageRecord]
    receipt: Optional[Receipt]

    # Outcome
    results: Optional[List[SearchResult]]
    error: Optional[Exception]
    outcome: str              # "succeeded" | "failed" | "session_expired"
