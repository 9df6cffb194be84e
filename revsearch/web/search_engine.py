"""Engine call contract shared by every search provider."""

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple

from revsearch.models import ImageRecord


@dataclass(frozen=True)
class SearchResult:
    """A single reverse image search hit."""

    page_url: str
    image_url: str
    text: Optional[str] = None


@dataclass(frozen=True)
class SearchRequest:
    """Everything an engine needs to run one search."""

    image: ImageRecord
    session: Dict[str, Any] = field(default_factory=dict)
    search: Dict[str, Any] = field(default_factory=dict)
    storage_ids: Tuple[str, ...] = ()


# An engine takes a request and returns hits in the provider's order, or
# raises.  Swap implementations without touching the pipeline.
SearchFn = Callable[[SearchRequest], Awaitable[List[SearchResult]]]
