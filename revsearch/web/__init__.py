"""Web module -- search engines, shared HTTP client, page file inputs."""

from revsearch.web.pinterest import search_pinterest
from revsearch.web.search_engine import SearchFn, SearchRequest, SearchResult

ENGINES = {
    "pinterest": search_pinterest,
}

__all__ = ["ENGINES", "SearchFn", "SearchRequest", "SearchResult", "search_pinterest"]
