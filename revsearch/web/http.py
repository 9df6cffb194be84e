"""Shared HTTP client for engine calls."""

from typing import Optional

import httpx

from revsearch.utils.config import settings
from revsearch.utils.logger import get_logger

log = get_logger(__name__)

_shared_client: Optional[httpx.AsyncClient] = None


def get_http_client() -> httpx.AsyncClient:
    """Get or create the pooled async client used by engines."""
    global _shared_client
    if _shared_client is None:
        _shared_client = httpx.AsyncClient(timeout=settings.http_timeout)
        log.debug("Created shared HTTP client")
    return _shared_client


async def close_http_client() -> None:
    """Close the shared client (call on shutdown)."""
    global _shared_client
    if _shared_client is not None:
        await _shared_client.aclose()
        _shared_client = None
