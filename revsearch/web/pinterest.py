"""Pinterest visual search (reference engine)."""

from typing import List

import httpx

from revsearch.errors import GenericEngineError
from revsearch.utils.logger import get_logger
from revsearch.web.http import get_http_client
from revsearch.web.search_engine import SearchRequest, SearchResult

log = get_logger(__name__)

API_URL = "https://api.pinterest.com/v3/visual_search/extension/image/"
PIN_URL = "https://pinterest.com/pin/{id}/"

# Crop box covering the whole image.
CROP_FIELDS = {"x": "0", "y": "0", "w": "1", "h": "1", "base_scheme": "https"}


async def search_pinterest(
    request: SearchRequest, client: httpx.AsyncClient | None = None
) -> List[SearchResult]:
    """Upload the request image and normalise Pinterest's matches.

    Pinterest's answer is only trusted when the HTTP status is 200, the body
    reports ``status == "success"`` and ``data`` holds at least one item.
    """
    client = client or get_http_client()
    image = request.image.with_blob()

    rsp = await client.put(
        API_URL,
        data=CROP_FIELDS,
        files={"image": (image.filename, image.blob, image.mime_type)},
    )
    try:
        body = rsp.json()
    except ValueError:
        log.warning("Pinterest returned a non-JSON body (HTTP %d)", rsp.status_code)
        raise GenericEngineError("search failed")

    if not isinstance(body, dict):
        body = {}
    items = body.get("data")
    if rsp.status_code != 200 or body.get("status") != "success" or not items:
        log.warning(
            "Pinterest search failed: HTTP %d, status=%r",
            rsp.status_code, body.get("status"),
        )
        raise GenericEngineError("search failed")

    return [
        SearchResult(
            page_url=PIN_URL.format(id=item["id"]),
            image_url=item.get("image_large_url", ""),
            text=item.get("description"),
        )
        for item in items
    ]
