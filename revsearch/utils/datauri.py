"""Data URL <-> bytes conversion."""

import base64
from urllib.parse import unquote_to_bytes


def _split(data_url: str) -> tuple[str, str]:
    if not data_url.startswith("data:") or "," not in data_url:
        raise ValueError("Not a data URL")
    return data_url[5:].split(",", 1)


def data_url_mime_type(data_url: str) -> str:
    """Return the media type of *data_url* (``text/plain`` when omitted)."""
    header, _ = _split(data_url)
    mime = header.split(";", 1)[0]
    return mime or "text/plain"


def data_url_to_bytes(data_url: str) -> bytes:
    """Decode the payload of *data_url*."""
    header, payload = _split(data_url)
    if header.endswith(";base64"):
        return base64.b64decode(payload)
    return unquote_to_bytes(payload)


def bytes_to_data_url(data: bytes, mime_type: str) -> str:
    """Encode *data* as a base64 data URL."""
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
