"""Hostname allow-list checks for engine pages."""

from typing import Iterable
from urllib.parse import urlsplit


def get_valid_hostname(url: str, valid_hostnames: Iterable[str], engine: str) -> str:
    """Return the hostname of *url*; raise ValueError if it is not allowed."""
    hostname = urlsplit(url).hostname or ""
    if hostname not in set(valid_hostnames):
        raise ValueError(f"Invalid {engine} hostname: {hostname}")
    return hostname
