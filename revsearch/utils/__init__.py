"""Utils module -- config, logging, data URLs."""

from revsearch.utils.config import settings
from revsearch.utils.datauri import bytes_to_data_url, data_url_to_bytes
from revsearch.utils.logger import get_logger

__all__ = ["settings", "get_logger", "bytes_to_data_url", "data_url_to_bytes"]
