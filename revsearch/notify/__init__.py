"""Notify module -- message catalog and engine error notifications."""

from revsearch.notify.catalog import MessageCatalog
from revsearch.notify.notifier import EngineNotifier, run_upload_callback

__all__ = ["MessageCatalog", "EngineNotifier", "run_upload_callback"]
