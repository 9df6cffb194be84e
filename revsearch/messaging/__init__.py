"""Messaging module -- bus interfaces, receipts, Redis-backed bus."""

from revsearch.messaging.channels import LargeMessageChannel, MessageChannel
from revsearch.messaging.receipts import Receipt, ReceiptTracker
from revsearch.messaging.redis_client import RedisMessageBus

__all__ = [
    "LargeMessageChannel",
    "MessageChannel",
    "Receipt",
    "ReceiptTracker",
    "RedisMessageBus",
]
