"""Configuration management -- reads from environment with sensible defaults."""

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Centralised settings read once from env vars."""

    # --- Redis (transient storage + message bus) -------------------------
    redis_host: str = field(default_factory=lambda: os.getenv("REDIS_HOST", "localhost"))
    redis_port: int = field(default_factory=lambda: int(os.getenv("REDIS_PORT", "6379")))
    redis_password: str = field(default_factory=lambda: os.getenv("REDIS_PASSWORD", ""))
    storage_prefix: str = field(
        default_factory=lambda: os.getenv("STORAGE_PREFIX", "revsearch:storage:")
    )
    storage_ttl_seconds: int = field(
        default_factory=lambda: int(os.getenv("STORAGE_TTL_SECONDS", "600"))
    )
    receipt_cache_size: int = field(
        default_factory=lambda: int(os.getenv("RECEIPT_CACHE_SIZE", "1024"))
    )
    notification_channel: str = field(
        default_factory=lambda: os.getenv("NOTIFICATION_CHANNEL", "revsearch:notifications")
    )

    # --- Engines -----------------------------------------------------------
    http_timeout: float = field(
        default_factory=lambda: float(os.getenv("HTTP_TIMEOUT", "30.0"))
    )
    default_engine: str = field(
        default_factory=lambda: os.getenv("DEFAULT_ENGINE", "pinterest")
    )

    # --- Localization ------------------------------------------------------
    locale: str = field(default_factory=lambda: os.getenv("LOCALE", "en"))

    # --- Logging -----------------------------------------------------------
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: os.getenv("LOG_FILE", "logs/revsearch.log"))


# Module-level singleton -- import this everywhere.
settings = Settings()
