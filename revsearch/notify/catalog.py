"""Localized message catalog.

Messages use positional ``{0}``, ``{1}`` substitutions.  Unknown locales and
missing ids fall back to English.
"""

from typing import Dict, Optional

from revsearch.utils.config import settings
from revsearch.utils.logger import get_logger

log = get_logger(__name__)

FALLBACK_LOCALE = "en"

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "engineName_pinterest": "Pinterest",
        "error_engine": "Something went wrong while searching on {0}.",
        "error_sessionExpiredEngine": "The search session has expired, try searching on {0} again.",
        "error_invalidImageSize": "The image could not be reduced below the {1} upload limit of {0}.",
    },
    "de": {
        "engineName_pinterest": "Pinterest",
        "error_engine": "Bei der Suche auf {0} ist ein Fehler aufgetreten.",
        "error_sessionExpiredEngine": "Die Suchsitzung ist abgelaufen, bitte erneut auf {0} suchen.",
        "error_invalidImageSize": "Das Bild konnte nicht unter das {1}-Uploadlimit von {0} verkleinert werden.",
    },
}


class MessageCatalog:
    def __init__(self, locale: Optional[str] = None, messages: Optional[Dict] = None):
        self.locale = locale or settings.locale
        self.messages = messages if messages is not None else MESSAGES

    def get_message(self, message_id: str, *substitutions: str) -> str:
        for locale in (self.locale, FALLBACK_LOCALE):
            template = self.messages.get(locale, {}).get(message_id)
            if template is not None:
                return template.format(*substitutions)
        log.warning("Missing catalog message: %s", message_id)
        return message_id

    def engine_name(self, engine: str) -> str:
        return self.get_message(f"engineName_{engine}")

    def large_image_message(self, engine: str, max_size: int) -> str:
        """Message for an image that cannot be brought under *max_size*."""
        return self.get_message(
            "error_invalidImageSize", format_file_size(max_size), self.engine_name(engine)
        )


def format_file_size(size: int) -> str:
    """Human readable byte count (binary units)."""
    for unit in ("bytes", "KB", "MB"):
        if size < 1024 or unit == "MB":
            break
        size /= 1024
    if unit == "bytes":
        return f"{int(size)} bytes"
    return f"{size:g} {unit}" if float(size).is_integer() else f"{size:.1f} {unit}"
