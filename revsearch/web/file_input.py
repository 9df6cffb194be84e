"""Fill an engine page's file input with the search image (Playwright)."""

import json
import uuid
from typing import Iterable, Optional

from playwright.async_api import Page

from revsearch.models import ImageRecord
from revsearch.security.hostnames import get_valid_hostname
from revsearch.utils.logger import get_logger

log = get_logger(__name__)

# Runs in the page context; consumes exactly one event.
LISTENER_SCRIPT = """
(eventName) => {
  document.addEventListener(eventName, async (ev) => {
    const {selector, imageDataUrl, imageFilename, imageType} = JSON.parse(ev.detail);
    const blob = await (await fetch(imageDataUrl)).blob();
    const dt = new DataTransfer();
    dt.items.add(new File([blob], imageFilename, {type: imageType}));
    const input = document.querySelector(selector);
    input.files = dt.files;
    input.dispatchEvent(new Event('change', {bubbles: true}));
  }, {once: true});
}
"""

DISPATCH_SCRIPT = """
([eventName, detail]) => document.dispatchEvent(new CustomEvent(eventName, {detail}))
"""


async def set_file_input_data(
    page: Page,
    selector: str,
    image: ImageRecord,
    patch_input: bool = False,
    valid_hostnames: Optional[Iterable[str]] = None,
    engine: Optional[str] = None,
) -> None:
    """Populate the file input at *selector* with *image*.

    With ``patch_input`` the page assigns the file itself, from a data URL
    sent through a one-off DOM event; use it where the page blocks direct
    assignment.
    """
    if valid_hostnames is not None:
        get_valid_hostname(page.url, valid_hostnames, engine or "engine")

    if patch_input:
        event_name = str(uuid.uuid4())
        await page.evaluate(LISTENER_SCRIPT, event_name)
        detail = json.dumps(
            {
                "selector": selector,
                "imageDataUrl": image.data_url,
                "imageFilename": image.filename,
                "imageType": image.mime_type,
            }
        )
        await page.evaluate(DISPATCH_SCRIPT, [event_name, detail])
        log.debug("Dispatched file input event %s for %s", event_name, selector)
        return

    image = image.with_blob()
    await page.set_input_files(
        selector,
        files=[{"name": image.filename, "mimeType": image.mime_type, "buffer": image.blob}],
    )
