"""Unit tests for file input injection (Playwright page mocked)."""

import json
from unittest.mock import AsyncMock

import pytest
from conftest import image_message

from revsearch.models import ImageRecord
from revsearch.web.file_input import DISPATCH_SCRIPT, LISTENER_SCRIPT, set_file_input_data


def _image() -> ImageRecord:
    return ImageRecord.from_message(image_message(b"png-bytes"))


def _page(url: str = "https://www.pinterest.com/") -> AsyncMock:
    page = AsyncMock()
    page.url = url
    return page


@pytest.mark.asyncio
async def test_direct_assignment():
    page = _page()
    await set_file_input_data(page, "input[type=file]", _image())

    page.set_input_files.assert_awaited_once_with(
        "input[type=file]",
        files=[{"name": "cat.png", "mimeType": "image/png", "buffer": b"png-bytes"}],
    )
    page.evaluate.assert_not_awaited()


@pytest.mark.asyncio
async def test_patched_input_dispatches_page_event():
    page = _page()
    image = _image()
    await set_file_input_data(page, "#upload", image, patch_input=True)

    (listener_call, dispatch_call) = page.evaluate.await_args_list
    assert listener_call.args[0] == LISTENER_SCRIPT
    event_name = listener_call.args[1]
    assert dispatch_call.args[0] == DISPATCH_SCRIPT
    name, detail = dispatch_call.args[1]
    assert name == event_name
    assert json.loads(detail) == {
        "selector": "#upload",
        "imageDataUrl": image.data_url,
        "imageFilename": "cat.png",
        "imageType": "image/png",
    }
    page.set_input_files.assert_not_awaited()


@pytest.mark.asyncio
async def test_fresh_event_name_per_call():
    page = _page()
    await set_file_input_data(page, "#upload", _image(), patch_input=True)
    await set_file_input_data(page, "#upload", _image(), patch_input=True)
    names = [call.args[1] for call in page.evaluate.await_args_list if call.args[0] == LISTENER_SCRIPT]
    assert len(set(names)) == 2


@pytest.mark.asyncio
async def test_foreign_host_rejected():
    page = _page("https://evil.example/")
    with pytest.raises(ValueError):
        await set_file_input_data(
            page, "#upload", _image(), valid_hostnames=["www.pinterest.com"], engine="pinterest"
        )
    page.set_input_files.assert_not_awaited()
