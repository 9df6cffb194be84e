"""Unit tests for size-constrained image adaptation."""

import io
import os
from unittest.mock import AsyncMock

import pytest
from PIL import Image
from conftest import image_message

from revsearch.errors import TypedEngineError
from revsearch.images.adapter import ImageAdapter
from revsearch.images.converter import PillowImageConverter
from revsearch.images.limits import get_max_image_upload_size
from revsearch.models import ImageRecord
from revsearch.notify.catalog import MessageCatalog
from revsearch.utils.datauri import bytes_to_data_url

LIMITS = {"pinterest": 1_000_000, "bing": {"api": 500_000}}


def _image(size: int, payload: bytes = b"original-bytes") -> ImageRecord:
    return ImageRecord.from_message(image_message(payload, size=size))


def _converted(size: int) -> ImageRecord:
    return ImageRecord(
        data_url="data:image/jpeg;base64,AAAA",
        filename="cat.jpg",
        mime_type="image/jpeg",
        size=size,
        blob=b"\x00\x00\x00",
    )


def _adapter(converter) -> ImageAdapter:
    return ImageAdapter(converter=converter, catalog=MessageCatalog("en"), limits=LIMITS)


class TestLimitLookup:
    def test_plain_limit(self):
        assert get_max_image_upload_size("pinterest", limits=LIMITS) == 1_000_000

    def test_target_limit(self):
        assert get_max_image_upload_size("bing", "api", limits=LIMITS) == 500_000
        assert get_max_image_upload_size("bing", limits=LIMITS) is None

    def test_unknown_engine(self):
        assert get_max_image_upload_size("nope", limits=LIMITS) is None

    def test_default_table_has_pinterest(self):
        assert get_max_image_upload_size("pinterest") == 10 * 1024 * 1024


class TestPrepareForUpload:
    @pytest.mark.asyncio
    async def test_over_limit_is_converted(self):
        converter = AsyncMock()
        converter.convert.return_value = _converted(900_000)
        result = await _adapter(converter).prepare_for_upload(_image(2_000_000), "pinterest")

        assert result.size == 900_000
        converter.convert.assert_awaited_once()
        kwargs = converter.convert.await_args.kwargs
        assert kwargs["max_size"] == 1_000_000
        assert kwargs["new_type"] == ""
        assert kwargs["set_blob"] is True

    @pytest.mark.asyncio
    async def test_conversion_failure_is_typed_error(self):
        converter = AsyncMock()
        converter.convert.return_value = None
        with pytest.raises(TypedEngineError) as exc:
            await _adapter(converter).prepare_for_upload(_image(2_000_000), "pinterest")
        assert exc.value.message == MessageCatalog("en").large_image_message("pinterest", 1_000_000)
        assert "Pinterest" in exc.value.message

    @pytest.mark.asyncio
    async def test_conversion_still_too_large_is_typed_error(self):
        converter = AsyncMock()
        converter.convert.return_value = _converted(1_500_000)
        with pytest.raises(TypedEngineError):
            await _adapter(converter).prepare_for_upload(_image(2_000_000), "pinterest")

    @pytest.mark.asyncio
    async def test_under_limit_is_unchanged(self):
        converter = AsyncMock()
        image = _image(999_999)
        result = await _adapter(converter).prepare_for_upload(image, "pinterest")

        converter.convert.assert_not_awaited()
        assert result.data_url == image.data_url
        assert result.blob == b"original-bytes"

    @pytest.mark.asyncio
    async def test_exactly_at_limit_is_unchanged(self):
        converter = AsyncMock()
        result = await _adapter(converter).prepare_for_upload(_image(1_000_000), "pinterest")
        converter.convert.assert_not_awaited()
        assert result.size == 1_000_000

    @pytest.mark.asyncio
    async def test_no_limit_without_blob(self):
        converter = AsyncMock()
        image = _image(50_000_000)
        result = await _adapter(converter).prepare_for_upload(image, "nope", set_blob=False)
        converter.convert.assert_not_awaited()
        assert result is image

    @pytest.mark.asyncio
    async def test_target_and_new_type_forwarded(self):
        converter = AsyncMock()
        converter.convert.return_value = _converted(400_000)
        await _adapter(converter).prepare_for_upload(
            _image(600_000), "bing", target="api", new_type="image/jpeg", set_blob=False
        )
        kwargs = converter.convert.await_args.kwargs
        assert kwargs == {"max_size": 500_000, "new_type": "image/jpeg", "set_blob": False}


class TestWithPillow:
    @pytest.mark.asyncio
    async def test_decompression_bomb_is_typed_error(self, monkeypatch):
        img = Image.frombytes("RGB", (200, 200), os.urandom(200 * 200 * 3))
        buffer = io.BytesIO()
        img.save(buffer, format="PNG")
        data = buffer.getvalue()
        image = ImageRecord(bytes_to_data_url(data, "image/png"), "bomb.png", "image/png", len(data))
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)

        adapter = ImageAdapter(
            converter=PillowImageConverter(),
            catalog=MessageCatalog("en"),
            limits={"pinterest": 1000},
        )
        with pytest.raises(TypedEngineError) as exc:
            await adapter.prepare_for_upload(image, "pinterest")
        assert exc.value.message == MessageCatalog("en").large_image_message("pinterest", 1000)
