"""Unit tests for storage records."""

from conftest import image_message, task_message

from revsearch.models import ImageRecord, SearchTask


def test_task_from_message():
    task = SearchTask.from_message(task_message("img-9", asset_type="url"))
    assert task.image_id == "img-9"
    assert task.asset_type == "url"
    assert task.session == {}


def test_image_from_message_keeps_declared_size():
    image = ImageRecord.from_message(image_message(b"abc", size=2_000_000))
    assert image.size == 2_000_000
    assert image.filename == "cat.png"
    assert image.mime_type == "image/png"
    assert image.blob is None


def test_image_size_defaults_to_payload_length():
    msg = image_message(b"abcdef")
    del msg["imageSize"]
    assert ImageRecord.from_message(msg).size == 6


def test_with_blob_materializes_once():
    image = ImageRecord.from_message(image_message(b"pixels"))
    with_blob = image.with_blob()
    assert with_blob.blob == b"pixels"
    assert with_blob.data_url == image.data_url
    assert with_blob.with_blob() is with_blob


def test_message_roundtrip_fields():
    msg = image_message(b"xyz")
    assert ImageRecord.from_message(msg).to_message() == msg
