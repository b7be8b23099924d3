from __future__ import annotations

import asyncio
import io
from dataclasses import replace
from pathlib import Path

import pytest
from fastapi import UploadFile

from src.talent_cms.config import load_upload_limits
from src.talent_cms.exceptions import PayloadTooLargeError, UnsupportedMediaError
from src.talent_cms.media import upload_receiver
from src.talent_cms.media.media_storage import MediaStore
from src.talent_cms.media.upload_receiver import UploadReceiver
from src.talent_cms.slots.slot_kinds import CATEGORY, FEATURED_TALENT, HOME_VIDEO


def _upload(name: str, content: bytes = b"payload") -> UploadFile:
    return UploadFile(file=io.BytesIO(content), filename=name)


def _receiver(media: MediaStore, **limits) -> UploadReceiver:
    return UploadReceiver(limits=replace(load_upload_limits(), chunk_size_bytes=1024, **limits), media=media)


@pytest.mark.unit
def test_receive_stores_file_under_timestamped_name(media: MediaStore) -> None:
    receiver = _receiver(media)

    upload = asyncio.run(receiver.receive(HOME_VIDEO, _upload("My Clip.MP4", b"x" * 3000)))

    assert upload is not None
    assert upload.temp_path.parent == media.directory(HOME_VIDEO)
    assert upload.filename.endswith("-My_Clip.MP4")
    assert upload.filename.split("-", 1)[0].isdigit()
    assert upload.size_bytes == 3000
    assert upload.extension == ".mp4"
    assert upload.temp_path.read_bytes() == b"x" * 3000


@pytest.mark.unit
def test_receive_without_file_returns_none(media: MediaStore) -> None:
    receiver = _receiver(media)

    assert asyncio.run(receiver.receive(CATEGORY, None)) is None
    assert asyncio.run(receiver.receive(CATEGORY, _upload(""))) is None


@pytest.mark.unit
def test_receive_rejects_unsupported_extension(media: MediaStore) -> None:
    receiver = _receiver(media)

    with pytest.raises(UnsupportedMediaError):
        asyncio.run(receiver.receive(CATEGORY, _upload("avatar.gif")))
    with pytest.raises(UnsupportedMediaError):
        asyncio.run(receiver.receive(HOME_VIDEO, _upload("poster.png")))

    assert not media.directory(CATEGORY).exists() or not any(media.directory(CATEGORY).iterdir())


@pytest.mark.unit
def test_receive_rejects_oversized_file_and_leaves_nothing(media: MediaStore) -> None:
    receiver = _receiver(media, avatar_limit_mb=1)

    with pytest.raises(PayloadTooLargeError):
        asyncio.run(receiver.receive(CATEGORY, _upload("big.png", b"x" * (1024 * 1024 + 1))))

    assert list(media.directory(CATEGORY).iterdir()) == []


@pytest.mark.unit
def test_receive_many_discards_earlier_files_when_one_is_rejected(media: MediaStore) -> None:
    receiver = _receiver(media)

    with pytest.raises(UnsupportedMediaError):
        asyncio.run(
            receiver.receive_many(
                FEATURED_TALENT,
                {"profile_img": _upload("face.jpg"), "image1": _upload("notes.txt")},
            )
        )

    assert list(media.directory(FEATURED_TALENT).iterdir()) == []


@pytest.mark.unit
def test_same_name_uploads_get_distinct_filenames(media: MediaStore) -> None:
    receiver = _receiver(media)

    async def receive_twice():
        first = await receiver.receive(CATEGORY, _upload("a.png"))
        second = await receiver.receive(CATEGORY, _upload("a.png"))
        return first, second

    first, second = asyncio.run(receive_twice())

    assert first.filename != second.filename
    assert first.temp_path.exists() and second.temp_path.exists()


@pytest.mark.unit
def test_reservation_never_reuses_an_existing_file(media: MediaStore, monkeypatch) -> None:
    receiver = _receiver(media)
    monkeypatch.setattr(upload_receiver.time, "time", lambda: 1_700_000_000.0)
    taken = media.ensure_directory(CATEGORY) / "1700000000000-a.png"
    taken.write_bytes(b"other worker")
    # another process created the file between a check and the open
    monkeypatch.setattr(Path, "exists", lambda self: False)

    upload = asyncio.run(receiver.receive(CATEGORY, _upload("a.png", b"mine")))

    assert upload.filename == "1700000000001-a.png"
    assert taken.read_bytes() == b"other worker"
    assert upload.temp_path.read_bytes() == b"mine"
