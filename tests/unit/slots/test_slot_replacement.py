from __future__ import annotations

import pytest

from src.talent_cms.db.db_models import PopularCategoryModel, TestimonialModel as TestimonialRow
from src.talent_cms.exceptions import (
    DatabaseOperationError,
    NoFileProvidedError,
    PersistenceFailedError,
    SlotNotFoundError,
)
from src.talent_cms.media.media_storage import MediaStore
from src.talent_cms.slots.slot_kinds import BANNER, CATEGORY, HOME_VIDEO, TESTIMONIAL
from src.talent_cms.slots.slot_replacement import SlotReplacer
from src.talent_cms.slots.slots_models import SlotKey
from src.talent_cms.slots.slots_repository import SlotStore


class FailingWriteStore(SlotStore):
    """Reads normally, fails every write like a dropped database connection."""

    def write(self, key, filename):  # type: ignore[override]
        raise DatabaseOperationError("testimonial: database operation failed")


class RecordingMedia(MediaStore):
    def __init__(self, root, store: SlotStore, key: SlotKey) -> None:
        super().__init__(root)
        self.seen_at_removal: list[str | None] = []
        self._store = store
        self._key = key

    def remove(self, kind, filename):  # type: ignore[override]
        self.seen_at_removal.append(self._store.read(self._key).current_file)
        return super().remove(kind, filename)


@pytest.mark.unit
def test_scenario_a_empty_slot_adopts_upload(replacer: SlotReplacer, store, stage_upload) -> None:
    upload = stage_upload(HOME_VIDEO, "clip.mp4")

    result = replacer.replace(SlotKey.parse("homeVideo:1"), upload)

    assert result.to_payload() == {"newFile": "clip.mp4", "previousFile": None}
    assert store.read(HOME_VIDEO.key(1)).current_file == "clip.mp4"
    assert upload.temp_path.exists()


@pytest.mark.unit
def test_scenario_b_previous_file_deleted_after_commit(
    replacer: SlotReplacer, store, media, stage_upload
) -> None:
    old = stage_upload(BANNER, "old.png")
    store.write(BANNER.key(2), old.filename)
    new = stage_upload(BANNER, "new.png")

    result = replacer.replace(SlotKey.parse("banner:2"), new)

    assert result.to_payload() == {"newFile": "new.png", "previousFile": "old.png"}
    assert not media.path_for(BANNER, "old.png").exists()
    assert media.path_for(BANNER, "new.png").exists()


@pytest.mark.unit
def test_scenario_c_missing_row_discards_upload(replacer: SlotReplacer, store, stage_upload) -> None:
    upload = stage_upload(CATEGORY, "avatar.png")

    with pytest.raises(SlotNotFoundError):
        replacer.replace(SlotKey.parse("category:999"), upload)

    assert not upload.temp_path.exists()
    assert store.live_references(CATEGORY) == set()


@pytest.mark.unit
def test_scenario_d_failed_write_keeps_previous_file(
    session_factory, media, stage_upload
) -> None:
    with session_factory() as session:
        session.add(TestimonialRow(id=5, name="Kim", description="Great", avatar="a.png"))
        session.commit()
    previous = stage_upload(TESTIMONIAL, "a.png")
    upload = stage_upload(TESTIMONIAL, "b.png")
    failing = SlotReplacer(store=FailingWriteStore(session_factory), media=media)

    with pytest.raises(PersistenceFailedError):
        failing.replace(SlotKey.parse("testimonial:5"), upload)

    assert previous.temp_path.exists()
    assert SlotStore(session_factory).read(TESTIMONIAL.key(5)).current_file == "a.png"
    assert not upload.temp_path.exists()


@pytest.mark.unit
def test_previous_file_removed_only_after_new_reference_committed(
    store: SlotStore, media_root, stage_upload
) -> None:
    key = BANNER.key(1)
    stage_upload(BANNER, "before.png")
    store.write(key, "before.png")
    media = RecordingMedia(media_root, store, key)
    upload = stage_upload(BANNER, "after.png")

    SlotReplacer(store=store, media=media).replace(key, upload)

    assert media.seen_at_removal == ["after.png"]


@pytest.mark.unit
def test_replacing_with_same_file_is_a_no_op_on_disk(
    replacer: SlotReplacer, store, stage_upload
) -> None:
    upload = stage_upload(HOME_VIDEO, "clip.mp4")
    replacer.replace(HOME_VIDEO.key(1), upload)

    result = replacer.replace(HOME_VIDEO.key(1), upload)

    assert result.to_payload() == {"newFile": "clip.mp4", "previousFile": "clip.mp4"}
    assert upload.temp_path.exists()
    assert store.read(HOME_VIDEO.key(1)).current_file == "clip.mp4"


@pytest.mark.unit
def test_missing_upload_raises_without_side_effects(replacer: SlotReplacer, store) -> None:
    before = store.read(HOME_VIDEO.key(1))

    with pytest.raises(NoFileProvidedError):
        replacer.replace(HOME_VIDEO.key(1), None)

    assert store.read(HOME_VIDEO.key(1)) == before


@pytest.mark.unit
def test_stale_file_removal_failure_is_not_fatal(
    replacer: SlotReplacer, store, media, stage_upload, monkeypatch
) -> None:
    store.write(BANNER.key(1), "old.png")
    stage_upload(BANNER, "old.png")

    def broken_unlink(self, missing_ok=False):
        raise PermissionError("read-only filesystem")

    upload = stage_upload(BANNER, "new.png")
    monkeypatch.setattr(type(media.path_for(BANNER, "old.png")), "unlink", broken_unlink)

    result = replacer.replace(BANNER.key(1), upload)

    assert result.new_file == "new.png"
    assert store.read(BANNER.key(1)).current_file == "new.png"


@pytest.mark.unit
def test_clear_writes_none_then_deletes_file(replacer: SlotReplacer, store, media, stage_upload) -> None:
    upload = stage_upload(HOME_VIDEO, "clip.mp4")
    replacer.replace(HOME_VIDEO.key(1), upload)

    result = replacer.clear(HOME_VIDEO.key(1))

    assert result.to_payload() == {"newFile": None, "previousFile": "clip.mp4"}
    assert store.read(HOME_VIDEO.key(1)).current_file is None
    assert not upload.temp_path.exists()


@pytest.mark.unit
def test_release_keeps_files_still_referenced_elsewhere(
    replacer: SlotReplacer, session_factory, media, stage_upload
) -> None:
    shared = stage_upload(CATEGORY, "shared.png")
    own = stage_upload(CATEGORY, "own.png")
    with session_factory() as session:
        session.add(PopularCategoryModel(id=1, avatar="shared.png", title="Kids", gender="Boy"))
        session.commit()

    released = replacer.release(CATEGORY, ["shared.png", "own.png", None])

    assert released == ["own.png"]
    assert shared.temp_path.exists()
    assert not own.temp_path.exists()


@pytest.mark.unit
def test_concurrent_replacements_leave_orphan_that_reconcile_removes(
    session_factory, media, stage_upload
) -> None:
    with session_factory() as session:
        session.add(TestimonialRow(id=3, name="Lee", description="Nice", avatar="seed.png"))
        session.commit()
    stage_upload(TESTIMONIAL, "seed.png")
    key = TESTIMONIAL.key(3)
    first_upload = stage_upload(TESTIMONIAL, "first.png")
    second_upload = stage_upload(TESTIMONIAL, "second.png")

    class InterleavingStore(SlotStore):
        """Lets a second request run to completion between our read and write."""

        interleaved = False

        def read(self, slot_key):  # type: ignore[override]
            slot = super().read(slot_key)
            if not self.interleaved:
                self.interleaved = True
                SlotReplacer(store=SlotStore(session_factory), media=media).replace(
                    slot_key, second_upload
                )
            return slot

    SlotReplacer(store=InterleavingStore(session_factory), media=media).replace(key, first_upload)

    store = SlotStore(session_factory)
    assert store.read(key).current_file == "first.png"
    assert media.path_for(TESTIMONIAL, "second.png").exists()

    removed = SlotReplacer(store=store, media=media).reconcile(TESTIMONIAL)

    assert removed == ["second.png"]
    assert media.path_for(TESTIMONIAL, "first.png").exists()
