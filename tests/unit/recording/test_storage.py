"""Tests for filesystem blob storage."""

import pytest

from activityrec.core.modules.recording.storage import BlobStorage


@pytest.fixture
def storage(tmp_path):
    return BlobStorage(tmp_path / "blobs")


class TestBlobStorage:
    def test_root_created(self, tmp_path):
        BlobStorage(tmp_path / "nested" / "blobs")
        assert (tmp_path / "nested" / "blobs").is_dir()

    def test_write_stores_content(self, storage):
        path = storage.write("recording-1-1.webm", b"data")
        assert path.read_bytes() == b"data"
        assert storage.get_path("recording-1-1.webm").is_file()

    def test_write_never_overwrites(self, storage):
        storage.write("recording-1-1.webm", b"first")
        with pytest.raises(FileExistsError):
            storage.write("recording-1-1.webm", b"second")
        assert storage.get_path("recording-1-1.webm").read_bytes() == b"first"

    def test_delete_present_blob(self, storage):
        storage.write("recording-1-1.webm", b"data")
        assert storage.delete("recording-1-1.webm") is True
        assert not storage.get_path("recording-1-1.webm").exists()

    def test_delete_missing_blob_tolerated(self, storage):
        assert storage.delete("recording-missing.webm") is False

    @pytest.mark.parametrize("key", ["", ".", "..", "../escape.webm", "sub/dir.webm", "/etc/passwd", "a\\b.webm"])
    def test_keys_outside_root_rejected(self, storage, key):
        with pytest.raises(ValueError, match="Invalid storage key"):
            storage.get_path(key)
