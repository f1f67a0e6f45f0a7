"""Unit tests for the Cloudinary adapter, upload staging and the in-memory double."""

from __future__ import annotations

import io
import os

import cloudinary.exceptions
import cloudinary.uploader
import pytest
from werkzeug.datastructures import FileStorage

from vidshare.infra.media.cloudinary_media_store import CloudinaryMediaStore
from vidshare.infra.media.staging import staged_upload
from vidshare.services._shared.ports import InMemoryMediaStore, MediaUploadError


@pytest.fixture()
def store() -> CloudinaryMediaStore:
    return CloudinaryMediaStore.from_mapping(
        {
            "CLOUDINARY_CLOUD_NAME": "demo",
            "CLOUDINARY_API_KEY": "key",
            "CLOUDINARY_API_SECRET": "secret",
        }
    )


class TestCloudinaryMediaStore:
    def test_upload_maps_response(self, store, monkeypatch):
        calls = []

        def fake_upload(path, **options):
            calls.append((path, options))
            return {
                "secure_url": "https://res.cloudinary.com/demo/video/upload/clip.mp4",
                "public_id": "clip",
                "resource_type": "video",
                "duration": 12.5,
            }

        monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)

        media = store.upload("/tmp/clip.mp4")

        assert media.url.endswith("clip.mp4")
        assert media.public_id == "clip"
        assert media.resource_type == "video"
        assert media.duration == 12.5
        path, options = calls[0]
        assert path == "/tmp/clip.mp4"
        assert options["resource_type"] == "auto"
        assert options["cloud_name"] == "demo"

    def test_host_error_becomes_upload_error(self, store, monkeypatch):
        def failing_upload(path, **options):
            raise cloudinary.exceptions.Error("quota exceeded")

        monkeypatch.setattr(cloudinary.uploader, "upload", failing_upload)

        with pytest.raises(MediaUploadError, match="quota exceeded"):
            store.upload("/tmp/a.png")

    def test_missing_url_is_an_error(self, store, monkeypatch):
        monkeypatch.setattr(cloudinary.uploader, "upload", lambda path, **options: {})
        with pytest.raises(MediaUploadError):
            store.upload("/tmp/a.png")

    def test_unconfigured_store_refuses(self):
        with pytest.raises(MediaUploadError, match="not configured"):
            CloudinaryMediaStore.from_mapping({}).upload("/tmp/a.png")


class TestStagedUpload:
    def test_file_removed_after_block(self, tmp_path):
        upload = FileStorage(stream=io.BytesIO(b"data"), filename="../../My Avatar.png")

        with staged_upload(upload, str(tmp_path)) as staged:
            assert os.path.isfile(staged.path)
            assert os.path.dirname(staged.path) == str(tmp_path)
            assert staged.filename == "My_Avatar.png"

        assert not os.path.exists(staged.path)

    def test_file_removed_when_block_raises(self, tmp_path):
        upload = FileStorage(stream=io.BytesIO(b"data"), filename="a.png")

        with pytest.raises(RuntimeError), staged_upload(upload, str(tmp_path)) as staged:
            raise RuntimeError("boom")

        assert not os.path.exists(staged.path)
        assert os.listdir(tmp_path) == []

    @pytest.mark.parametrize("upload", [None, FileStorage(stream=io.BytesIO(b""), filename="")])
    def test_absent_upload_yields_none(self, tmp_path, upload):
        with staged_upload(upload, str(tmp_path)) as staged:
            assert staged is None


class TestInMemoryMediaStore:
    def test_records_uploads(self, tmp_path):
        video = tmp_path / "clip.mp4"
        video.write_bytes(b"x")
        store = InMemoryMediaStore(video_duration=9.0)

        media = store.upload(str(video))

        assert media.resource_type == "video"
        assert media.duration == 9.0
        assert store.uploads == [media]

    def test_simulated_outage(self, tmp_path):
        image = tmp_path / "a.png"
        image.write_bytes(b"x")
        with pytest.raises(MediaUploadError):
            InMemoryMediaStore(fail_uploads=True).upload(str(image))
