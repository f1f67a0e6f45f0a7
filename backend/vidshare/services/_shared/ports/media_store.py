from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Protocol


class MediaUploadError(Exception):
    """Raised by a media store when the host rejects or fails an upload."""


@dataclass(frozen=True, slots=True)
class UploadedMedia:
    """
    Result of a successful upload.

    :param url: Public (HTTPS) URL of the stored asset.
    :param public_id: Host-side identifier, used for deletion.
    :param resource_type: ``"image"``, ``"video"`` or ``"raw"``.
    :param duration: Length in seconds for audio/video assets.
    """

    url: str
    public_id: str
    resource_type: str = "image"
    duration: float | None = None


class MediaStore(Protocol):
    """Port for the external object store holding avatars, thumbnails and videos."""

    def upload(self, path: str) -> UploadedMedia: ...


_VIDEO_EXTENSIONS = {".mp4", ".mov", ".mkv", ".webm", ".avi"}


@dataclass
class InMemoryMediaStore:
    """Media store double that records uploads instead of calling a host.

    Set ``fail_uploads`` to simulate a host outage.
    """

    video_duration: float = 42.0
    fail_uploads: bool = False
    uploads: list[UploadedMedia] = field(default_factory=list)

    def upload(self, path: str) -> UploadedMedia:
        if self.fail_uploads:
            raise MediaUploadError("media host unavailable")
        if not os.path.isfile(path):
            raise MediaUploadError(f"nothing to upload at {path!r}")
        name = os.path.basename(path)
        is_video = os.path.splitext(name)[1].lower() in _VIDEO_EXTENSIONS
        public_id = f"vidshare/{len(self.uploads) + 1}-{name}"
        media = UploadedMedia(
            url=f"https://media.example.test/{public_id}",
            public_id=public_id,
            resource_type="video" if is_video else "image",
            duration=self.video_duration if is_video else None,
        )
        self.uploads.append(media)
        return media
