from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import cloudinary.exceptions
import cloudinary.uploader

from vidshare.services._shared.ports.media_store import MediaUploadError, UploadedMedia

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CloudinaryMediaStore:
    """
    MediaStore adapter on the Cloudinary SDK.

    Credentials are passed on every call instead of through the SDK's global
    ``cloudinary.config``, so two apps in one process never share them.
    A store without a cloud name refuses uploads.
    """

    cloud_name: str | None
    api_key: str | None
    api_secret: str | None
    folder: str | None = None

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> CloudinaryMediaStore:
        return cls(
            cloud_name=config.get("CLOUDINARY_CLOUD_NAME"),
            api_key=config.get("CLOUDINARY_API_KEY"),
            api_secret=config.get("CLOUDINARY_API_SECRET"),
            folder=config.get("CLOUDINARY_FOLDER"),
        )

    def _credentials(self) -> dict[str, Any]:
        if not self.cloud_name:
            raise MediaUploadError("Cloudinary is not configured (CLOUDINARY_CLOUD_NAME)")
        return {
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self.api_secret,
        }

    def upload(self, path: str) -> UploadedMedia:
        options = self._credentials()
        if self.folder:
            options["folder"] = self.folder
        try:
            result = cloudinary.uploader.upload(path, resource_type="auto", **options)
        except (cloudinary.exceptions.Error, OSError) as exc:
            raise MediaUploadError(str(exc)) from exc

        url = result.get("secure_url") or result.get("url")
        if not url:
            raise MediaUploadError("Cloudinary returned no URL")
        duration = result.get("duration")
        logger.debug("Uploaded %s as %s", path, result.get("public_id"))
        return UploadedMedia(
            url=url,
            public_id=str(result.get("public_id", "")),
            resource_type=str(result.get("resource_type", "image")),
            duration=float(duration) if duration is not None else None,
        )
