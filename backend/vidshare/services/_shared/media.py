"""Upload helper shared by services that push files to the media host."""

from __future__ import annotations

import logging

from vidshare.services._shared.dto import StagedFile
from vidshare.services._shared.errors import UpstreamError
from vidshare.services._shared.ports.media_store import MediaStore, MediaUploadError, UploadedMedia

logger = logging.getLogger(__name__)


def upload_or_fail(store: MediaStore, staged: StagedFile, *, message: str) -> UploadedMedia:
    """
    Push ``staged`` to the media host.

    Media uploaded earlier in the same use case is left in place when this
    one fails.

    :param message: Client-facing error text, e.g. ``"Failed to upload avatar"``.
    :raises UpstreamError: When the host fails or returns no URL.
    """
    try:
        media = store.upload(staged.path)
    except MediaUploadError as exc:
        logger.error("Media upload failed for %s: %s", staged.filename, exc)
        raise UpstreamError(message) from exc
    if not media.url:
        raise UpstreamError(message)
    return media
