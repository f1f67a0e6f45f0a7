"""Stage incoming multipart files on local disk for the duration of one request."""

from __future__ import annotations

import logging
import os
import uuid
from collections.abc import Iterator
from contextlib import contextmanager

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from vidshare.services._shared.dto import StagedFile

logger = logging.getLogger(__name__)


@contextmanager
def staged_upload(file: FileStorage | None, tmp_dir: str) -> Iterator[StagedFile | None]:
    """
    Save ``file`` under ``tmp_dir`` and yield a :class:`StagedFile`.

    The temporary file is removed when the block exits, whether it returned
    or raised. An absent or empty upload yields ``None``.
    """
    if file is None or not file.filename:
        yield None
        return

    os.makedirs(tmp_dir, exist_ok=True)
    name = secure_filename(file.filename) or "upload"
    path = os.path.join(tmp_dir, f"{uuid.uuid4().hex}-{name}")
    file.save(path)
    try:
        yield StagedFile(path=path, filename=name)
    finally:
        try:
            os.remove(path)
        except FileNotFoundError:
            pass
        except OSError:
            logger.warning("Could not remove staged upload %s", path, exc_info=True)
