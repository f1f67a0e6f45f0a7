"""
vidshare.services._shared.ports
===============================

Ports (hexagonal interfaces) the service layer depends on.

- :mod:`token_provider`: :class:`~.TokenProvider`, signing and verifying the
  access/rotation token pair.
- :mod:`media_store`: :class:`~.MediaStore`, the external host for uploaded
  media, plus :class:`~.InMemoryMediaStore` for tests and local runs.

Concrete adapters live under ``vidshare.infra``.
"""

from __future__ import annotations

from .media_store import InMemoryMediaStore, MediaStore, MediaUploadError, UploadedMedia
from .token_provider import TokenDecodeError, TokenProvider

__all__ = [
    "InMemoryMediaStore",
    "MediaStore",
    "MediaUploadError",
    "TokenDecodeError",
    "TokenProvider",
    "UploadedMedia",
]
