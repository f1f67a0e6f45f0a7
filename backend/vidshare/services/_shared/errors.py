"""
Domain-level exceptions used within the service layer.

These exceptions are framework-agnostic: they never depend on Flask or HTTP.
``BaseService.translate_exceptions`` maps them to the API errors defined in
``vidshare.core.errors``.
"""

from __future__ import annotations

from dataclasses import dataclass


class ServiceError(Exception):
    """
    Base class for all service-level errors (400 unless a subclass says otherwise).
    """


class InvalidIdentifierError(ServiceError):
    """Raised when a path identifier cannot be parsed, e.g. ``Invalid video ID``."""

    def __init__(self, kind: str) -> None:
        self.kind = kind
        super().__init__(f"Invalid {kind} ID")


class AuthenticationError(ServiceError):
    """Raised when credentials or tokens are missing, invalid or stale."""

    def __init__(self, message: str = "Unauthorized request") -> None:
        super().__init__(message)


class AuthorizationError(ServiceError):
    """Raised when the actor may not act on the resource."""

    def __init__(self, message: str = "You are not allowed to perform this action") -> None:
        super().__init__(message)


@dataclass(slots=True, eq=False)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found.

    :param entity: Entity name (e.g., "Video").
    :param key: Identifier or search key.
    :param message: Optional client-facing message overriding the default.
    """

    entity: str
    key: str | int | None = None
    message: str | None = None

    def __str__(self) -> str:
        return self.message or f"{self.entity} not found"


@dataclass(slots=True, eq=False)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :param detail: Short human-readable explanation.
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return self.detail


class UpstreamError(ServiceError):
    """Raised when the media host (or another collaborator) fails a write."""

    def __init__(self, message: str = "Upstream service failed") -> None:
        super().__init__(message)
