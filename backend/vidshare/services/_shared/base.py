"""Base class shared by application services."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from vidshare.core import errors as api_errors
from vidshare.repositories.base import Pagination
from vidshare.services._shared.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ServiceError,
    UpstreamError,
)
from vidshare.services._shared.policies.common import is_owner, parse_positive_id
from vidshare.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


@dataclass(slots=True)
class ServiceContext:
    """
    Request-scoped data handed to services.

    :param actor_id: Authenticated user identifier.
    :param request_id: Correlation id for logging.
    """

    actor_id: int | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Open read-only and read-write units of work.
    * Translate service errors into API errors.
    * Shared guards: ownership, identifier parsing, pagination clamping.

    Services never touch the global session directly and never import Flask
    request objects; everything arrives as arguments or through ``ctx``.
    """

    DEFAULT_READ_ISOLATION = "READ COMMITTED"
    MAX_PAGE_SIZE = 100

    def __init__(self, *, ctx: ServiceContext | None = None) -> None:
        self.ctx = ctx or ServiceContext()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork()

    def ro_uow(self, *, isolation: str | None = None) -> SQLAlchemyReadOnlyUnitOfWork:
        return SQLAlchemyReadOnlyUnitOfWork(isolation_level=isolation or self.DEFAULT_READ_ISOLATION)

    # ----------------------- Validation utilities ---------------------------

    def ensure_pagination(
        self, *, page: int, limit: int, sort: Iterable[str] | None = None
    ) -> Pagination:
        """Clamp ``page``/``limit`` into range and build a :class:`Pagination`."""
        page = max(1, int(page))
        limit = min(max(1, int(limit)), self.MAX_PAGE_SIZE)
        return Pagination(page=page, limit=limit, sort=list(sort or []))

    @staticmethod
    def parse_identifier(raw: object, *, kind: str) -> int:
        """
        Parse a path identifier.

        :raises InvalidIdentifierError: ``Invalid <kind> ID`` when ``raw`` is
            not a positive integer.
        """
        return parse_positive_id(raw, kind=kind)

    def ensure_owner(self, actor_id: int | None, owner_id: int, *, msg: str | None = None) -> None:
        """
        :raises AuthorizationError: If ``actor_id`` does not own the resource.
        """
        if not is_owner(actor_id=actor_id, owner_id=owner_id):
            raise AuthorizationError(msg or "You are not allowed to modify this resource")

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map a service error onto its API error.

        :param exc: Exception raised within a service.
        :returns: The matching :class:`vidshare.core.errors.APIError`, or
            ``exc`` unchanged when it is not a service error.
        """
        if isinstance(exc, AuthenticationError):
            return api_errors.Unauthorized(str(exc))
        if isinstance(exc, AuthorizationError):
            return api_errors.Forbidden(str(exc))
        if isinstance(exc, NotFoundError):
            return api_errors.NotFound(str(exc))
        if isinstance(exc, ConflictError):
            return api_errors.Conflict(str(exc))
        if isinstance(exc, UpstreamError):
            return api_errors.UpstreamFailure(str(exc))
        # InvalidIdentifierError and any other ServiceError -> 400
        if isinstance(exc, ServiceError):
            return api_errors.ValidationError(str(exc))
        return exc
