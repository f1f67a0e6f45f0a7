"""
AuthService
===========

Session lifecycle for an identity: login, access verification, single-use
rotation and logout.

Each user has at most one live rotation token, stored on its row. Issuing a
pair overwrites it, so a newer login silently invalidates the previous
session, and a rotation token that no longer matches the stored copy is
rejected as "expired or used".
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError

from vidshare.models.user import User
from vidshare.services._shared.base import BaseService, ServiceContext
from vidshare.services._shared.errors import (
    AuthenticationError,
    NotFoundError,
    ServiceError,
    UpstreamError,
)
from vidshare.services._shared.ports.token_provider import TokenDecodeError, TokenProvider
from vidshare.services.auth.dto import LoginIn, LoginOut, TokenPairOut
from vidshare.services.identity.dto import UserPublicOut

logger = logging.getLogger(__name__)


class AuthService(BaseService):
    """
    Token Service: issues, verifies and rotates the access/rotation token pair.

    :param token_provider: Adapter signing and decoding both token kinds.
    """

    def __init__(self, *, token_provider: TokenProvider, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.tokens = token_provider

    # ------------------------------------------------------------------ #
    # Issue
    # ------------------------------------------------------------------ #

    def _issue_for(self, uow, user: User) -> TokenPairOut:
        access = self.tokens.create_access_token(
            identity=user.id,
            additional_claims={"username": user.username, "email": user.email},
        )
        refresh = self.tokens.create_refresh_token(identity=user.id)
        uow.users.set_refresh_token(user, refresh)
        return TokenPairOut(access_token=access, refresh_token=refresh)

    def issue(self, user_id: int) -> TokenPairOut:
        """
        Sign a new pair for ``user_id`` and store the rotation token.

        :raises NotFoundError: If the user does not exist.
        :raises UpstreamError: If the stored token cannot be written.
        """
        try:
            with self.rw_uow() as uow:
                user = uow.users.get(user_id)
                if user is None:
                    raise NotFoundError("User", user_id, "User does not exist")
                pair = self._issue_for(uow, user)
        except SQLAlchemyError as exc:
            logger.error("Token issue failed", extra={"user_id": user_id}, exc_info=True)
            raise UpstreamError("Something went wrong while generating tokens") from exc
        return pair

    # ------------------------------------------------------------------ #
    # Verify
    # ------------------------------------------------------------------ #

    def verify_access(self, token: str | None) -> UserPublicOut:
        """
        Resolve an access token into the public identity it belongs to.

        Never writes to the store.

        :raises AuthenticationError: ``Unauthorized request`` when ``token`` is
            missing; ``Invalid access token`` for anything that does not verify
            or names an unknown user.
        """
        if not token:
            raise AuthenticationError("Unauthorized request")
        try:
            claims = self.tokens.decode_access(token)
        except TokenDecodeError as exc:
            raise AuthenticationError("Invalid access token") from exc

        user_id = self._coerce_user_id(claims.get("sub"), message="Invalid access token")
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise AuthenticationError("Invalid access token")
            return UserPublicOut.from_model(user)

    # ------------------------------------------------------------------ #
    # Rotate
    # ------------------------------------------------------------------ #

    def rotate(self, refresh_token: str | None) -> TokenPairOut:
        """
        Exchange a rotation token for a new pair. Each rotation token works once.

        :raises AuthenticationError: When the token is missing, undecodable,
            names an unknown user, or no longer matches the stored copy.
        """
        if not refresh_token:
            raise AuthenticationError("Unauthorized request")
        try:
            claims = self.tokens.decode_refresh(refresh_token)
        except TokenDecodeError as exc:
            raise AuthenticationError("Invalid refresh token") from exc

        user_id = self._coerce_user_id(claims.get("sub"), message="Invalid refresh token")
        with self.rw_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise AuthenticationError("Invalid refresh token")
            if user.refresh_token != refresh_token:
                logger.warning("Stale rotation token presented", extra={"user_id": user_id})
                raise AuthenticationError("Refresh token is expired or used")
            pair = self._issue_for(uow, user)
        logger.info("Session rotated", extra={"user_id": user_id})
        return pair

    # ------------------------------------------------------------------ #
    # Login / Logout
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Check credentials and open a session.

        :raises ServiceError: When neither username nor email is given.
        :raises NotFoundError: ``User does not exist``.
        :raises AuthenticationError: ``Wrong password``.
        """
        if not (dto.username or dto.email):
            raise ServiceError("Username or email is required")

        with self.rw_uow() as uow:
            user = uow.users.get_by_username_or_email(username=dto.username, email=dto.email)
            if user is None:
                raise NotFoundError("User", dto.username or dto.email, "User does not exist")
            if not user.verify_password(dto.password):
                raise AuthenticationError("Wrong password")
            pair = self._issue_for(uow, user)
            out = LoginOut(user=UserPublicOut.from_model(user), tokens=pair)
        logger.info("User logged in", extra={"user_id": out.user.id})
        return out

    def logout(self, user_id: int) -> None:
        """Forget the stored rotation token. Idempotent."""
        with self.rw_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id, "User does not exist")
            uow.users.set_refresh_token(user, None)
        logger.info("User logged out", extra={"user_id": user_id})

    # ------------------------------------------------------------------ #
    # Utilities
    # ------------------------------------------------------------------ #

    @staticmethod
    def _coerce_user_id(subject: object, *, message: str) -> int:
        if isinstance(subject, int) and not isinstance(subject, bool):
            return subject
        if isinstance(subject, str) and subject.isascii() and subject.isdigit():
            return int(subject)
        raise AuthenticationError(message)
