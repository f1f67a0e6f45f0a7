"""
IdentityService
===============

Aggregate service for the ``User`` aggregate:

- Registration (uniqueness first, uploads second, insert last)
- Account details, avatar and cover image
- Password lifecycle
- Channel profile and watch history reads

Token issuance lives in :class:`vidshare.services.auth.service.AuthService`.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError

from vidshare.models.user import User
from vidshare.services._shared.base import BaseService, ServiceContext
from vidshare.services._shared.dto import StagedFile
from vidshare.services._shared.errors import ConflictError, NotFoundError, ServiceError
from vidshare.services._shared.media import upload_or_fail
from vidshare.services._shared.ports.media_store import MediaStore
from vidshare.services.identity.dto import (
    ChannelProfileOut,
    UserPasswordChangeIn,
    UserPublicOut,
    UserRegisterIn,
    UserUpdateIn,
)
from vidshare.services.videos.dto import VideoOut

logger = logging.getLogger(__name__)

DUPLICATE_USER_MSG = "User with this email id or username already exists"


class IdentityService(BaseService):
    """
    Application service for the ``User`` aggregate.

    :param media_store: Host receiving avatar and cover uploads.
    """

    def __init__(self, *, media_store: MediaStore, ctx: ServiceContext | None = None) -> None:
        super().__init__(ctx=ctx)
        self.media = media_store

    # --------------------------------------------------------------------- #
    # Registration
    # --------------------------------------------------------------------- #

    def register(self, dto: UserRegisterIn) -> UserPublicOut:
        """
        Register a new user.

        Duplicates are rejected before anything is uploaded or written.

        :raises ServiceError: Missing fields or missing avatar (400).
        :raises ConflictError: Username or email already taken (409).
        :raises UpstreamError: The media host failed (500).
        """
        fields = (dto.username, dto.email, dto.full_name, dto.password)
        if any(not (value or "").strip() for value in fields):
            raise ServiceError("All fields are required")

        with self.ro_uow() as uow:
            if uow.users.exists_by_username_or_email(username=dto.username, email=dto.email):
                raise ConflictError("User", DUPLICATE_USER_MSG)

        if dto.avatar is None:
            raise ServiceError("Avatar is required")

        avatar = upload_or_fail(self.media, dto.avatar, message="Failed to upload avatar")
        cover_url = ""
        if dto.cover_image is not None:
            cover = upload_or_fail(
                self.media, dto.cover_image, message="Failed to upload cover image"
            )
            cover_url = cover.url

        try:
            with self.rw_uow() as uow:
                try:
                    user = User(
                        username=dto.username,
                        email=dto.email,
                        full_name=dto.full_name,
                        avatar=avatar.url,
                        cover_image=cover_url,
                    )
                    user.password = dto.password
                except ValueError as exc:
                    raise ServiceError(str(exc)) from exc
                uow.users.add(user)
                out = UserPublicOut.from_model(user)
        except IntegrityError as exc:
            # Lost a race with a concurrent registration.
            raise ConflictError("User", DUPLICATE_USER_MSG) from exc

        logger.info("User registered", extra={"user_id": out.id})
        return out

    # --------------------------------------------------------------------- #
    # Reads
    # --------------------------------------------------------------------- #

    def channel_profile(self, username: str, *, viewer_id: int | None) -> ChannelProfileOut:
        """
        :raises ServiceError: When ``username`` is blank.
        :raises NotFoundError: ``Channel does not exist``.
        """
        if not (username or "").strip():
            raise ServiceError("Username is missing")
        with self.ro_uow() as uow:
            row = uow.users.channel_profile(username, viewer_id=viewer_id)
            if row is None:
                raise NotFoundError("Channel", username, "Channel does not exist")
            user, subscribers, subscribed_to, is_subscribed = row
            return ChannelProfileOut(
                id=user.id,
                username=user.username,
                email=user.email,
                full_name=user.full_name,
                avatar=user.avatar,
                cover_image=user.cover_image or "",
                subscribers_count=int(subscribers or 0),
                subscribed_to_count=int(subscribed_to or 0),
                is_subscribed=bool(is_subscribed),
            )

    def watch_history(self, user_id: int) -> list[VideoOut]:
        with self.ro_uow() as uow:
            return [VideoOut.from_model(v) for v in uow.users.watch_history(user_id)]

    # --------------------------------------------------------------------- #
    # Updates
    # --------------------------------------------------------------------- #

    def change_password(self, dto: UserPasswordChangeIn) -> None:
        """
        :raises ServiceError: ``Invalid old password`` or an empty new password.
        """
        if not dto.new_password:
            raise ServiceError("New password is required")
        with self.rw_uow() as uow:
            user = uow.users.get(dto.user_id)
            if user is None:
                raise NotFoundError("User", dto.user_id, "User does not exist")
            if not user.verify_password(dto.old_password):
                raise ServiceError("Invalid old password")
            user.password = dto.new_password
            uow.users.flush()
        logger.info("Password changed", extra={"user_id": dto.user_id})

    def update_account(self, user_id: int, dto: UserUpdateIn) -> UserPublicOut:
        """
        :raises ServiceError: When neither field is provided.
        :raises ConflictError: When the new email belongs to someone else.
        """
        changes = {
            k: v for k, v in (("full_name", dto.full_name), ("email", dto.email)) if v is not None
        }
        if not changes:
            raise ServiceError("At least one of fullName or email is required")

        try:
            with self.rw_uow() as uow:
                user = uow.users.get(user_id)
                if user is None:
                    raise NotFoundError("User", user_id, "User does not exist")
                if "email" in changes and uow.users.email_taken_by_other(
                    changes["email"], user_id=user_id
                ):
                    raise ConflictError("User", "Email is already in use")
                try:
                    uow.users.assign_updates(user, changes)
                except ValueError as exc:
                    raise ServiceError(str(exc)) from exc
                out = UserPublicOut.from_model(user)
        except IntegrityError as exc:
            raise ConflictError("User", "Email is already in use") from exc
        return out

    def update_avatar(self, user_id: int, staged: StagedFile | None) -> UserPublicOut:
        if staged is None:
            raise ServiceError("Avatar file is missing")
        media = upload_or_fail(self.media, staged, message="Error while uploading avatar")
        return self._set_image(user_id, avatar=media.url)

    def update_cover_image(self, user_id: int, staged: StagedFile | None) -> UserPublicOut:
        if staged is None:
            raise ServiceError("Cover image file is missing")
        media = upload_or_fail(self.media, staged, message="Error while uploading cover image")
        return self._set_image(user_id, cover_image=media.url)

    def _set_image(self, user_id: int, **changes: str) -> UserPublicOut:
        with self.rw_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id, "User does not exist")
            uow.users.assign_updates(user, changes)
            return UserPublicOut.from_model(user)
