from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from vidshare.services.identity.dto import UserPublicOut

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login. Either ``username`` or ``email`` identifies the user.

    :param password: Raw password (to be verified).
    """

    password: str
    username: str | None = None
    email: str | None = None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Access token plus the rotation token it was issued with.

    :param access_token: Encoded access JWT.
    :param refresh_token: Encoded rotation JWT (also stored on the user row).
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class LoginOut:
    user: UserPublicOut
    tokens: TokenPairOut


# ------------------------------ Config DTO -------------------------------- #


@dataclass(frozen=True, slots=True)
class AuthTokenConfig:
    """
    Token signing configuration, built once at startup.

    :param access_secret: Key signing access tokens.
    :param refresh_secret: Key signing rotation tokens.
    :param access_expires: Access token lifetime.
    :param refresh_expires: Rotation token lifetime.
    :param algorithm: JWS algorithm shared by both kinds.
    """

    access_secret: str
    refresh_secret: str
    access_expires: timedelta = timedelta(minutes=15)
    refresh_expires: timedelta = timedelta(days=7)
    algorithm: str = "HS256"

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> AuthTokenConfig:
        """Build from a Flask config mapping.

        :raises RuntimeError: When a secret is missing or both secrets are equal.
        """
        access_secret = config.get("ACCESS_TOKEN_SECRET")
        refresh_secret = config.get("REFRESH_TOKEN_SECRET")
        if not access_secret or not refresh_secret:
            raise RuntimeError("ACCESS_TOKEN_SECRET and REFRESH_TOKEN_SECRET must be set.")
        if access_secret == refresh_secret:
            raise RuntimeError("ACCESS_TOKEN_SECRET and REFRESH_TOKEN_SECRET must differ.")
        return cls(
            access_secret=str(access_secret),
            refresh_secret=str(refresh_secret),
            access_expires=timedelta(minutes=int(config.get("ACCESS_TOKEN_EXPIRES_MINUTES", 15))),
            refresh_expires=timedelta(days=int(config.get("REFRESH_TOKEN_EXPIRES_DAYS", 7))),
            algorithm=str(config.get("TOKEN_ALGORITHM", "HS256")),
        )
