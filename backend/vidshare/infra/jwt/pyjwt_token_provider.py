from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from vidshare.services._shared.ports.token_provider import TokenDecodeError
from vidshare.services.auth.dto import AuthTokenConfig

ACCESS = "access"
REFRESH = "refresh"

_REQUIRED_CLAIMS = ["sub", "type", "iat", "exp", "jti"]


@dataclass(slots=True)
class PyJWTTokenProvider:
    """
    TokenProvider adapter on PyJWT.

    Access and rotation tokens are signed with their own secrets, so a token of
    one kind never verifies as the other even before the ``type`` claim is
    checked. Every token carries a random ``jti``; two tokens minted within
    the same second for the same user still differ.
    """

    cfg: AuthTokenConfig

    def _encode(
        self,
        *,
        identity: int | str,
        kind: str,
        secret: str,
        ttl: timedelta,
        extra: dict[str, Any] | None,
    ) -> str:
        now = datetime.now(UTC)
        payload: dict[str, Any] = dict(extra or {})
        # Reserved claims always win over caller-supplied ones.
        payload.update(
            {
                "sub": str(identity),
                "type": kind,
                "iat": now,
                "exp": now + ttl,
                "jti": uuid.uuid4().hex,
            }
        )
        return jwt.encode(payload, secret, algorithm=self.cfg.algorithm)

    def _decode(self, token: str, *, kind: str, secret: str) -> dict[str, Any]:
        try:
            claims = jwt.decode(
                token,
                secret,
                algorithms=[self.cfg.algorithm],
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenDecodeError("expired") from exc
        except jwt.InvalidTokenError as exc:
            raise TokenDecodeError("invalid") from exc
        if claims.get("type") != kind:
            raise TokenDecodeError("wrong_type")
        return claims

    def create_access_token(
        self, *, identity: int | str, additional_claims: dict[str, Any] | None = None
    ) -> str:
        return self._encode(
            identity=identity,
            kind=ACCESS,
            secret=self.cfg.access_secret,
            ttl=self.cfg.access_expires,
            extra=additional_claims,
        )

    def create_refresh_token(self, *, identity: int | str) -> str:
        return self._encode(
            identity=identity,
            kind=REFRESH,
            secret=self.cfg.refresh_secret,
            ttl=self.cfg.refresh_expires,
            extra=None,
        )

    def decode_access(self, token: str) -> dict[str, Any]:
        return self._decode(token, kind=ACCESS, secret=self.cfg.access_secret)

    def decode_refresh(self, token: str) -> dict[str, Any]:
        return self._decode(token, kind=REFRESH, secret=self.cfg.refresh_secret)
