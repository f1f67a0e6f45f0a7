from __future__ import annotations

from typing import Any, Protocol


class TokenDecodeError(Exception):
    """Raised by a provider when a token is malformed, expired, forged or of the wrong type."""

    def __init__(self, reason: str = "invalid") -> None:
        self.reason = reason
        super().__init__(reason)


class TokenProvider(Protocol):
    """Port for signing and verifying the access/rotation token pair.

    Implementations sign access and rotation tokens with *different* secrets,
    so one kind can never be accepted in place of the other.
    """

    def create_access_token(
        self, *, identity: int | str, additional_claims: dict[str, Any] | None = None
    ) -> str: ...

    def create_refresh_token(self, *, identity: int | str) -> str: ...

    def decode_access(self, token: str) -> dict[str, Any]: ...

    def decode_refresh(self, token: str) -> dict[str, Any]: ...
