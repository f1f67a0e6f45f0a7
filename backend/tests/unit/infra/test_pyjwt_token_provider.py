"""Unit tests for the PyJWT token provider."""

from __future__ import annotations

from datetime import timedelta

import jwt
import pytest
from freezegun import freeze_time

from vidshare.infra.jwt.pyjwt_token_provider import PyJWTTokenProvider
from vidshare.services._shared.ports.token_provider import TokenDecodeError
from vidshare.services.auth.dto import AuthTokenConfig

CFG = AuthTokenConfig(
    access_secret="unit-access-secret-0123456789abcdef",
    refresh_secret="unit-refresh-secret-0123456789abcdef",
    access_expires=timedelta(minutes=5),
    refresh_expires=timedelta(days=1),
)


@pytest.fixture()
def provider() -> PyJWTTokenProvider:
    return PyJWTTokenProvider(CFG)


def test_access_token_round_trip(provider):
    token = provider.create_access_token(identity=7, additional_claims={"username": "neo"})
    claims = provider.decode_access(token)
    assert claims["sub"] == "7"
    assert claims["type"] == "access"
    assert claims["username"] == "neo"
    assert {"iat", "exp", "jti"} <= claims.keys()


def test_reserved_claims_cannot_be_overridden(provider):
    token = provider.create_access_token(identity=7, additional_claims={"sub": "1", "type": "refresh"})
    claims = provider.decode_access(token)
    assert claims["sub"] == "7"
    assert claims["type"] == "access"


def test_consecutive_tokens_differ(provider):
    assert provider.create_refresh_token(identity=1) != provider.create_refresh_token(identity=1)


def test_kinds_do_not_cross_verify(provider):
    access = provider.create_access_token(identity=1)
    refresh = provider.create_refresh_token(identity=1)

    with pytest.raises(TokenDecodeError):
        provider.decode_refresh(access)
    with pytest.raises(TokenDecodeError):
        provider.decode_access(refresh)


def test_wrong_type_with_right_secret(provider):
    token = jwt.encode(
        {"sub": "1", "type": "refresh", "iat": 0, "exp": 4102444800, "jti": "x"},
        CFG.access_secret,
        algorithm="HS256",
    )
    with pytest.raises(TokenDecodeError) as exc_info:
        provider.decode_access(token)
    assert exc_info.value.reason == "wrong_type"


def test_foreign_secret_rejected(provider):
    foreign = PyJWTTokenProvider(
        AuthTokenConfig(
            access_secret="someone-elses-access-secret-0123456789",
            refresh_secret="someone-elses-refresh-secret-0123456789",
        )
    )
    with pytest.raises(TokenDecodeError) as exc_info:
        provider.decode_access(foreign.create_access_token(identity=1))
    assert exc_info.value.reason == "invalid"


def test_expired_token_rejected(provider):
    with freeze_time("2020-01-01 12:00:00"):
        token = provider.create_access_token(identity=1)
    with pytest.raises(TokenDecodeError) as exc_info:
        provider.decode_access(token)
    assert exc_info.value.reason == "expired"


@pytest.mark.parametrize("garbage", ["", "not-a-jwt", "a.b.c"])
def test_malformed_token_rejected(provider, garbage):
    with pytest.raises(TokenDecodeError):
        provider.decode_access(garbage)


def test_missing_required_claim_rejected(provider):
    token = jwt.encode({"sub": "1", "type": "access"}, CFG.access_secret, algorithm="HS256")
    with pytest.raises(TokenDecodeError):
        provider.decode_access(token)


class TestAuthTokenConfig:
    def test_from_mapping(self):
        cfg = AuthTokenConfig.from_mapping(
            {
                "ACCESS_TOKEN_SECRET": "a" * 32,
                "REFRESH_TOKEN_SECRET": "b" * 32,
                "ACCESS_TOKEN_EXPIRES_MINUTES": "30",
                "REFRESH_TOKEN_EXPIRES_DAYS": 2,
            }
        )
        assert cfg.access_expires == timedelta(minutes=30)
        assert cfg.refresh_expires == timedelta(days=2)

    @pytest.mark.parametrize(
        "mapping",
        [
            {"ACCESS_TOKEN_SECRET": "a" * 32},
            {"ACCESS_TOKEN_SECRET": "same" * 8, "REFRESH_TOKEN_SECRET": "same" * 8},
        ],
    )
    def test_rejects_missing_or_shared_secret(self, mapping):
        with pytest.raises(RuntimeError):
            AuthTokenConfig.from_mapping(mapping)
