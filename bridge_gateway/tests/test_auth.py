"""Unit tests for gateway authentication."""

import time

import jwt
import pytest
from fastapi import HTTPException

from bridge_gateway.infrastructure.auth import get_current_client, verify_api_token, verify_jwt_token

SECRET = "jwt-test-secret"


@pytest.fixture
def auth_env(monkeypatch):
    monkeypatch.setenv("GATEWAY_API_TOKEN", "fixed-token")
    monkeypatch.setenv("JWT_SECRET", SECRET)
    monkeypatch.delenv("MI_TOKEN_SECRETO", raising=False)


@pytest.fixture
def no_auth_env(monkeypatch):
    for name in ("GATEWAY_API_TOKEN", "MI_TOKEN_SECRETO", "JWT_SECRET"):
        monkeypatch.delenv(name, raising=False)


def make_token(**claims) -> str:
    payload = {"userId": 7, "email": "ada@example.com", "exp": int(time.time()) + 3600}
    payload.update(claims)
    return jwt.encode(payload, SECRET, algorithm="HS256")


class TestVerifyApiToken:
    """Test fixed token verification."""

    def test_matching_token(self, auth_env):
        assert verify_api_token("fixed-token") is True

    def test_wrong_token(self, auth_env):
        assert verify_api_token("other") is False

    def test_missing_token(self, auth_env):
        assert verify_api_token(None) is False

    def test_legacy_env_name(self, monkeypatch, no_auth_env):
        monkeypatch.setenv("MI_TOKEN_SECRETO", "legacy")

        assert verify_api_token("legacy") is True


class TestVerifyJwt:
    """Test JWT verification."""

    def test_valid_token_returns_claims(self, auth_env):
        claims = verify_jwt_token(make_token())

        assert claims["userId"] == 7

    def test_expired_token(self, auth_env):
        with pytest.raises(HTTPException) as exc_info:
            verify_jwt_token(make_token(exp=int(time.time()) - 10))

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail["code"] == "INVALID_TOKEN"

    def test_wrong_signature(self, auth_env):
        token = jwt.encode({"userId": 1}, "another-secret", algorithm="HS256")

        with pytest.raises(HTTPException) as exc_info:
            verify_jwt_token(token)

        assert exc_info.value.status_code == 401

    def test_not_configured(self, no_auth_env):
        with pytest.raises(HTTPException) as exc_info:
            verify_jwt_token("anything")

        assert exc_info.value.status_code == 500


class TestGetCurrentClient:
    """Test the auth dependency priority order."""

    @pytest.mark.asyncio
    async def test_fixed_token(self, auth_env):
        result = await get_current_client(x_api_token="fixed-token", authorization=None)

        assert result["auth_type"] == "fixed_token"

    @pytest.mark.asyncio
    async def test_bearer_jwt(self, auth_env):
        result = await get_current_client(x_api_token=None, authorization=f"Bearer {make_token()}")

        assert result["auth_type"] == "jwt"
        assert result["user"]["email"] == "ada@example.com"

    @pytest.mark.asyncio
    async def test_wrong_fixed_token_falls_back_to_jwt(self, auth_env):
        result = await get_current_client(x_api_token="wrong", authorization=f"Bearer {make_token()}")

        assert result["auth_type"] == "jwt"

    @pytest.mark.asyncio
    async def test_invalid_jwt_rejected(self, auth_env):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_client(x_api_token=None, authorization="Bearer not-a-jwt")

        assert exc_info.value.detail["code"] == "INVALID_TOKEN"

    @pytest.mark.asyncio
    async def test_nothing_supplied(self, auth_env):
        with pytest.raises(HTTPException) as exc_info:
            await get_current_client(x_api_token=None, authorization=None)

        assert exc_info.value.status_code == 401
        assert exc_info.value.detail["code"] == "UNAUTHORIZED"

    @pytest.mark.asyncio
    async def test_auth_disabled_allows_anonymous(self, no_auth_env):
        result = await get_current_client(x_api_token=None, authorization=None)

        assert result == {"auth_type": "anonymous", "user": None}

    @pytest.mark.asyncio
    async def test_bearer_without_jwt_secret_is_server_misconfiguration(self, monkeypatch, no_auth_env):
        monkeypatch.setenv("GATEWAY_API_TOKEN", "fixed-token")

        with pytest.raises(HTTPException) as exc_info:
            await get_current_client(x_api_token=None, authorization="Bearer some.jwt.value")

        assert exc_info.value.status_code == 500
        assert exc_info.value.detail["code"] == "AUTH_NOT_CONFIGURED"
