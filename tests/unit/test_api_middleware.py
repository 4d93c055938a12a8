"""Tests for the bearer-token guard: header parsing and 401 outcomes."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from notely.api.middleware import get_current_identity, parse_authorization
from notely.auth.tokens import JWTManager
from notely.core.exceptions import Unauthenticated
from notely.core.types import Role


def _request(authorization: str | None) -> MagicMock:
    request = MagicMock()
    request.headers.get.return_value = authorization
    request.url.path = "/notes"
    return request


class TestParseAuthorization:
    def test_bearer(self) -> None:
        assert parse_authorization("Bearer abc.def.ghi") == ("Bearer", "abc.def.ghi")

    def test_missing(self) -> None:
        assert parse_authorization(None) is None
        assert parse_authorization("") is None

    def test_scheme_without_credential(self) -> None:
        assert parse_authorization("Bearer") is None
        assert parse_authorization("Bearer   ") is None


class TestGetCurrentIdentity:
    @pytest.mark.asyncio
    async def test_valid_bearer_token(self, jwt_manager: JWTManager) -> None:
        token = jwt_manager.issue(user_id="u1", tenant_id="t1", role=Role.ADMIN, tenant_slug="acme")
        identity = await get_current_identity(_request(f"Bearer {token}"), jwt=jwt_manager)
        assert identity.user_id == "u1"
        assert identity.role is Role.ADMIN

    @pytest.mark.asyncio
    async def test_no_header(self, jwt_manager: JWTManager) -> None:
        with pytest.raises(Unauthenticated) as exc_info:
            await get_current_identity(_request(None), jwt=jwt_manager)
        assert exc_info.value.message == "No token"
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_token(self, jwt_manager: JWTManager) -> None:
        with pytest.raises(Unauthenticated) as exc_info:
            await get_current_identity(_request("Bearer bad-token"), jwt=jwt_manager)
        assert exc_info.value.message == "Invalid token"

    @pytest.mark.asyncio
    async def test_wrong_scheme(self, jwt_manager: JWTManager) -> None:
        token = jwt_manager.issue(user_id="u1", tenant_id="t1", role=Role.MEMBER, tenant_slug="acme")
        with pytest.raises(Unauthenticated) as exc_info:
            await get_current_identity(_request(f"Basic {token}"), jwt=jwt_manager)
        assert exc_info.value.message == "Invalid token"

    @pytest.mark.asyncio
    async def test_token_from_other_secret(self, jwt_manager: JWTManager) -> None:
        token = JWTManager(secret="other").issue(
            user_id="u1", tenant_id="t1", role=Role.ADMIN, tenant_slug="acme"
        )
        with pytest.raises(Unauthenticated):
            await get_current_identity(_request(f"Bearer {token}"), jwt=jwt_manager)
