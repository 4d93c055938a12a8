"""Tests for the identity token codec: issue/verify, tampering, expiry."""

from __future__ import annotations

import base64
import json
from unittest.mock import patch

import pytest

from notely.auth.tokens import JWTManager
from notely.core.exceptions import InvalidTokenError
from notely.core.types import Role


def _issue(jwt: JWTManager, role: Role = Role.MEMBER) -> str:
    return jwt.issue(user_id="u1", tenant_id="t1", role=role, tenant_slug="acme")


class TestIssueVerify:
    def test_round_trip_claims(self, jwt_manager: JWTManager) -> None:
        identity = jwt_manager.verify(_issue(jwt_manager, Role.ADMIN))
        assert identity.user_id == "u1"
        assert identity.tenant_id == "t1"
        assert identity.role is Role.ADMIN
        assert identity.tenant_slug == "acme"
        assert identity.expires_at is not None

    def test_payload_uses_wire_claim_names(self, jwt_manager: JWTManager) -> None:
        body = _issue(jwt_manager).split(".")[1]
        body += "=" * (-len(body) % 4)
        payload = json.loads(base64.urlsafe_b64decode(body))
        assert set(payload) == {"userId", "tenantId", "role", "tenantSlug", "iat", "exp"}
        assert payload["exp"] - payload["iat"] == 3600

    def test_expiry_follows_configuration(self) -> None:
        jwt = JWTManager(secret="s3cret", expiry_hours=2)
        assert jwt.expiry_seconds == 7200


class TestRejection:
    def test_malformed(self, jwt_manager: JWTManager) -> None:
        with pytest.raises(InvalidTokenError):
            jwt_manager.verify("not-a-token")

    def test_garbage_segments(self, jwt_manager: JWTManager) -> None:
        with pytest.raises(InvalidTokenError):
            jwt_manager.verify("invalid.token.here")

    def test_non_ascii_signature(self, jwt_manager: JWTManager) -> None:
        with pytest.raises(InvalidTokenError, match="Signature mismatch"):
            jwt_manager.verify("a.b.é")

    def test_tampered_payload(self, jwt_manager: JWTManager) -> None:
        parts = _issue(jwt_manager).split(".")
        forged = {"userId": "u1", "tenantId": "other", "role": "ADMIN", "tenantSlug": "x", "exp": 9999999999}
        parts[1] = base64.urlsafe_b64encode(json.dumps(forged).encode()).rstrip(b"=").decode()
        with pytest.raises(InvalidTokenError):
            jwt_manager.verify(".".join(parts))

    def test_wrong_secret(self, jwt_manager: JWTManager) -> None:
        token = _issue(jwt_manager)
        with pytest.raises(InvalidTokenError):
            JWTManager(secret="different-secret").verify(token)

    def test_expired(self, jwt_manager: JWTManager) -> None:
        with patch("notely.auth.tokens.time.time", return_value=1_000_000):
            token = _issue(jwt_manager)
        with patch("notely.auth.tokens.time.time", return_value=1_000_000 + 3600):
            with pytest.raises(InvalidTokenError, match="expired"):
                jwt_manager.verify(token)

    def test_valid_just_before_expiry(self, jwt_manager: JWTManager) -> None:
        with patch("notely.auth.tokens.time.time", return_value=1_000_000):
            token = _issue(jwt_manager)
        with patch("notely.auth.tokens.time.time", return_value=1_000_000 + 3599):
            assert jwt_manager.verify(token).user_id == "u1"
