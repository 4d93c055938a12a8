"""Identity token codec: HS256 JWTs carrying a user's tenant and role.

Tokens are stateless: there is no revocation list, so a token stays valid
under its original claims until it expires.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import time
from datetime import datetime, timezone

from notely.core.constants import DEFAULT_TOKEN_EXPIRY_HOURS, JWT_ALGORITHM
from notely.core.exceptions import InvalidTokenError
from notely.core.logging import get_logger
from notely.core.types import Identity, Role

log = get_logger(__name__)

_REQUIRED_CLAIMS = ("userId", "tenantId", "role", "tenantSlug", "exp")


class JWTManager:
    """Minimal JWT implementation (HS256) over a symmetric secret."""

    def __init__(self, secret: str, expiry_hours: int = DEFAULT_TOKEN_EXPIRY_HOURS) -> None:
        self._secret: str = secret
        self._expiry_hours: int = expiry_hours

    @property
    def expiry_seconds(self) -> int:
        return self._expiry_hours * 3600

    def issue(self, user_id: str, tenant_id: str, role: Role, tenant_slug: str) -> str:
        """Create a signed token for the given claims, expiring after the configured window."""
        now = int(time.time())
        payload = {
            "userId": user_id,
            "tenantId": tenant_id,
            "role": role.value,
            "tenantSlug": tenant_slug,
            "iat": now,
            "exp": now + self.expiry_seconds,
        }

        header = self._b64url_encode(
            json.dumps({"alg": JWT_ALGORITHM, "typ": "JWT"}).encode()
        )
        body = self._b64url_encode(json.dumps(payload).encode())
        signature = self._sign(f"{header}.{body}")

        return f"{header}.{body}.{signature}"

    def verify(self, token: str) -> Identity:
        """Verify signature and expiry and return the embedded identity.

        Raises:
            InvalidTokenError: malformed token, bad signature, missing claims
                or expired.
        """
        parts = token.split(".")
        if len(parts) != 3:
            raise InvalidTokenError("Malformed token")

        header_b64, body_b64, sig = parts
        expected_sig = self._sign(f"{header_b64}.{body_b64}")

        # compare_digest rejects non-ASCII str, and header values may carry latin-1
        if not hmac.compare_digest(sig.encode(), expected_sig.encode()):
            log.warning("jwt_invalid_signature")
            raise InvalidTokenError("Signature mismatch")

        try:
            header = json.loads(self._b64url_decode(header_b64))
            payload = json.loads(self._b64url_decode(body_b64))
        except (json.JSONDecodeError, ValueError) as exc:
            log.warning("jwt_decode_error")
            raise InvalidTokenError("Undecodable token") from exc

        if not isinstance(header, dict) or header.get("alg") != JWT_ALGORITHM:
            raise InvalidTokenError("Unsupported algorithm")
        if not isinstance(payload, dict) or any(c not in payload for c in _REQUIRED_CLAIMS):
            raise InvalidTokenError("Missing claims")

        exp = payload["exp"]
        if not isinstance(exp, int) or int(time.time()) >= exp:
            log.debug("jwt_expired", user_id=payload.get("userId"))
            raise InvalidTokenError("Token expired")

        try:
            role = Role(payload["role"])
        except ValueError as exc:
            raise InvalidTokenError("Unknown role") from exc

        return Identity(
            user_id=str(payload["userId"]),
            tenant_id=str(payload["tenantId"]),
            role=role,
            tenant_slug=str(payload["tenantSlug"]),
            expires_at=datetime.fromtimestamp(exp, tz=timezone.utc),
        )

    def _sign(self, message: str) -> str:
        sig_bytes = hmac.new(
            self._secret.encode(),
            message.encode(),
            hashlib.sha256,
        ).digest()
        return self._b64url_encode(sig_bytes)

    @staticmethod
    def _b64url_encode(data: bytes) -> str:
        return base64.urlsafe_b64encode(data).rstrip(b"=").decode()

    @staticmethod
    def _b64url_decode(s: str) -> bytes:
        padding = 4 - len(s) % 4
        if padding != 4:
            s += "=" * padding
        return base64.urlsafe_b64decode(s)
