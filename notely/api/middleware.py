"""Bearer-token guard for FastAPI routes that need an identity."""

from __future__ import annotations

from fastapi import Depends, Request

from notely.auth.tokens import JWTManager
from notely.core.constants import MSG_INVALID_TOKEN, MSG_NO_TOKEN
from notely.core.exceptions import InvalidTokenError, Unauthenticated
from notely.core.logging import get_logger
from notely.core.types import Identity

log = get_logger(__name__)


def get_jwt(request: Request) -> JWTManager:
    """The token codec built by ``create_app`` from its settings."""
    return request.app.state.jwt


def parse_authorization(header: str | None) -> tuple[str, str] | None:
    """Split an ``Authorization`` header into ``(scheme, credential)``.

    Returns None when there is no credential at all.
    """
    if not header:
        return None
    scheme, _, credential = header.strip().partition(" ")
    credential = credential.strip()
    if not credential:
        return None
    return scheme, credential


async def get_current_identity(
    request: Request,
    jwt: JWTManager = Depends(get_jwt),
) -> Identity:
    """Verify the bearer token and return its claims.

    Trust is cryptographic only: the store is never consulted, so a user
    removed after login keeps access until the token expires.
    """
    parsed = parse_authorization(request.headers.get("authorization"))
    if parsed is None:
        raise Unauthenticated(MSG_NO_TOKEN)

    scheme, token = parsed
    if scheme.lower() != "bearer":
        raise Unauthenticated(MSG_INVALID_TOKEN)

    try:
        return jwt.verify(token)
    except InvalidTokenError as exc:
        log.info("token_rejected", reason=exc.message, path=request.url.path)
        raise Unauthenticated(MSG_INVALID_TOKEN) from exc
